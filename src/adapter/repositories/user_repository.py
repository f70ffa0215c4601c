from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.app.services.unit_of_work import PersistenceError
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        stmt = select(User).where(User.username == username)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc

    async def get_by_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Get user by unexpired reset token"""
        stmt = select(User).where(
            User.reset_token == token,
            User.reset_token_expires_at > now,
        )
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc

    async def create(self, user: User) -> User:
        """Create a new user"""
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc
        return user

    async def set_reset_token(
        self, user_id: UUID, token: str, expires_at: datetime
    ) -> None:
        """Overwrite the reset token and expiry with a single UPDATE"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(reset_token=token, reset_token_expires_at=expires_at)
        )
        try:
            await self.session.exec(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc

    async def redeem_reset_token(
        self, user_id: UUID, token: str, password_hash: str, now: datetime
    ) -> bool:
        """Compare-and-set: new password and cleared token, only if the token still matches"""
        stmt = (
            update(User)
            .where(
                User.id == user_id,
                User.reset_token == token,
                User.reset_token_expires_at > now,
            )
            .values(
                password_hash=password_hash,
                reset_token=None,
                reset_token_expires_at=None,
            )
        )
        try:
            result = await self.session.exec(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc
        return result.rowcount == 1

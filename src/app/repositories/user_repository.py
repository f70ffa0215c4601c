from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        pass

    @abstractmethod
    async def get_by_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Get user holding this reset token, only if it expires after `now`"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def set_reset_token(
        self, user_id: UUID, token: str, expires_at: datetime
    ) -> None:
        """Store a reset token and its expiry in one update, replacing any previous one"""
        pass

    @abstractmethod
    async def redeem_reset_token(
        self, user_id: UUID, token: str, password_hash: str, now: datetime
    ) -> bool:
        """
        Replace the password and clear the reset token in one conditional update.

        The update only applies while the stored token still equals `token`
        and has not expired at `now`.

        Returns:
            True if the record was updated, False if the token no longer matched
        """
        pass

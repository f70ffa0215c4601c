"""
Redeem Reset Use Case

Validates a password reset token, applies the new password and
invalidates the token.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.password_hasher import DEFAULT_HASH_ROUNDS, hash_password
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.domain.entities import utcnow
from .dtos import RedeemResetResponse


class RedeemResetUseCase:
    """
    Use case for redeeming a password reset token.

    Business Rules:
    - Token must match the stored token and expire strictly after now
    - Unknown and expired tokens are reported the same way
    - New password is hashed (SHA-256 then bcrypt) before it is stored, any length
    - Password update and token clearing happen in one conditional update,
      so a token can be redeemed only once
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hash_rounds: int = DEFAULT_HASH_ROUNDS,
        clock: Callable[[], datetime] = utcnow,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.hash_rounds = hash_rounds
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    def _invalid_token(self, token: str) -> Result[RedeemResetResponse]:
        self.logger.warning(f"Invalid or expired reset token: {token}")
        return Return.err(
            Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired reset token")
        )

    async def execute(
        self, token: str, new_password: str, redirect_to: Optional[str] = None
    ) -> Result[RedeemResetResponse]:
        """
        Execute redeem reset use case.

        Args:
            token: Reset token from the reset link
            new_password: Password to set
            redirect_to: Optional target to send the user to afterwards

        Returns:
            Result with the username and redirect target, or Error

        Errors:
            - INVALID_OR_EXPIRED_TOKEN: No user holds this token, or it has expired
            - PERSISTENCE_FAILURE: The user directory could not be read or written
        """
        try:
            async with self.uow:
                now = self.clock()
                user = await self.uow.users.get_by_reset_token(token, now)
                if user is None:
                    return self._invalid_token(token)
                username = user.username

                password_hash = hash_password(new_password, self.hash_rounds)

                # Another request may have redeemed or replaced the token since the lookup
                redeemed = await self.uow.users.redeem_reset_token(
                    user.id, token, password_hash, now
                )
                if not redeemed:
                    return self._invalid_token(token)

                await self.uow.commit()
        except PersistenceError as exc:
            self.logger.error(f"Password reset failed: {exc}")
            return Return.err(
                Error("PERSISTENCE_FAILURE", "Could not update password")
            )

        self.logger.info(f"Password successfully reset for user: {username}")

        if redirect_to:
            self.logger.info(f"User redirected to: {redirect_to} after password reset")

        return Return.ok(RedeemResetResponse(username=username, redirect_to=redirect_to))

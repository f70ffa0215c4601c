"""
Request Reset Use Case

Issues a single-use password reset token for a user and builds the reset link.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional
from urllib.parse import quote

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.domain.entities import utcnow
from .dtos import RequestResetResponse

DEFAULT_TOKEN_TTL_SECONDS = 3600
TOKEN_BYTES = 32

# Characters encodeURIComponent leaves alone besides alphanumerics and "_.-~"
_LINK_SAFE_CHARS = "!*'()"


def build_reset_link(base_url: str, token: str, redirect_to: str) -> str:
    return f"{base_url}?token={token}&redirectTo={quote(redirect_to, safe=_LINK_SAFE_CHARS)}"


class RequestResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Unknown usernames fail with USER_NOT_FOUND and change nothing
    - Token is 32 random bytes, hex encoded (64 chars)
    - Token expires after token_ttl_seconds (1 hour by default)
    - A new request overwrites any pending token for the user
    - redirect_to is embedded in the link as given, only URL-encoded
    - Delivery of the link is the caller's concern
    """

    def __init__(
        self,
        uow: UnitOfWork,
        reset_link_base_url: str,
        token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.reset_link_base_url = reset_link_base_url
        self.token_ttl_seconds = token_ttl_seconds
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, username: str, redirect_to: str = "") -> Result[RequestResetResponse]:
        """
        Execute request reset use case.

        Args:
            username: Username of the account to reset
            redirect_to: Target embedded in the reset link

        Returns:
            Result with token, expiry and reset link, or Error

        Errors:
            - USER_NOT_FOUND: No user with this username
            - PERSISTENCE_FAILURE: The user directory could not be read or written
        """
        try:
            async with self.uow:
                user = await self.uow.users.get_by_username(username)
                if user is None:
                    self.logger.warning(
                        f"Password reset requested for non-existent user: {username}"
                    )
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))

                token = secrets.token_hex(TOKEN_BYTES)
                expires_at = self.clock() + timedelta(seconds=self.token_ttl_seconds)

                await self.uow.users.set_reset_token(user.id, token, expires_at)
                await self.uow.commit()
        except PersistenceError as exc:
            self.logger.error(f"Password reset request failed for user {username}: {exc}")
            return Return.err(
                Error("PERSISTENCE_FAILURE", "Could not store password reset token")
            )

        self.logger.info(f"Password reset requested for user: {username}")

        reset_link = build_reset_link(self.reset_link_base_url, token, redirect_to)
        self.logger.info(f"Password reset link generated: {reset_link}")

        return Return.ok(
            RequestResetResponse(
                username=username,
                token=token,
                expires_at=expires_at,
                reset_link=reset_link,
            )
        )

"""
Password Reset Use Case DTOs (Data Transfer Objects)

Response classes returned by the reset use cases.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class RequestResetResponse(BaseModel):
    """Response for request reset use case"""

    username: str
    token: str
    expires_at: datetime
    reset_link: str


class RedeemResetResponse(BaseModel):
    """Response for redeem reset use case"""

    username: str
    redirect_to: Optional[str] = None

    @property
    def redirect(self) -> bool:
        return bool(self.redirect_to)

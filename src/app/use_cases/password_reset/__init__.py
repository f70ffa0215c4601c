"""
Password Reset Use Cases

Token issuance and redemption.
"""

from .request_reset_use_case import RequestResetUseCase, build_reset_link
from .redeem_reset_use_case import RedeemResetUseCase
from .dtos import RequestResetResponse, RedeemResetResponse

__all__ = [
    # Use Cases
    "RequestResetUseCase",
    "RedeemResetUseCase",
    # DTOs - Responses
    "RequestResetResponse",
    "RedeemResetResponse",
    # Helpers
    "build_reset_link",
]

"""
Use Cases

- password_reset/: Reset token issuance and redemption
"""

from .password_reset import (
    RequestResetUseCase,
    RedeemResetUseCase,
)

__all__ = [
    "RequestResetUseCase",
    "RedeemResetUseCase",
]

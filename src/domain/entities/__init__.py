"""
Password Reset Service Domain Entities
"""

from .user import User, utcnow

__all__ = [
    "User",
    "utcnow",
]

"""
User Entity

The only record in the User Directory. Holds the credential and the
pending password reset token, if any.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored"""
    return datetime.now(UTC).replace(tzinfo=None)


class User(SQLModel, table=True):
    """
    User entity - a credential holder addressed by username.

    Business Rules:
    - Username is unique and never changes after creation
    - Password stored as bcrypt hash
    - reset_token and reset_token_expires_at are set together and cleared together
    - At most one pending reset token; a new request overwrites the previous one
    - A reset token is valid only while reset_token_expires_at is in the future
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    reset_token: Optional[str] = Field(default=None, index=True, max_length=64)
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

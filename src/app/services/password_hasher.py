"""
Password hashing

bcrypt only looks at the first 72 bytes of its input and bcrypt>=5 rejects
anything longer. Passwords are first reduced to a base64 SHA-256 digest
(44 bytes), so every length is accepted and no two passwords collide on a
shared 72-byte prefix.
"""

import base64
import hashlib

import bcrypt

DEFAULT_HASH_ROUNDS = 12


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = DEFAULT_HASH_ROUNDS) -> str:
    """Return the bcrypt hash of `password` as text for the password_hash column"""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_prehash(password), password_hash.encode())

# app/services/passwords.py
from __future__ import annotations

from passlib.context import CryptContext

# bcrypt only; raising the rounds later marks old hashes for upgrade on next login
_pwd = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
    bcrypt__truncate_error=False,
)


def hash_password(plain: str) -> str:
    return _pwd.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """False for a wrong password, and for a disabled or unrecognised stored hash."""
    if not hashed:
        return False
    try:
        return _pwd.verify(plain, hashed)
    except ValueError:
        return False


def needs_rehash(hashed: str) -> bool:
    return _pwd.needs_update(hashed)

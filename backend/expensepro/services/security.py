# expensepro/services/security.py
"""Credential hashing and bearer tokens.

Passwords are stored as passlib pbkdf2_sha256 hashes (no native backend
needed). Access tokens are HS256 JWTs signed with SECRET_KEY via python-jose.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from passlib.context import CryptContext
from jose import jwt, JWTError
from expensepro.core.config import settings

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    if password is None:
        raise ValueError("password is required")
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """False on a mismatch, a missing value, or a hash passlib cannot read."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def token_lifetime(remember_me: bool = False) -> timedelta:
    if remember_me:
        return timedelta(days=settings.REMEMBER_ME_EXPIRE_DAYS)
    return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def create_access_token(
    username: str,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Signed token for `username` (the 'sub' claim) with an optional 'role'.
    'iat'/'exp' are integer epoch seconds; the default lifetime is token_lifetime().
    """
    issued = datetime.now(timezone.utc)
    expires = issued + (expires_delta or token_lifetime())

    claims: Dict[str, Any] = {
        "sub": username,
        "iat": int(issued.timestamp()),
        "exp": int(expires.timestamp()),
    }
    if role:
        claims["role"] = role
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    # raises JWTError (ExpiredSignatureError included) on anything invalid
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])


__all__ = [
    "JWTError",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "token_lifetime",
    "verify_password",
]

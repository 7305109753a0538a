from datetime import timedelta

import pytest
from jose import jwt

from expensepro.services.security import (
    JWTError,
    create_access_token,
    decode_access_token,
    hash_password,
    token_lifetime,
    verify_password,
)


def test_password_hashing():
    hashed = hash_password("admin123")
    assert hashed != "admin123"
    assert verify_password("admin123", hashed)
    assert not verify_password("admin124", hashed)
    assert not verify_password("admin123", "plaintext-not-a-hash")
    assert not verify_password(None, hashed)


def test_token_carries_username_and_role():
    payload = decode_access_token(create_access_token("alice", "User"))
    assert payload["sub"] == "alice"
    assert payload["role"] == "User"
    assert payload["exp"] - payload["iat"] == int(token_lifetime().total_seconds())


def test_remember_me_lifetime():
    assert token_lifetime(True) == timedelta(days=30)
    assert token_lifetime(False) == timedelta(days=1)


def test_expired_or_foreign_token_is_rejected():
    with pytest.raises(JWTError):
        decode_access_token(create_access_token("alice", expires_delta=timedelta(seconds=-5)))
    forged = jwt.encode({"sub": "admin", "role": "Admin"}, "someone-elses-key", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(forged)

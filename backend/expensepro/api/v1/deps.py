# expensepro/api/v1/deps.py
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.services.security import JWTError, decode_access_token

bearer = HTTPBearer()  # "Authorization: Bearer <token>"


def get_store(request: Request) -> RecordStore:
    # one store per app, opened in the lifespan handler
    return request.app.state.store


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer),
    store: RecordStore = Depends(get_store),
) -> models.User:
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")

    username = payload.get("sub")
    if not username:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token (no sub)")

    user = store.get("users", username)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def get_admin_user(current_user: models.User = Depends(get_current_user)) -> models.User:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return current_user

# expensepro/api/v1/auth.py
from fastapi import APIRouter, Depends, HTTPException, status

from expensepro.api.v1.deps import get_current_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.auth import LoginRequest, PasswordChange, Token
from expensepro.schemas.user import UserCreate, UserOut
from expensepro.services import auth as auth_service
from expensepro.services import users as user_service
from expensepro.services.security import create_access_token, token_lifetime

router = APIRouter()


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, store: RecordStore = Depends(get_store)):
    return user_service.create_user(store, payload, actor=None)


@router.post("/login", response_model=Token)
def login(payload: LoginRequest, store: RecordStore = Depends(get_store)):
    result = auth_service.authenticate(store, payload.username, payload.password)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    lifetime = token_lifetime(payload.remember_me)
    token = create_access_token(result.user.username, result.user.role.value, lifetime)
    return {
        "access_token": token,
        "token_type": "bearer",
        "expires_in": int(lifetime.total_seconds()),
        "user": result.user,
    }


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    # tokens are stateless; logging out only records the event
    auth_service.logout(store, current_user)
    return None


@router.get("/me", response_model=UserOut)
def me(current_user: models.User = Depends(get_current_user)):
    return current_user


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    payload: PasswordChange,
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    auth_service.change_password(store, current_user, payload)
    return None

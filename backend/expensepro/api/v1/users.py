# expensepro/api/v1/users.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel, Field

from expensepro.api.v1.deps import get_admin_user, get_current_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.user import UserCreate, UserOut, UserUpdate
from expensepro.services import users as user_service

router = APIRouter()


class PasswordReset(BaseModel):
    new_password: str = Field(min_length=6)


@router.get("", response_model=List[UserOut])
def list_users(
    role: Optional[models.Role] = None,
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
):
    return user_service.list_users(store, role)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)):
    return user_service.create_user(store, payload, actor=admin)


@router.get("/{username}", response_model=UserOut)
def get_user(username: str, current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    user = user_service.get_user(store, username)
    if not user or (not current_user.is_admin and current_user.username != username):
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{username}", response_model=UserOut)
def update_user(
    username: str,
    payload: UserUpdate,
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    return user_service.update_user(store, username, payload, current_user)


@router.delete("/{username}")
def delete_user(username: str, admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)):
    removed = user_service.delete_user(store, username, admin)
    return {"username": username, "deleted_transactions": removed}


@router.post("/{username}/password", status_code=status.HTTP_204_NO_CONTENT)
def reset_password(
    username: str,
    payload: PasswordReset,
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
):
    user_service.reset_password(store, username, payload.new_password, actor=admin)
    return None


@router.post("/{username}/photo", response_model=UserOut)
def upload_photo(
    username: str,
    file: UploadFile = File(...),
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    try:
        content = file.file.read()
    finally:
        file.file.close()
    return user_service.set_profile_photo(store, username, file.filename, content, file.content_type, current_user)

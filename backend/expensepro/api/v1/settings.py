# expensepro/api/v1/settings.py
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from expensepro.api.v1.deps import get_admin_user, get_current_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.setting import SettingOut, SettingUpdate
from expensepro.services import settings as settings_service

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
def all_settings(current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    return settings_service.get_all_settings(store)


@router.get("/{key}", response_model=SettingOut)
def get_setting(key: str, current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    setting = store.get("settings", key)
    if setting is None:
        raise HTTPException(status_code=404, detail="Setting not found")
    return setting


@router.put("/{key}", response_model=SettingOut)
def update_setting(
    key: str,
    payload: SettingUpdate,
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
):
    return settings_service.update_setting(store, key, payload.value, admin)

# expensepro/api/v1/categories.py
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional

from expensepro.api.v1.deps import get_admin_user, get_current_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from expensepro.services import categories as category_service

router = APIRouter(tags=["categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(
    type: Optional[models.CategoryType] = None,
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    return category_service.list_categories(store, type)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)):
    return category_service.add_category(store, payload, admin)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    cat = store.get("categories", category_id)
    if not cat:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return cat


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
):
    return category_service.update_category(store, category_id, payload, admin)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)):
    category_service.delete_category(store, category_id, admin)
    return None

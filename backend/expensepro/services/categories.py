# expensepro/services/categories.py
from typing import List, Optional

from expensepro.core.errors import NotFoundError, ValidationError
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.category import CategoryCreate, CategoryUpdate
from expensepro.services.access import require_admin
from expensepro.utils.helpers import utcnow


def list_categories(store: RecordStore, type: Optional[models.CategoryType] = None) -> List[models.Category]:
    if type is not None:
        return store.get_all("categories", "type", models.CategoryType(type))
    return store.get_all("categories")


def _check_parent(store: RecordStore, parent_id: Optional[int], type: models.CategoryType, own_id: Optional[int] = None) -> None:
    # a parent must exist, share the type, and be a top-level category
    if parent_id is None:
        return
    if own_id is not None and parent_id == own_id:
        raise ValidationError("A category cannot be its own parent")
    parent = store.get("categories", parent_id)
    if parent is None:
        raise ValidationError(f"Parent category {parent_id} does not exist")
    if parent.type != type:
        raise ValidationError("Parent category must have the same type")
    if parent.parent_id is not None:
        raise ValidationError("Categories nest only one level deep")


def add_category(store: RecordStore, payload: CategoryCreate, actor: models.User) -> models.Category:
    require_admin(actor)
    _check_parent(store, payload.parent_id, payload.type)
    cat = models.Category(
        name=payload.name,
        type=payload.type,
        parent_id=payload.parent_id,
        color=payload.color,
        icon=payload.icon,
        created_at=utcnow(),
    )
    store.add("categories", cat)
    return cat


def update_category(store: RecordStore, category_id: int, payload: CategoryUpdate, actor: models.User) -> models.Category:
    require_admin(actor)
    cat = store.get("categories", category_id)
    if cat is None:
        raise NotFoundError("Category not found")
    changes = payload.model_dump(exclude_unset=True)
    if "parent_id" in changes:
        _check_parent(store, changes["parent_id"], cat.type, own_id=cat.id)
        if changes["parent_id"] is not None and store.get_all("categories", "parent_id", cat.id):
            raise ValidationError("Categories nest only one level deep")
    for field, value in changes.items():
        if field == "name" and not value:
            raise ValidationError("Category name is required")
        setattr(cat, field, value)
    store.update("categories", cat)
    return cat


def delete_category(store: RecordStore, category_id: int, actor: models.User) -> None:
    require_admin(actor)
    if store.get_all("categories", "parent_id", category_id):
        raise ValidationError("Category has sub-categories; delete them first")
    store.delete("categories", category_id)

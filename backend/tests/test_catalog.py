import pytest

from expensepro.core.errors import AuthorizationError, NotFoundError, ValidationError
from expensepro.db import models
from expensepro.schemas.category import CategoryCreate, CategoryUpdate
from expensepro.services import categories, settings as settings_svc
from expensepro.services.activity import query_logs


def test_add_and_list_categories(store, admin):
    food = categories.add_category(store, CategoryCreate(name="Food", type="expense"), admin)
    categories.add_category(store, CategoryCreate(name="Salary", type="income"), admin)
    categories.add_category(store, CategoryCreate(name="Lunch", type="expense", parent_id=food.id), admin)

    assert [c.name for c in categories.list_categories(store, models.CategoryType.expense)] == ["Food", "Lunch"]
    assert len(categories.list_categories(store)) == 3


def test_category_parent_rules(store, admin):
    food = categories.add_category(store, CategoryCreate(name="Food", type="expense"), admin)
    lunch = categories.add_category(store, CategoryCreate(name="Lunch", type="expense", parent_id=food.id), admin)
    salary = categories.add_category(store, CategoryCreate(name="Salary", type="income"), admin)

    with pytest.raises(ValidationError, match="does not exist"):
        categories.add_category(store, CategoryCreate(name="X", type="expense", parent_id=999), admin)
    with pytest.raises(ValidationError, match="same type"):
        categories.add_category(store, CategoryCreate(name="Bonus", type="income", parent_id=food.id), admin)
    with pytest.raises(ValidationError, match="one level"):
        categories.add_category(store, CategoryCreate(name="Sandwich", type="expense", parent_id=lunch.id), admin)
    with pytest.raises(ValidationError, match="own parent"):
        categories.update_category(store, food.id, CategoryUpdate(parent_id=food.id), admin)
    with pytest.raises(ValidationError, match="one level"):
        other = categories.add_category(store, CategoryCreate(name="Travel", type="expense"), admin)
        categories.update_category(store, food.id, CategoryUpdate(parent_id=other.id), admin)

    assert store.get("categories", salary.id).parent_id is None


def test_update_and_delete_category(store, admin, alice):
    food = categories.add_category(store, CategoryCreate(name="Food", type="expense"), admin)
    lunch = categories.add_category(store, CategoryCreate(name="Lunch", type="expense", parent_id=food.id), admin)

    with pytest.raises(AuthorizationError):
        categories.update_category(store, food.id, CategoryUpdate(color="#ff0000"), alice)
    categories.update_category(store, food.id, CategoryUpdate(color="#ff0000"), admin)
    assert store.get("categories", food.id).color == "#ff0000"

    with pytest.raises(ValidationError, match="sub-categories"):
        categories.delete_category(store, food.id, admin)
    categories.delete_category(store, lunch.id, admin)
    categories.delete_category(store, food.id, admin)
    assert categories.list_categories(store) == []

    with pytest.raises(NotFoundError):
        categories.update_category(store, food.id, CategoryUpdate(name="Gone"), admin)


def test_settings(store, admin, alice):
    assert settings_svc.get_setting(store, "taxRate") is None

    settings_svc.update_setting(store, "taxRate", 18, admin)
    settings_svc.update_setting(store, "costCenters", ["HQ", "Branch"], admin)
    settings_svc.update_setting(store, "taxRate", 12, admin)

    assert settings_svc.get_all_settings(store) == {"costCenters": ["HQ", "Branch"], "taxRate": 12}
    assert len(query_logs(store, action=models.LogAction.settings_update)) == 3

    with pytest.raises(AuthorizationError):
        settings_svc.update_setting(store, "taxRate", 0, alice)
    assert settings_svc.get_setting(store, "taxRate") == 12

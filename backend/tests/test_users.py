import datetime as dt

import pytest

from conftest import make_txn
from expensepro.core.errors import AuthorizationError, DuplicateKeyError, NotFoundError, ValidationError
from expensepro.db import models
from expensepro.schemas.auth import PasswordChange
from expensepro.schemas.user import UserCreate, UserUpdate
from expensepro.services import auth, users
from expensepro.services.activity import query_logs
from expensepro.services.security import verify_password


def test_signup_creates_user(store):
    u = users.create_user(store, UserCreate(username="carol", password="carol123", full_name="Carol"))
    assert u.role == models.Role.User
    assert u.hashed_password != "carol123"
    assert verify_password("carol123", store.get("users", "carol").hashed_password)
    assert query_logs(store, user_id="carol")[0].action == models.LogAction.user_create


def test_signup_cannot_create_admin(store):
    with pytest.raises(AuthorizationError):
        users.create_user(store, UserCreate(username="eve", password="eve12345", full_name="Eve", role="Admin"))


def test_duplicate_username_leaves_existing(store, admin, alice):
    with pytest.raises(DuplicateKeyError):
        users.create_user(
            store,
            UserCreate(username="alice", password="hijack12", full_name="Someone Else"),
            actor=admin,
        )
    assert store.get("users", "alice").full_name == "Alice"


def test_only_admin_changes_role(store, admin, alice):
    with pytest.raises(AuthorizationError):
        users.update_user(store, "alice", UserUpdate(role="Admin"), alice)

    users.update_user(store, "alice", UserUpdate(department="Finance"), alice)
    assert store.get("users", "alice").department == "Finance"

    users.update_user(store, "alice", UserUpdate(role="Admin"), admin)
    assert store.get("users", "alice").role == models.Role.Admin


def test_list_users_by_role(store, admin, alice, bob):
    assert [u.username for u in users.list_users(store, models.Role.User)] == ["alice", "bob"]
    assert len(users.list_users(store)) == 3


def test_delete_user_cascades_transactions(store, admin, alice, bob):
    store.add("transactions", make_txn("a1", dt.date(2024, 1, 1), user="alice"))
    store.add("transactions", make_txn("a2", dt.date(2024, 1, 2), user="alice"))
    store.add("transactions", make_txn("b1", dt.date(2024, 1, 3), user="bob"))

    assert users.delete_user(store, "alice", admin) == 2

    assert store.get("users", "alice") is None
    assert store.get_all("transactions", "user_id", "alice") == []
    assert [t.id for t in store.get_all("transactions")] == ["b1"]
    deleted = query_logs(store, action=models.LogAction.transaction_delete)
    assert sorted(log.details for log in deleted) == ["Deleted transaction: a1", "Deleted transaction: a2"]


def test_delete_user_guards(store, admin, alice):
    with pytest.raises(AuthorizationError):
        users.delete_user(store, "admin", alice)
    with pytest.raises(ValidationError):
        users.delete_user(store, "admin", admin)
    with pytest.raises(NotFoundError):
        users.delete_user(store, "ghost", admin)


def test_authenticate(store, alice):
    assert store.get("users", "alice").last_login is None

    ok = auth.authenticate(store, "alice", "alice123")
    assert ok.success and ok.user.username == "alice"
    assert store.get("users", "alice").last_login is not None
    assert query_logs(store, action=models.LogAction.login)[0].user_id == "alice"

    bad = auth.authenticate(store, "alice", "wrong")
    assert not bad.success
    assert bad.error == "Invalid credentials"
    assert not auth.authenticate(store, "nobody", "alice123").success


def test_change_password(store, alice):
    with pytest.raises(ValidationError, match="Current password is incorrect"):
        auth.change_password(store, alice, PasswordChange(current_password="nope", new_password="newpass1"))
    with pytest.raises(ValidationError, match="do not match"):
        auth.change_password(
            store, alice,
            PasswordChange(current_password="alice123", new_password="newpass1", confirm_password="newpass2"),
        )

    auth.change_password(store, alice, PasswordChange(current_password="alice123", new_password="newpass1"))
    assert auth.authenticate(store, "alice", "newpass1").success
    assert not auth.authenticate(store, "alice", "alice123").success


def test_reset_password(store, admin, alice):
    with pytest.raises(AuthorizationError):
        users.reset_password(store, "admin", "takeover", actor=alice)
    with pytest.raises(ValidationError):
        users.reset_password(store, "alice", "123", actor=admin)

    users.reset_password(store, "alice", "fresh-start", actor=admin)
    assert auth.authenticate(store, "alice", "fresh-start").success


def test_profile_photo(store, alice):
    with pytest.raises(ValidationError):
        users.set_profile_photo(store, "alice", "cv.pdf", b"%PDF", "application/pdf", alice)

    u = users.set_profile_photo(store, "alice", "me.png", b"\x89PNG", "image/png", alice)
    photo = store.get("files", u.profile_photo)
    assert photo.filename == "me.png"
    assert photo.user_id == "alice"

import datetime as dt
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.main import create_app
from expensepro.services.security import hash_password
from expensepro.utils.helpers import utcnow


def make_user(store, username, role=models.Role.User, password="secret123", email=None):
    user = models.User(
        username=username,
        hashed_password=hash_password(password),
        role=role,
        full_name=username.title(),
        email=email,
        department="Operations",
        profile_photo=None,
        created_at=utcnow(),
        last_login=None,
    )
    store.add("users", user)
    return user


def make_txn(
    id,
    date,
    amount="10.00",
    type=models.TransactionType.Expense,
    status=models.TransactionStatus.Pending,
    user="alice",
    created_at=None,
    **extra,
):
    """Unsaved transaction record for tests that work on plain lists."""
    created = created_at or dt.datetime(2024, 1, 1, 12, 0, 0)
    return models.Transaction(
        id=id,
        user_id=user,
        type=type,
        amount=Decimal(amount),
        date=date,
        description=extra.pop("description", f"txn {id}"),
        status=status,
        comments=[],
        attachments=[],
        created_by=user,
        created_at=created,
        last_modified=created,
        **extra,
    )


@pytest.fixture
def store():
    s = RecordStore("sqlite://", seed_defaults=False)
    s.open()
    yield s
    s.close()


@pytest.fixture
def admin(store):
    return make_user(store, "admin", models.Role.Admin, password="admin123", email="admin@expensepro.com")


@pytest.fixture
def alice(store):
    return make_user(store, "alice", password="alice123", email="alice@expensepro.com")


@pytest.fixture
def bob(store):
    return make_user(store, "bob", password="bob12345")


@pytest.fixture
def client(store):
    app = create_app(store)
    with TestClient(app) as c:
        yield c


def login(client, username, password, remember_me=False):
    r = client.post(
        "/api/v1/auth/login",
        json={"username": username, "password": password, "remember_me": remember_me},
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}

import datetime as dt
from decimal import Decimal

import pytest

from expensepro.core.errors import AuthorizationError, NotFoundError, ValidationError
from expensepro.db import models
from expensepro.schemas.transaction import TransactionCreate, TransactionUpdate
from expensepro.services import transactions as svc
from expensepro.services.activity import query_logs

Status = models.TransactionStatus


def expense(amount="500.00", **kw):
    data = dict(type="Expense", amount=amount, date=dt.date(2024, 4, 2), description="Client dinner")
    data.update(kw)
    return TransactionCreate(**data)


def test_create_starts_pending_and_is_logged(store, alice):
    t = svc.create_transaction(store, expense(category="Meals"), alice)

    assert t.id.startswith("txn-")
    assert t.status == Status.Pending
    assert t.user_id == t.created_by == "alice"
    assert store.get("transactions", t.id).amount == Decimal("500.00")

    logs = query_logs(store, user_id="alice", action=models.LogAction.transaction_create)
    assert [log.details for log in logs] == [f"Created transaction: {t.id}"]


@pytest.mark.parametrize("amount", ["0", "-5.00", "0.001"])
def test_create_rejects_non_positive_amount(store, alice, amount):
    with pytest.raises(ValidationError):
        svc.create_transaction(store, expense(amount=amount), alice)
    assert store.get_all("transactions") == []


def test_create_requires_description(store, alice):
    with pytest.raises(ValidationError):
        svc.create_transaction(store, expense(description="   "), alice)


def test_owner_edits_pending(store, alice):
    t = svc.create_transaction(store, expense(), alice)
    updated = svc.update_transaction(store, t.id, TransactionUpdate(amount="42.10", category="Travel"), alice)

    assert updated.amount == Decimal("42.10")
    assert updated.updated_by == "alice"
    again = store.get("transactions", t.id)
    assert (again.amount, again.category, again.description) == (Decimal("42.10"), "Travel", "Client dinner")


def test_update_rejects_bad_amount(store, alice):
    t = svc.create_transaction(store, expense(), alice)
    with pytest.raises(ValidationError):
        svc.update_transaction(store, t.id, TransactionUpdate(amount="-1"), alice)
    assert store.get("transactions", t.id).amount == Decimal("500.00")


def test_other_user_cannot_touch(store, alice, bob):
    t = svc.create_transaction(store, expense(), alice)
    with pytest.raises(AuthorizationError):
        svc.update_transaction(store, t.id, TransactionUpdate(description="mine now"), bob)
    with pytest.raises(AuthorizationError):
        svc.delete_transaction(store, t.id, bob)
    assert svc.get_visible_transaction(store, t.id, bob) is None
    assert svc.get_visible_transaction(store, t.id, alice).id == t.id


def test_approve_records_comment_and_log(store, admin, alice):
    t = svc.create_transaction(store, expense(), alice)
    approved = svc.update_transaction_status(store, t.id, Status.Approved, "Looks fine", admin)

    assert approved.status == Status.Approved
    assert approved.comments[-1]["text"] == "Looks fine"
    assert approved.comments[-1]["by"] == "admin"
    assert store.get("transactions", t.id).status == Status.Approved

    logs = query_logs(store, action=models.LogAction.transaction_status)
    assert logs[0].user_id == "admin"
    assert logs[0].details == f"Approved transaction: {t.id}"


def test_status_transitions_are_one_way(store, admin, alice):
    t = svc.create_transaction(store, expense(), alice)
    svc.update_transaction_status(store, t.id, Status.Rejected, "", admin)

    with pytest.raises(ValidationError):
        svc.update_transaction_status(store, t.id, Status.Approved, "", admin)
    with pytest.raises(ValidationError):
        svc.update_transaction_status(store, t.id, Status.Pending, "", admin)
    assert store.get("transactions", t.id).status == Status.Rejected


def test_only_admin_sets_status(store, alice):
    t = svc.create_transaction(store, expense(), alice)
    with pytest.raises(AuthorizationError):
        svc.update_transaction_status(store, t.id, Status.Approved, "", alice)


def test_status_on_missing_transaction(store, admin):
    with pytest.raises(NotFoundError):
        svc.update_transaction_status(store, "txn-nope", Status.Approved, "", admin)


def test_owner_cannot_change_decided_transaction(store, admin, alice):
    t = svc.create_transaction(store, expense(), alice)
    svc.update_transaction_status(store, t.id, Status.Approved, "", admin)

    with pytest.raises(AuthorizationError):
        svc.update_transaction(store, t.id, TransactionUpdate(amount="1.00"), alice)
    with pytest.raises(AuthorizationError):
        svc.delete_transaction(store, t.id, alice)
    assert store.get("transactions", t.id) is not None

    svc.update_transaction(store, t.id, TransactionUpdate(ledger="Sales"), admin)
    svc.delete_transaction(store, t.id, admin)
    assert store.get("transactions", t.id) is None


def test_bulk_status_is_per_item(store, admin, alice):
    a = svc.create_transaction(store, expense(), alice)
    b = svc.create_transaction(store, expense(amount="20.00"), alice)
    svc.update_transaction_status(store, b.id, Status.Rejected, "", admin)

    result = svc.bulk_update_status(store, [a.id, b.id, "txn-missing"], "Approved", "", admin)

    assert (result.succeeded, result.failed) == (1, 2)
    assert [r.success for r in result.results] == [True, False, False]
    assert result.results[2].error == "Transaction not found"
    assert store.get("transactions", a.id).status == Status.Approved
    assert store.get("transactions", a.id).comments[-1]["text"] == "Bulk approved"
    assert store.get("transactions", b.id).status == Status.Rejected


def test_add_attachment(store, alice):
    t = svc.create_transaction(store, expense(), alice)
    svc.add_attachment(store, t.id, "receipt.txt", b"paid", "text/plain", alice)

    stored = store.get("transactions", t.id)
    assert stored.attachments == [
        {"filename": "receipt.txt", "mimetype": "text/plain", "size": 4, "data": "cGFpZA=="}
    ]


def test_create_rejects_amount_beyond_storage_range(store, alice):
    with pytest.raises(ValidationError, match="must not exceed"):
        svc.create_transaction(store, expense(amount="100000000000000000"), alice)
    t = svc.create_transaction(store, expense(amount=str(svc.MAX_AMOUNT)), alice)
    assert store.get("transactions", t.id).amount == svc.MAX_AMOUNT
    with pytest.raises(ValidationError):
        svc.update_transaction(store, t.id, TransactionUpdate(amount="1e17"), alice)


def test_bulk_delete_applies_rules_per_item(store, admin, alice, bob):
    mine = svc.create_transaction(store, expense(), alice)
    decided = svc.create_transaction(store, expense(amount="20.00"), alice)
    svc.update_transaction_status(store, decided.id, Status.Approved, "", admin)
    theirs = svc.create_transaction(store, expense(amount="30.00"), bob)

    result = svc.bulk_delete_transactions(store, [mine.id, decided.id, theirs.id, "txn-missing"], alice)

    assert (result.succeeded, result.failed) == (1, 3)
    assert [r.success for r in result.results] == [True, False, False, False]
    assert result.results[1].error == "Only pending transactions can be deleted"
    assert result.results[2].error == "You can only modify your own transactions"
    assert store.get("transactions", mine.id) is None
    assert store.get("transactions", decided.id) is not None
    assert store.get("transactions", theirs.id) is not None

    assert svc.bulk_delete_transactions(store, [decided.id, theirs.id], admin).succeeded == 2
    assert store.get_all("transactions") == []

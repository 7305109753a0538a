# expensepro/services/transactions.py
import base64
from decimal import Decimal
import logging
from typing import Iterable, Optional

from expensepro.core.errors import AuthorizationError, ExpenseProError, NotFoundError, ValidationError
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.transaction import (
    BulkItemResult,
    BulkResult,
    TransactionCreate,
    TransactionUpdate,
)
from expensepro.services.access import require_admin, require_owner_or_admin
from expensepro.services.activity import log_activity
from expensepro.services.files import MAX_FILE_BYTES
from expensepro.utils.helpers import generate_id, to_money, utcnow

logger = logging.getLogger(__name__)

PENDING = models.TransactionStatus.Pending
FINAL_STATUSES = (models.TransactionStatus.Approved, models.TransactionStatus.Rejected)
# amounts are stored as integer cents in a 64-bit column
MAX_AMOUNT = Decimal("9999999999999.99")


def _valid_amount(value) -> Decimal:
    try:
        amount = to_money(value)
    except ArithmeticError:
        raise ValidationError("Please enter a valid amount")
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT}")
    return amount


def _valid_description(value: Optional[str]) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError("Description is required")
    return text


def _load(store: RecordStore, txn_id: str) -> models.Transaction:
    t = store.get("transactions", txn_id)
    if t is None:
        raise NotFoundError("Transaction not found")
    return t


def _check_mutable(t: models.Transaction, actor: models.User, verb: str) -> None:
    """Owner or admin; a non-admin may only touch a Pending transaction."""
    require_owner_or_admin(actor, t.user_id, "transactions")
    if not actor.is_admin and t.status != PENDING:
        raise AuthorizationError(f"Only pending transactions can be {verb}")


def create_transaction(store: RecordStore, payload: TransactionCreate, actor: models.User) -> models.Transaction:
    """New transactions always start Pending and belong to the actor."""
    now = utcnow()
    t = models.Transaction(
        id=generate_id("txn"),
        user_id=actor.username,
        type=payload.type,
        amount=_valid_amount(payload.amount),
        date=payload.date,
        description=_valid_description(payload.description),
        category=payload.category,
        cost_center=payload.cost_center,
        ledger=payload.ledger,
        approver=payload.approver,
        status=PENDING,
        comments=[],
        attachments=[a.model_dump() for a in payload.attachments],
        created_by=actor.username,
        updated_by=None,
        created_at=now,
        last_modified=now,
    )
    store.add("transactions", t)
    log_activity(store, actor.username, models.LogAction.transaction_create, f"Created transaction: {t.id}")
    return t


def get_transaction(store: RecordStore, txn_id: str) -> Optional[models.Transaction]:
    return store.get("transactions", txn_id)


def get_visible_transaction(store: RecordStore, txn_id: str, actor: models.User) -> Optional[models.Transaction]:
    """The transaction if the actor may see it (owner or admin), else None."""
    t = get_transaction(store, txn_id)
    if t is None or (not actor.is_admin and t.user_id != actor.username):
        return None
    return t


def update_transaction(
    store: RecordStore, txn_id: str, payload: TransactionUpdate, actor: models.User
) -> models.Transaction:
    t = _load(store, txn_id)
    _check_mutable(t, actor, "edited")

    changes = payload.model_dump(exclude_unset=True)
    if "amount" in changes:
        changes["amount"] = _valid_amount(changes["amount"])
    if "description" in changes:
        changes["description"] = _valid_description(changes["description"])
    for field in ("type", "date"):
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be empty")
    for field, value in changes.items():
        setattr(t, field, value)

    t.updated_by = actor.username
    t.last_modified = utcnow()
    store.update("transactions", t)
    log_activity(store, actor.username, models.LogAction.transaction_update, f"Updated transaction: {t.id}")
    return t


def delete_transaction(store: RecordStore, txn_id: str, actor: models.User) -> None:
    t = _load(store, txn_id)
    _check_mutable(t, actor, "deleted")
    store.delete("transactions", txn_id)
    log_activity(store, actor.username, models.LogAction.transaction_delete, f"Deleted transaction: {txn_id}")


def update_transaction_status(
    store: RecordStore,
    txn_id: str,
    status: models.TransactionStatus,
    comment: str,
    actor: models.User,
) -> models.Transaction:
    """Admin approval/rejection. Pending is the only state that can move."""
    require_admin(actor)
    status = models.TransactionStatus(status)
    if status not in FINAL_STATUSES:
        raise ValidationError("Status can only be set to Approved or Rejected")
    t = _load(store, txn_id)
    if t.status != PENDING:
        raise ValidationError(f"Transaction is already {t.status.value}")

    now = utcnow()
    t.status = status
    t.comments = list(t.comments or []) + [
        {"text": comment or "", "by": actor.username, "timestamp": now.isoformat()}
    ]
    t.updated_by = actor.username
    t.last_modified = now
    store.update("transactions", t)
    log_activity(store, actor.username, models.LogAction.transaction_status, f"{status.value} transaction: {t.id}")
    return t


def _run_bulk(txn_ids: Iterable[str], verb: str, apply) -> BulkResult:
    """
    Best-effort bulk action: every id is attempted independently and reports
    its own outcome; items that succeeded stay applied when others fail.
    """
    results = []
    for txn_id in txn_ids:
        try:
            apply(txn_id)
            results.append(BulkItemResult(id=txn_id, success=True))
        except ExpenseProError as exc:
            logger.warning("Bulk %s failed for %s: %s", verb, txn_id, exc.message)
            results.append(BulkItemResult(id=txn_id, success=False, error=exc.message))

    succeeded = sum(1 for r in results if r.success)
    return BulkResult(succeeded=succeeded, failed=len(results) - succeeded, results=results)


def bulk_update_status(
    store: RecordStore,
    txn_ids: Iterable[str],
    status: models.TransactionStatus,
    comment: str,
    actor: models.User,
) -> BulkResult:
    """Admin approve/reject of many transactions at once."""
    require_admin(actor)
    status = models.TransactionStatus(status)
    comment = comment or f"Bulk {status.value.lower()}"
    return _run_bulk(
        txn_ids,
        status.value.lower(),
        lambda txn_id: update_transaction_status(store, txn_id, status, comment, actor),
    )


def bulk_delete_transactions(store: RecordStore, txn_ids: Iterable[str], actor: models.User) -> BulkResult:
    """Delete many transactions; ownership and the Pending rule apply to each one."""
    return _run_bulk(txn_ids, "delete", lambda txn_id: delete_transaction(store, txn_id, actor))


def add_attachment(
    store: RecordStore,
    txn_id: str,
    filename: str,
    content: bytes,
    mimetype: Optional[str],
    actor: models.User,
) -> models.Transaction:
    t = _load(store, txn_id)
    _check_mutable(t, actor, "edited")
    if not filename:
        raise ValidationError("Missing filename")
    if len(content) > MAX_FILE_BYTES:
        raise ValidationError(f"File exceeds {MAX_FILE_BYTES // (1024 * 1024)} MB")

    t.attachments = list(t.attachments or []) + [{
        "filename": filename,
        "mimetype": mimetype,
        "size": len(content),
        "data": base64.b64encode(content).decode("ascii"),
    }]
    t.updated_by = actor.username
    t.last_modified = utcnow()
    store.update("transactions", t)
    log_activity(store, actor.username, models.LogAction.transaction_update, f"Attached {filename} to {t.id}")
    return t

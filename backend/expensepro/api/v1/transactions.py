# expensepro/api/v1/transactions.py
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from pydantic import ValidationError as SchemaError

from expensepro.api.v1.deps import get_admin_user, get_current_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.transaction import (
    BulkDelete,
    BulkResult,
    BulkStatusUpdate,
    StatusUpdate,
    TransactionCreate,
    TransactionFilter,
    TransactionOut,
    TransactionUpdate,
)
from expensepro.services import transactions as txn_service
from expensepro.services.export import transactions_to_csv
from expensepro.services.query import filter_transactions, query_transactions
from expensepro.utils.helpers import utcnow

router = APIRouter()


def filter_params(
    user_id: Optional[str] = Query(None, description="owner username (admins only)"),
    type: Optional[models.TransactionType] = Query(None),
    status: Optional[models.TransactionStatus] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1),
    start_date: Optional[date] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[date] = Query(None, description="YYYY-MM-DD"),
    current_user: models.User = Depends(get_current_user),
) -> TransactionFilter:
    """Query string -> TransactionFilter. Non-admins only ever see their own transactions."""
    if not current_user.is_admin:
        user_id = current_user.username
    date_range = None
    if start_date or end_date:
        date_range = {"start": start_date or date.min, "end": end_date or date.max}
    try:
        return TransactionFilter(
            user_id=user_id, type=type, status=status, month=month, year=year, date_range=date_range
        )
    except SchemaError as exc:
        raise HTTPException(status_code=400, detail=exc.errors()[0]["msg"])


@router.get("", response_model=Dict[str, Any])
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(25, ge=1, le=200),
    f: TransactionFilter = Depends(filter_params),
    store: RecordStore = Depends(get_store),
):
    """
    Paginated list of transactions matching the filters, newest first.
    """
    items = query_transactions(store, f)
    start = (page - 1) * per_page
    return {
        "total": len(items),
        "page": page,
        "per_page": per_page,
        "items": [TransactionOut.model_validate(t).model_dump(mode="json") for t in items[start:start + per_page]],
    }


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    return txn_service.create_transaction(store, payload, current_user)


@router.get("/export.csv")
def export_csv(
    ids: Optional[List[str]] = Query(None, description="export only these transactions"),
    f: TransactionFilter = Depends(filter_params),
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    if ids:
        # "export selected": ids the caller may not see are skipped
        visible = (
            txn_service.get_visible_transaction(store, txn_id, current_user) for txn_id in dict.fromkeys(ids)
        )
        rows = filter_transactions((t for t in visible if t is not None), f)
        prefix = "selected-transactions"
    else:
        rows = query_transactions(store, f)
        prefix = "transactions"
    filename = f"{prefix}-{utcnow().date().isoformat()}.csv"
    return Response(
        content=transactions_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/bulk-status", response_model=BulkResult)
def bulk_status(
    payload: BulkStatusUpdate,
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
):
    return txn_service.bulk_update_status(store, payload.ids, payload.status, payload.comment, admin)


@router.post("/bulk-delete", response_model=BulkResult)
def bulk_delete(
    payload: BulkDelete,
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    return txn_service.bulk_delete_transactions(store, payload.ids, current_user)


@router.get("/{txn_id}", response_model=TransactionOut)
def get_transaction(txn_id: str, current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    txn = txn_service.get_visible_transaction(store, txn_id, current_user)
    if not txn:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return txn


@router.put("/{txn_id}", response_model=TransactionOut)
def update_transaction(
    txn_id: str,
    payload: TransactionUpdate,
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    return txn_service.update_transaction(store, txn_id, payload, current_user)


@router.delete("/{txn_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(txn_id: str, current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    txn_service.delete_transaction(store, txn_id, current_user)
    return None


@router.post("/{txn_id}/status", response_model=TransactionOut)
def update_status(
    txn_id: str,
    payload: StatusUpdate,
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
):
    return txn_service.update_transaction_status(store, txn_id, payload.status, payload.comment, admin)


@router.post("/{txn_id}/attachments", response_model=TransactionOut)
def add_attachment(
    txn_id: str,
    file: UploadFile = File(...),
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    try:
        content = file.file.read()
    finally:
        file.file.close()
    return txn_service.add_attachment(store, txn_id, file.filename, content, file.content_type, current_user)

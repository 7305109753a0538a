# expensepro/api/v1/analytics.py
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError as SchemaError

from expensepro.api.v1.deps import get_current_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.stats import Statistics
from expensepro.schemas.transaction import DateRange, TransactionFilter
from expensepro.services.access import require_admin
from expensepro.services.query import query_transactions
from expensepro.services.statistics import expense_by_category, expense_by_date, get_statistics

router = APIRouter()


def _scope(current_user: models.User, user_id: Optional[str]) -> Optional[str]:
    """Admins may look at anyone (None = everyone); users only at themselves."""
    if current_user.is_admin:
        return user_id
    return current_user.username


@router.get("/statistics", response_model=Statistics)
def statistics(
    user_id: Optional[str] = Query(None),
    all_users: bool = Query(False, description="admin only: system-wide figures"),
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    if all_users:
        require_admin(current_user)
        return get_statistics(store)
    return get_statistics(store, _scope(current_user, user_id) or current_user.username)


def _ranged(store, current_user, user_id, start_date, end_date):
    date_range = None
    try:
        if start_date or end_date:
            date_range = DateRange(start=start_date or date.min, end=end_date or date.max)
        f = TransactionFilter(user_id=_scope(current_user, user_id), date_range=date_range)
    except SchemaError as exc:
        raise HTTPException(status_code=400, detail=exc.errors()[0]["msg"])
    return query_transactions(store, f)


@router.get("/by_category", response_model=List[Dict[str, Any]])
def by_category(
    user_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    return expense_by_category(_ranged(store, current_user, user_id, start_date, end_date))


@router.get("/by_date", response_model=List[Dict[str, Any]])
def by_date(
    user_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: models.User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    return expense_by_date(_ranged(store, current_user, user_id, start_date, end_date))

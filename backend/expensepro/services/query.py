# expensepro/services/query.py
"""Transaction filtering and ordering over store snapshots."""
from typing import Iterable, List, Optional

from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.transaction import TransactionFilter


def _matches(t: models.Transaction, f: TransactionFilter) -> bool:
    if f.user_id and t.user_id != f.user_id:
        return False
    if f.type and t.type != f.type:
        return False
    if f.status and t.status != f.status:
        return False
    if f.month is not None and t.date.month != f.month:
        return False
    if f.year is not None and t.date.year != f.year:
        return False
    if f.date_range and not (f.date_range.start <= t.date <= f.date_range.end):
        return False
    return True


def sort_newest_first(transactions: Iterable[models.Transaction]) -> List[models.Transaction]:
    # equal dates fall back to creation time, then id, so the order never depends on storage
    return sorted(transactions, key=lambda t: (t.date, t.created_at, t.id), reverse=True)


def filter_transactions(
    transactions: Iterable[models.Transaction], f: Optional[TransactionFilter] = None
) -> List[models.Transaction]:
    f = f or TransactionFilter()
    return sort_newest_first(t for t in transactions if _matches(t, f))


def query_transactions(store: RecordStore, f: Optional[TransactionFilter] = None) -> List[models.Transaction]:
    """Load through the narrowest usable index, then apply every predicate."""
    f = f or TransactionFilter()
    if f.user_id:
        rows = store.get_all("transactions", "user_id", f.user_id)
    elif f.status:
        rows = store.get_all("transactions", "status", f.status)
    else:
        rows = store.get_all("transactions")
    return filter_transactions(rows, f)

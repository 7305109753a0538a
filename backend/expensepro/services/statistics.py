# expensepro/services/statistics.py
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.stats import MonthBucket, Statistics, UserStat
from expensepro.schemas.transaction import TransactionFilter
from expensepro.services.query import query_transactions
from expensepro.utils.helpers import month_key, to_money

_STATUS_FIELDS = {
    models.TransactionStatus.Pending: ("pending_count", "pending"),
    models.TransactionStatus.Approved: ("approved_count", "approved"),
    models.TransactionStatus.Rejected: ("rejected_count", "rejected"),
}


def compute_statistics(
    transactions: Iterable[models.Transaction],
    users: Optional[Iterable[models.User]] = None,
) -> Statistics:
    """
    Single pass over the transactions: income/expense/net totals, per-status
    counts, a month-keyed breakdown and a per-user breakdown. Sums are Decimal,
    so net_balance == total_income - total_expense exactly.
    """
    stats = Statistics()
    monthly: Dict[str, MonthBucket] = {}
    by_user: Dict[str, UserStat] = {}

    for t in transactions:
        amount = to_money(t.amount)
        stats.total_transactions += 1
        stats.total_amount += amount

        bucket = monthly.setdefault(month_key(t.date), MonthBucket())
        bucket.count += 1
        if t.type == models.TransactionType.Income:
            stats.total_income += amount
            bucket.income += amount
        else:
            stats.total_expense += amount
            bucket.expense += amount

        user_stat = by_user.setdefault(t.user_id, UserStat(username=t.user_id))
        user_stat.total += 1
        user_stat.total_amount += amount

        total_field, user_field = _STATUS_FIELDS[models.TransactionStatus(t.status)]
        setattr(stats, total_field, getattr(stats, total_field) + 1)
        setattr(user_stat, user_field, getattr(user_stat, user_field) + 1)

    stats.net_balance = stats.total_income - stats.total_expense
    stats.monthly = dict(sorted(monthly.items()))
    stats.by_user = sorted(by_user.values(), key=lambda u: u.username)

    if users is not None:
        users = list(users)
        stats.total_users = len(users)
        stats.total_admins = sum(1 for u in users if u.is_admin)
    return stats


def get_statistics(store: RecordStore, user_id: Optional[str] = None) -> Statistics:
    """Statistics for one user's transactions, or system-wide when user_id is None."""
    transactions = query_transactions(store, TransactionFilter(user_id=user_id))
    users = store.get_all("users") if user_id is None else None
    return compute_statistics(transactions, users)


def expense_by_category(transactions: Iterable[models.Transaction]) -> List[Dict[str, object]]:
    """[{category, total}] for expenses, largest first; uncategorised under "Uncategorized"."""
    totals: Dict[str, Decimal] = {}
    for t in transactions:
        if t.type != models.TransactionType.Expense:
            continue
        key = t.category or "Uncategorized"
        totals[key] = totals.get(key, Decimal("0.00")) + to_money(t.amount)
    return [{"category": k, "total": v} for k, v in sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))]


def expense_by_date(transactions: Iterable[models.Transaction]) -> List[Dict[str, object]]:
    totals: Dict[date, Decimal] = {}
    for t in transactions:
        if t.type == models.TransactionType.Expense:
            totals[t.date] = totals.get(t.date, Decimal("0.00")) + to_money(t.amount)
    return [{"date": d.isoformat(), "total": v} for d, v in sorted(totals.items())]

# expensepro/services/export.py
"""CSV renderings of transactions and activity logs.

csv.writer quotes any value holding a comma, quote or newline and doubles
embedded quotes.
"""
import csv
import io
from typing import Iterable, List

from expensepro.db import models

TRANSACTION_COLUMNS = [
    "Date", "Type", "Category", "Description", "Amount", "Status",
    "Approver", "Created By", "Created At", "Last Modified",
]
LOG_COLUMNS = ["Timestamp", "User", "Action", "Details"]

_TS = "%Y-%m-%d %H:%M:%S"


def _render(header: List[str], rows: Iterable[list]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buf.getvalue()


def transactions_to_csv(transactions: Iterable[models.Transaction]) -> str:
    return _render(TRANSACTION_COLUMNS, (
        [
            t.date.isoformat(),
            t.type.value,
            t.category or "",
            t.description or "",
            f"{t.amount:.2f}",
            t.status.value,
            t.approver or "",
            t.created_by or "",
            t.created_at.strftime(_TS) if t.created_at else "",
            t.last_modified.strftime(_TS) if t.last_modified else "",
        ]
        for t in transactions
    ))


def logs_to_csv(logs: Iterable[models.LogEntry]) -> str:
    return _render(LOG_COLUMNS, (
        [log.timestamp.strftime(_TS), log.user_id, log.action.value, log.details or ""]
        for log in logs
    ))

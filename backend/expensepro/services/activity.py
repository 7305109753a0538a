# expensepro/services/activity.py
"""Append-only activity log (who did what, when)."""
import logging
from datetime import datetime
from typing import List, Optional, Union

from expensepro.core.errors import ExpenseProError
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.utils.helpers import naive_utc, utcnow

logger = logging.getLogger(__name__)


def log_activity(
    store: RecordStore,
    user_id: str,
    action: Union[models.LogAction, str],
    details: str = "",
) -> Optional[models.LogEntry]:
    """
    Append a log entry. A failed write is reported through process logging
    and never fails the action being recorded.
    """
    entry = models.LogEntry(
        user_id=user_id or "system",
        action=models.LogAction(action),
        details=details,
        timestamp=utcnow(),
    )
    try:
        store.add("logs", entry)
    except ExpenseProError:
        logger.exception("Could not record activity %s for %s", entry.action.value, entry.user_id)
        return None
    return entry


def query_logs(
    store: RecordStore,
    user_id: Optional[str] = None,
    action: Optional[models.LogAction] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[models.LogEntry]:
    """Log entries matching every given filter, newest first. Aware bounds are compared in UTC."""
    if user_id:
        logs = store.get_all("logs", "user_id", user_id)
    elif action:
        logs = store.get_all("logs", "action", models.LogAction(action))
    else:
        logs = store.get_all("logs")

    if action:
        logs = [log for log in logs if log.action == models.LogAction(action)]
    if start:
        start = naive_utc(start)
        logs = [log for log in logs if log.timestamp >= start]
    if end:
        end = naive_utc(end)
        logs = [log for log in logs if log.timestamp <= end]

    logs.sort(key=lambda log: (log.timestamp, log.id), reverse=True)
    return logs


def clear_logs(store: RecordStore) -> None:
    store.clear("logs")


# expensepro/services/backup.py
"""Full snapshot export and destructive restore of every collection.

Restore clears each collection and re-populates it one record at a time;
nothing spans collections, so a failure part way leaves a mix of old and
new data (the error is raised to the caller, never rolled back).
"""
import json
import logging
from collections import Counter
from typing import Any, Dict, Union

import pydantic

from expensepro.core.config import settings
from expensepro.core.errors import FormatError, ValidationError
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.backup import (
    CategoryRecord,
    FileRecord,
    LogRecord,
    SettingRecord,
    Snapshot,
    TransactionRecord,
    UserRecord,
)
from expensepro.services.access import require_admin
from expensepro.utils.helpers import utcnow

logger = logging.getLogger(__name__)

# restore order; clearing runs in reverse
RESTORE_ORDER = ("users", "settings", "transactions", "categories", "logs", "files")

_RECORDS = {
    "users": (UserRecord, models.User, "username"),
    "settings": (SettingRecord, models.Setting, "key"),
    "transactions": (TransactionRecord, models.Transaction, "id"),
    "categories": (CategoryRecord, models.Category, "id"),
    "logs": (LogRecord, models.LogEntry, "id"),
    "files": (FileRecord, models.StoredFile, "id"),
}

CLEARABLE = {
    "all": ("transactions", "logs", "files"),
    "transactions": ("transactions",),
    "logs": ("logs",),
    "files": ("files",),
}


def export_snapshot(store: RecordStore) -> Dict[str, Any]:
    """Read-only: every collection plus version and export timestamp, JSON-ready."""
    snapshot = Snapshot(
        version=settings.SCHEMA_VERSION,
        export_date=utcnow(),
        **{
            name: [record_cls.model_validate(r) for r in store.get_all(name)]
            for name, (record_cls, _, _) in _RECORDS.items()
        },
    )
    return snapshot.model_dump(mode="json", by_alias=True)


def dump_snapshot(data: Dict[str, Any]) -> bytes:
    return json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")


def load_snapshot(raw: Union[bytes, str]) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FormatError(f"Invalid backup file: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise FormatError("Invalid backup file: expected a JSON object")
    return data


def validate_snapshot(data: Any) -> Snapshot:
    """Check the version tag and the full shape; raises FormatError."""
    if not isinstance(data, dict):
        raise FormatError("Invalid backup file: expected a JSON object")
    if "version" not in data:
        raise FormatError("Invalid backup file: missing version tag")
    version = data["version"]
    if not isinstance(version, int) or isinstance(version, bool):
        raise FormatError("Invalid backup file: version must be an integer")
    if version != settings.SCHEMA_VERSION:
        raise FormatError(f"Unsupported backup version {version} (expected {settings.SCHEMA_VERSION})")

    try:
        snapshot = Snapshot.model_validate(data)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        raise FormatError(f"Invalid backup file: {exc.error_count()} problem(s), first at {where}: {first['msg']}") from exc

    for name, (_, _, key) in _RECORDS.items():
        dupes = [k for k, n in Counter(getattr(r, key) for r in getattr(snapshot, name)).items() if n > 1]
        if dupes:
            raise FormatError(f"Invalid backup file: duplicate {name} key {dupes[0]!r}")
    return snapshot


def import_snapshot(store: RecordStore, data: Dict[str, Any]) -> Dict[str, int]:
    """Replace every collection with the snapshot's contents; returns per-collection counts."""
    snapshot = validate_snapshot(data)

    for name in reversed(RESTORE_ORDER):
        store.clear(name)

    counts = {}
    for name in RESTORE_ORDER:
        _, model, _ = _RECORDS[name]
        records = getattr(snapshot, name)
        for rec in records:
            fields = rec.model_dump()
            if name == "transactions":
                # JSON columns take plain values
                fields["comments"] = [c.model_dump(mode="json") for c in rec.comments]
                fields["attachments"] = [a.model_dump(mode="json") for a in rec.attachments]
            store.add(name, model(**fields))
        counts[name] = len(records)
    logger.info("Restored snapshot exported %s: %s", snapshot.export_date.isoformat(), counts)
    return counts


def clear_data(store: RecordStore, what: str, actor: models.User) -> None:
    """Admin "clear data": all (transactions, logs, files) or a single collection."""
    require_admin(actor)
    if what not in CLEARABLE:
        raise ValidationError(f"Cannot clear {what!r}; choose one of {', '.join(CLEARABLE)}")
    for name in CLEARABLE[what]:
        store.clear(name)

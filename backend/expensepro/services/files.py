# expensepro/services/files.py
import base64
import logging
import os
from typing import Optional

from expensepro.core.errors import ValidationError
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.utils.helpers import generate_id, utcnow

logger = logging.getLogger(__name__)

MAX_FILE_BYTES = 5 * 1024 * 1024


def save_file(
    store: RecordStore,
    filename: str,
    content: bytes,
    mimetype: Optional[str] = None,
    user_id: Optional[str] = None,
) -> models.StoredFile:
    """Store an uploaded file base64-encoded in the files collection."""
    filename = os.path.basename(filename or "")
    if not filename:
        raise ValidationError("Missing filename")
    if len(content) > MAX_FILE_BYTES:
        raise ValidationError(f"File exceeds {MAX_FILE_BYTES // (1024 * 1024)} MB")

    rec = models.StoredFile(
        id=generate_id("file"),
        filename=filename,
        mimetype=mimetype,
        size=len(content),
        data=base64.b64encode(content).decode("ascii"),
        user_id=user_id,
        uploaded_at=utcnow(),
    )
    store.add("files", rec)
    logger.info("Stored file %s (%s bytes) for %s", rec.id, rec.size, user_id)
    return rec


def get_file(store: RecordStore, file_id: str) -> Optional[models.StoredFile]:
    return store.get("files", file_id)


def file_bytes(rec: models.StoredFile) -> bytes:
    return base64.b64decode(rec.data)


def get_visible_file(store: RecordStore, file_id: str, actor: models.User) -> Optional[models.StoredFile]:
    """The file if the actor uploaded it or is an admin, else None."""
    rec = get_file(store, file_id)
    if rec is None or (not actor.is_admin and rec.user_id != actor.username):
        return None
    return rec

# expensepro/api/v1/admin.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, File, Response, UploadFile
from pydantic import BaseModel

from expensepro.api.v1.deps import get_admin_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.services import backup
from expensepro.services.activity import log_activity
from expensepro.services.settings import get_all_settings
from expensepro.services.statistics import get_statistics
from expensepro.utils.helpers import utcnow

logger = logging.getLogger(__name__)
router = APIRouter()


class ClearRequest(BaseModel):
    what: str = "all"


@router.get("/backup")
def download_backup(admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)):
    data = backup.export_snapshot(store)
    log_activity(store, admin.username, models.LogAction.data_export, "Exported full backup")
    filename = f"expensepro-backup-{utcnow().date().isoformat()}.json"
    return Response(
        content=backup.dump_snapshot(data),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/restore")
def restore_backup(
    file: UploadFile = File(...),
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        raw = file.file.read()
    finally:
        file.file.close()
    counts = backup.import_snapshot(store, backup.load_snapshot(raw))
    log_activity(store, admin.username, models.LogAction.data_import, "Imported data from backup")
    logger.warning("Store restored from %s by %s", file.filename, admin.username)
    return {"restored": counts}


@router.post("/clear-data")
def clear_data(
    payload: ClearRequest,
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    backup.clear_data(store, payload.what, admin)
    logger.warning("%s cleared %s", admin.username, payload.what)
    return {"cleared": list(backup.CLEARABLE[payload.what])}


@router.get("/system-info")
def system_info(admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)) -> Dict[str, Any]:
    stats = get_statistics(store)
    return {
        "schema_version": store.schema_version,
        "statistics": stats.model_dump(mode="json"),
        "settings": get_all_settings(store),
    }

# expensepro/api/v1/logs.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from expensepro.api.v1.deps import get_admin_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.log import LogOut
from expensepro.services.activity import clear_logs, query_logs
from expensepro.services.export import logs_to_csv
from expensepro.utils.helpers import utcnow

router = APIRouter()


@router.get("", response_model=List[LogOut])
def list_logs(
    user_id: Optional[str] = None,
    action: Optional[models.LogAction] = None,
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    limit: int = Query(200, ge=1, le=5000),
    admin: models.User = Depends(get_admin_user),
    store: RecordStore = Depends(get_store),
):
    return query_logs(store, user_id, action, start, end)[:limit]


@router.get("/export.csv")
def export_logs(admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)):
    filename = f"system-logs-{utcnow().date().isoformat()}.csv"
    return Response(
        content=logs_to_csv(query_logs(store)),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear(admin: models.User = Depends(get_admin_user), store: RecordStore = Depends(get_store)):
    clear_logs(store)
    return None

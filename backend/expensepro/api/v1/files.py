# expensepro/api/v1/files.py
from fastapi import APIRouter, Depends, HTTPException, Response

from expensepro.api.v1.deps import get_current_user, get_store
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.file import FileOut
from expensepro.services.files import file_bytes, get_visible_file

router = APIRouter()


@router.get("/{file_id}", response_model=FileOut)
def file_info(file_id: str, current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    rec = get_visible_file(store, file_id, current_user)
    if not rec:
        raise HTTPException(status_code=404, detail="File not found")
    return rec


@router.get("/{file_id}/download")
def download_file(file_id: str, current_user: models.User = Depends(get_current_user), store: RecordStore = Depends(get_store)):
    rec = get_visible_file(store, file_id, current_user)
    if not rec:
        raise HTTPException(status_code=404, detail="File not found")
    return Response(
        content=file_bytes(rec),
        media_type=rec.mimetype or "application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{rec.filename}"'},
    )

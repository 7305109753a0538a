# expensepro/schemas/file.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    filename: str
    mimetype: Optional[str] = None
    size: int
    user_id: Optional[str] = None
    uploaded_at: datetime

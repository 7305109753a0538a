# expensepro/schemas/log.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from expensepro.db.models import LogAction


class LogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    action: LogAction
    details: Optional[str] = None
    timestamp: datetime

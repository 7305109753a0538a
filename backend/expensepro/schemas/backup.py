# expensepro/schemas/backup.py
"""Shape of a backup snapshot: one list per collection plus version and export date."""
import datetime as dt
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from expensepro.db.models import CategoryType, LogAction, Role, TransactionStatus, TransactionType
from expensepro.schemas.transaction import Attachment, Comment


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="forbid")


class UserRecord(_Record):
    username: str
    hashed_password: str
    role: Role
    full_name: str
    email: Optional[str] = None
    department: Optional[str] = None
    profile_photo: Optional[str] = None
    created_at: dt.datetime
    last_login: Optional[dt.datetime] = None


class TransactionRecord(_Record):
    id: str
    user_id: str
    type: TransactionType
    amount: Decimal = Field(max_digits=15, decimal_places=2)
    date: dt.date
    description: str
    category: Optional[str] = None
    cost_center: Optional[str] = None
    ledger: Optional[str] = None
    approver: Optional[str] = None
    status: TransactionStatus
    comments: List[Comment] = []
    attachments: List[Attachment] = []
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: dt.datetime
    last_modified: dt.datetime


class SettingRecord(_Record):
    key: str
    value: Any = None


class CategoryRecord(_Record):
    id: int
    name: str
    type: CategoryType
    parent_id: Optional[int] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: dt.datetime


class LogRecord(_Record):
    id: int
    user_id: str
    action: LogAction
    details: Optional[str] = None
    timestamp: dt.datetime


class FileRecord(_Record):
    id: str
    filename: str
    mimetype: Optional[str] = None
    size: int
    data: str
    user_id: Optional[str] = None
    uploaded_at: dt.datetime


class Snapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: int
    export_date: dt.datetime = Field(alias="exportDate")
    users: List[UserRecord]
    transactions: List[TransactionRecord]
    settings: List[SettingRecord]
    categories: List[CategoryRecord]
    logs: List[LogRecord]
    files: List[FileRecord]

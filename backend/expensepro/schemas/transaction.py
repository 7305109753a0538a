# expensepro/schemas/transaction.py
import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from expensepro.db.models import TransactionStatus, TransactionType


class Attachment(BaseModel):
    filename: str
    mimetype: Optional[str] = None
    size: int = 0
    data: str  # base64


class Comment(BaseModel):
    text: str = ""
    by: str
    timestamp: dt.datetime


class TransactionCreate(BaseModel):
    # amount is checked by the service (> 0) so the rule holds for every caller
    type: TransactionType
    amount: Decimal
    date: dt.date
    description: str = ""
    category: Optional[str] = None
    cost_center: Optional[str] = None
    ledger: Optional[str] = None
    approver: Optional[str] = None
    attachments: List[Attachment] = []


class TransactionUpdate(BaseModel):
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    date: Optional[dt.date] = None
    description: Optional[str] = None
    category: Optional[str] = None
    cost_center: Optional[str] = None
    ledger: Optional[str] = None
    approver: Optional[str] = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: TransactionType
    amount: Decimal
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


class StatusUpdate(BaseModel):
    status: TransactionStatus
    comment: str = ""


class BulkStatusUpdate(StatusUpdate):
    ids: List[str] = Field(min_length=1)


class BulkDelete(BaseModel):
    ids: List[str] = Field(min_length=1)


class BulkItemResult(BaseModel):
    id: str
    success: bool
    error: Optional[str] = None


class BulkResult(BaseModel):
    succeeded: int
    failed: int
    results: List[BulkItemResult]


class DateRange(BaseModel):
    start: dt.date
    end: dt.date

    @model_validator(mode="after")
    def _ordered(self):
        if self.start > self.end:
            raise ValueError("date range start must not be after end")
        return self


class TransactionFilter(BaseModel):
    """Conjunction of optional predicates; an unset field imposes nothing."""
    user_id: Optional[str] = None
    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1)
    date_range: Optional[DateRange] = None

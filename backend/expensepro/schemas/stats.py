# expensepro/schemas/stats.py
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

ZERO = Decimal("0.00")


class MonthBucket(BaseModel):
    income: Decimal = ZERO
    expense: Decimal = ZERO
    count: int = 0


class UserStat(BaseModel):
    username: str
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total_amount: Decimal = ZERO


class Statistics(BaseModel):
    total_transactions: int = 0
    total_amount: Decimal = ZERO
    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    net_balance: Decimal = ZERO
    pending_count: int = 0
    approved_count: int = 0
    rejected_count: int = 0
    # "YYYY-MM" -> bucket
    monthly: Dict[str, MonthBucket] = {}
    by_user: List[UserStat] = []
    total_users: Optional[int] = None
    total_admins: Optional[int] = None

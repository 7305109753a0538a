# expensepro/db/models.py: User, Transaction, Setting, Category, LogEntry, StoredFile
from decimal import Decimal

from sqlalchemy import Column, Integer, String, DateTime, Text, Date, ForeignKey, Enum, JSON
from sqlalchemy.types import TypeDecorator
from .base import Base
import enum

from expensepro.utils.helpers import utcnow, to_money


class Role(str, enum.Enum):
    User = "User"
    Admin = "Admin"


class TransactionType(str, enum.Enum):
    Income = "Income"
    Expense = "Expense"


class TransactionStatus(str, enum.Enum):
    Pending = "Pending"
    Approved = "Approved"
    Rejected = "Rejected"


class CategoryType(str, enum.Enum):
    income = "income"
    expense = "expense"


class LogAction(str, enum.Enum):
    login = "login"
    logout = "logout"
    transaction_create = "transaction_create"
    transaction_update = "transaction_update"
    transaction_delete = "transaction_delete"
    transaction_status = "transaction_status"
    user_create = "user_create"
    user_update = "user_update"
    password_change = "password_change"
    data_import = "data_import"
    data_export = "data_export"
    settings_update = "settings_update"


class Money(TypeDecorator):
    """Decimal amount persisted as integer minor units (cents)."""
    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(to_money(value) * 100)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return (Decimal(value) / 100).quantize(Decimal("0.01"))


class SchemaInfo(Base):
    __tablename__ = "schema_info"
    id = Column(Integer, primary_key=True)
    version = Column(Integer, nullable=False)
    upgraded_at = Column(DateTime, default=utcnow, nullable=False)


class User(Base):
    __tablename__ = "users"
    username = Column(String(100), primary_key=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(Role), nullable=False, default=Role.User, index=True)
    full_name = Column(String(200), nullable=False, default="")
    email = Column(String(255), nullable=True, unique=True, index=True)
    department = Column(String(150), nullable=True)
    # id of a record in the files collection
    profile_photo = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.Admin


class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(String(64), primary_key=True)
    user_id = Column(String(100), ForeignKey("users.username"), nullable=False, index=True)
    type = Column(Enum(TransactionType), nullable=False, index=True)
    amount = Column(Money, nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False)
    category = Column(String(150), nullable=True)
    cost_center = Column(String(150), nullable=True)
    ledger = Column(String(150), nullable=True)
    approver = Column(String(150), nullable=True, index=True)
    status = Column(Enum(TransactionStatus), nullable=False, default=TransactionStatus.Pending, index=True)
    # [{"text", "by", "timestamp"}] appended on approve/reject
    comments = Column(JSON, nullable=False, default=list)
    # [{"filename", "mimetype", "size", "data"}] with base64 data
    attachments = Column(JSON, nullable=False, default=list)
    created_by = Column(String(100), nullable=True, index=True)
    updated_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    last_modified = Column(DateTime, default=utcnow, nullable=False)


class Setting(Base):
    __tablename__ = "settings"
    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=True)


class Category(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    type = Column(Enum(CategoryType), nullable=False, index=True)
    parent_id = Column(Integer, nullable=True, index=True)
    color = Column(String(20), nullable=True)
    icon = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class LogEntry(Base):
    __tablename__ = "logs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(100), nullable=False, index=True)
    action = Column(Enum(LogAction), nullable=False, index=True)
    details = Column(Text, nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)


class StoredFile(Base):
    __tablename__ = "files"
    id = Column(String(64), primary_key=True)
    filename = Column(String(255), nullable=False)
    mimetype = Column(String(255), nullable=True)
    size = Column(Integer, nullable=False, default=0)
    data = Column(Text, nullable=False)
    user_id = Column(String(100), nullable=True, index=True)
    uploaded_at = Column(DateTime, default=utcnow, nullable=False)

# expensepro/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from expensepro.db.models import Role


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_.@-]+$")
    password: str = Field(min_length=6)
    role: Role = Role.User
    full_name: str = Field(min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(None, max_length=150)


class UserUpdate(BaseModel):
    # only fields that are set get applied; role is honoured for admins only
    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(None, max_length=150)
    role: Optional[Role] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    role: Role
    full_name: str
    email: Optional[str] = None
    department: Optional[str] = None
    profile_photo: Optional[str] = None
    created_at: datetime
    last_login: Optional[datetime] = None

# expensepro/schemas/auth.py
from pydantic import BaseModel, Field
from typing import Optional

from expensepro.schemas.user import UserOut


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    remember_me: bool = False


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)
    confirm_password: Optional[str] = None


class AuthResult(BaseModel):
    """Outcome of a credential check: the user on success, an error message otherwise."""
    success: bool
    user: Optional[UserOut] = None
    error: Optional[str] = None

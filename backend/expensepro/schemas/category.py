# expensepro/schemas/category.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from expensepro.db.models import CategoryType


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    type: CategoryType
    parent_id: Optional[int] = None
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=64)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    parent_id: Optional[int] = None
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=64)


class CategoryOut(CategoryBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None

# expensepro/schemas/setting.py
from typing import Any, Union, List

from pydantic import BaseModel, ConfigDict, Field

# settings hold option lists (cost centers, ledgers...), numbers or strings
SettingValue = Union[List[Any], int, float, str, None]


class SettingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: SettingValue = None


class SettingUpdate(BaseModel):
    value: SettingValue = Field(...)

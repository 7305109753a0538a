# expensepro/schemas/simple.py
from pydantic import BaseModel


class Health(BaseModel):
    status: str
    schema_version: int

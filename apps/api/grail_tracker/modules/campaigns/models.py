from __future__ import annotations

from typing import Optional
from sqlmodel import SQLModel, Field


# root aggregate; children reference it with ON DELETE CASCADE
class Campaign(SQLModel, table=True):
    __tablename__ = "campaigns"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str

    created_at: str
    updated_at: str = Field(index=True)

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class EntryIn(BaseModel):
    number: Optional[int] = None
    info: Optional[str] = None
    status: Optional[str] = None


class EntryPatchIn(BaseModel):
    # unset vs explicit null matters for info; see core.merge
    number: Optional[int] = None
    info: Optional[str] = None
    status: Optional[str] = None


class EntryOut(BaseModel):
    id: int
    location_id: int
    number: int
    info: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LocationCreateIn(BaseModel):
    number: Optional[int] = None
    name: Optional[str] = None
    dream: Optional[str] = None
    nightmare: Optional[str] = None
    has_menhir: Optional[bool] = None
    menhir_note: Optional[str] = None
    notes: Optional[str] = None
    entries: Optional[List[EntryIn]] = None


class LocationPatchIn(BaseModel):
    number: Optional[int] = None
    name: Optional[str] = None
    dream: Optional[str] = None
    nightmare: Optional[str] = None
    has_menhir: Optional[bool] = None
    menhir_note: Optional[str] = None
    notes: Optional[str] = None
    # present -> replaces the whole entry set
    entries: Optional[List[EntryIn]] = None


class LocationOut(BaseModel):
    id: int
    campaign_id: int
    number: int
    name: str
    dream: Optional[str] = None
    nightmare: Optional[str] = None
    has_menhir: bool = False
    menhir_note: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    entries: List[EntryOut] = Field(default_factory=list)

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class SavedCharacterIn(BaseModel):
    character_type: Optional[str] = None
    player_name: str = ""
    food: int = 0
    wealth: int = 0
    experience: int = 0
    magic: int = 0
    energy: int = 0
    health: int = 0
    terror: int = 0
    location_number: Optional[int] = None


class SaveCreateIn(BaseModel):
    name: Optional[str] = None
    # omitted -> snapshot of the live roster
    characters: Optional[List[SavedCharacterIn]] = None


class SavedCharacterOut(BaseModel):
    id: int
    save_id: int
    character_type: str
    player_name: str
    food: int
    wealth: int
    experience: int
    magic: int
    energy: int
    health: int
    terror: int
    location_number: Optional[int] = None


class SaveOut(BaseModel):
    id: int
    campaign_id: int
    name: str
    created_at: Optional[str] = None
    characters: List[SavedCharacterOut] = Field(default_factory=list)


class RestoreOut(BaseModel):
    success: bool = True
    restored_from: str
    restored: int = 0
    unmatched: List[str] = Field(default_factory=list)

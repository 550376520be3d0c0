from __future__ import annotations

from typing import Literal, Optional
from pydantic import BaseModel

CharacterType = Literal["Iunis", "Gerdwyn", "Elgan", "Osbert"]


class CharacterCreateIn(BaseModel):
    # validated in service so unknown archetypes map to invalid_argument
    character_type: Optional[str] = None
    player_name: Optional[str] = None


class CharacterPatchIn(BaseModel):
    player_name: Optional[str] = None
    food: Optional[int] = None
    wealth: Optional[int] = None
    experience: Optional[int] = None
    magic: Optional[int] = None
    energy: Optional[int] = None
    health: Optional[int] = None
    terror: Optional[int] = None


class CharacterOut(BaseModel):
    id: int
    campaign_id: int
    character_type: CharacterType
    player_name: str
    food: int = 0
    wealth: int = 0
    experience: int = 0
    magic: int = 0
    energy: int = 0
    health: int = 0
    terror: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

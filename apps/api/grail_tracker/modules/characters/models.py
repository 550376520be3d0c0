from __future__ import annotations

from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import SQLModel, Field


# one per archetype per campaign, at most 4 (enforced in service)
class Character(SQLModel, table=True):
    __tablename__ = "characters"
    __table_args__ = (
        UniqueConstraint("campaign_id", "character_type", name="uq_characters_campaign_id_character_type"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    campaign_id: int = Field(
        sa_column=Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    character_type: str  # Iunis|Gerdwyn|Elgan|Osbert
    player_name: str

    # resources
    food: int = Field(default=0)
    wealth: int = Field(default=0)
    experience: int = Field(default=0)
    magic: int = Field(default=0)
    # stats
    energy: int = Field(default=0)
    health: int = Field(default=0)
    terror: int = Field(default=0)

    created_at: str
    updated_at: str

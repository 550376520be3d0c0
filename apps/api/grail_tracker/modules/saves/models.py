from __future__ import annotations

from typing import Optional

from sqlalchemy import DDL, Column, ForeignKey, Integer, event
from sqlmodel import SQLModel, Field


# immutable after creation (only whole-record delete)
class Save(SQLModel, table=True):
    __tablename__ = "saves"

    id: Optional[int] = Field(default=None, primary_key=True)
    campaign_id: int = Field(
        sa_column=Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    name: str
    created_at: str


class SavedCharacter(SQLModel, table=True):
    __tablename__ = "saved_characters"

    id: Optional[int] = Field(default=None, primary_key=True)
    save_id: int = Field(
        sa_column=Column(Integer, ForeignKey("saves.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    character_type: str
    player_name: str

    food: int = Field(default=0)
    wealth: int = Field(default=0)
    experience: int = Field(default=0)
    magic: int = Field(default=0)
    energy: int = Field(default=0)
    health: int = Field(default=0)
    terror: int = Field(default=0)

    location_number: Optional[int] = Field(default=None)


# same trigger as migration 0001, for schemas built with create_all
event.listen(
    SavedCharacter.__table__,
    "after_create",
    DDL(
        """
        CREATE TRIGGER IF NOT EXISTS trg_saved_characters_no_update
        BEFORE UPDATE ON saved_characters
        BEGIN
          SELECT RAISE(ABORT, 'immutable: saved_characters cannot be updated');
        END;
        """
    ).execute_if(dialect="sqlite"),
)

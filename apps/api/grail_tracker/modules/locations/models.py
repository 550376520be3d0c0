from __future__ import annotations

from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import SQLModel, Field


class Location(SQLModel, table=True):
    __tablename__ = "locations"
    __table_args__ = (UniqueConstraint("campaign_id", "number", name="uq_locations_campaign_id_number"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    campaign_id: int = Field(
        sa_column=Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    number: int
    name: str
    dream: Optional[str] = Field(default=None)
    nightmare: Optional[str] = Field(default=None)
    has_menhir: bool = Field(default=False)
    menhir_note: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    created_at: str
    updated_at: str


class Entry(SQLModel, table=True):
    __tablename__ = "entries"
    __table_args__ = (UniqueConstraint("location_id", "number", name="uq_entries_location_id_number"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    location_id: int = Field(
        sa_column=Column(Integer, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    number: int
    info: Optional[str] = Field(default=None)
    status: Optional[str] = Field(default=None)  # free-form tag, e.g. unknown

    created_at: str
    updated_at: str

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import SQLModel, Field


# global catalog, seeded (see grail_tracker.seed); not campaign-owned
class Status(SQLModel, table=True):
    __tablename__ = "statuses"
    __table_args__ = (CheckConstraint("checkbox_count >= 1", name="ck_statuses_checkbox_count"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    checkbox_count: int


# per-campaign progress; checked_boxes is free text "1,3,5"
class CampaignStatus(SQLModel, table=True):
    __tablename__ = "campaign_statuses"
    __table_args__ = (UniqueConstraint("campaign_id", "status_id", name="uq_campaign_statuses_campaign_id_status_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    campaign_id: int = Field(
        sa_column=Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    status_id: int = Field(
        sa_column=Column(Integer, ForeignKey("statuses.id", ondelete="CASCADE"), nullable=False)
    )
    checked_boxes: str = Field(default="")

    updated_at: str

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class StatusOut(BaseModel):
    id: int
    name: str
    checkbox_count: int


class CampaignStatusView(StatusOut):
    # joined read: defaults when the campaign never touched this status
    checked_boxes: str = ""
    checked: List[int] = Field(default_factory=list)
    campaign_status_id: Optional[int] = None


class CheckedBoxesIn(BaseModel):
    checked_boxes: Optional[str] = None


class CampaignStatusOut(BaseModel):
    id: int
    campaign_id: int
    status_id: int
    checked_boxes: str = ""
    checked: List[int] = Field(default_factory=list)
    updated_at: Optional[str] = None

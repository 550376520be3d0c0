from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from grail_tracker.modules.locations.schemas import LocationOut


class CampaignIn(BaseModel):
    name: Optional[str] = None


class CampaignOut(BaseModel):
    id: int
    name: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CampaignListItem(CampaignOut):
    location_count: int = 0


class CampaignDetailOut(CampaignOut):
    locations: List[LocationOut] = Field(default_factory=list)


class DeleteOut(BaseModel):
    success: bool = True
    message: Optional[str] = None

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from grail_tracker.core.errors import parse_id

from .schemas import CampaignStatusOut, CampaignStatusView, CheckedBoxesIn, StatusOut
from .service import list_campaign_statuses, list_statuses, set_checked_boxes

router = APIRouter(tags=["statuses"])


@router.get("/statuses", response_model=List[StatusOut])
def api_list_statuses() -> List[StatusOut]:
    return list_statuses()


@router.get("/campaigns/{campaign_id}/statuses", response_model=List[CampaignStatusView])
def api_list_campaign_statuses(campaign_id: str) -> List[CampaignStatusView]:
    return list_campaign_statuses(parse_id(campaign_id, "campaign_id"))


@router.put("/campaigns/{campaign_id}/statuses/{status_id}", response_model=CampaignStatusOut)
def api_set_checked_boxes(campaign_id: str, status_id: str, body: CheckedBoxesIn) -> CampaignStatusOut:
    return set_checked_boxes(
        parse_id(campaign_id, "campaign_id"),
        parse_id(status_id, "status_id"),
        body.checked_boxes,
    )

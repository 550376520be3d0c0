from __future__ import annotations

from typing import List

from fastapi import APIRouter, Request

from grail_tracker.core.errors import parse_id

from .schemas import CampaignDetailOut, CampaignIn, CampaignListItem, CampaignOut, DeleteOut
from .service import create_campaign, delete_campaign, get_campaign, list_campaigns, update_campaign

router = APIRouter(tags=["campaigns"])


def _rid(request: Request):
    return getattr(getattr(request, "state", None), "request_id", None)


@router.get("/campaigns", response_model=List[CampaignListItem])
def api_list_campaigns() -> List[CampaignListItem]:
    return list_campaigns()


@router.post("/campaigns", response_model=CampaignOut)
def api_create_campaign(body: CampaignIn) -> CampaignOut:
    return create_campaign(body.name)


@router.get("/campaigns/{campaign_id}", response_model=CampaignDetailOut)
def api_get_campaign(campaign_id: str) -> CampaignDetailOut:
    return get_campaign(parse_id(campaign_id, "campaign_id"))


@router.put("/campaigns/{campaign_id}", response_model=CampaignOut)
def api_update_campaign(campaign_id: str, body: CampaignIn) -> CampaignOut:
    return update_campaign(parse_id(campaign_id, "campaign_id"), body.name)


@router.delete("/campaigns/{campaign_id}", response_model=DeleteOut)
def api_delete_campaign(campaign_id: str, request: Request) -> DeleteOut:
    delete_campaign(parse_id(campaign_id, "campaign_id"), request_id=_rid(request))
    return DeleteOut(success=True, message="campaign deleted")

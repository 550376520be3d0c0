from __future__ import annotations

from typing import List

from fastapi import APIRouter, Request

from grail_tracker.core.errors import parse_id
from grail_tracker.modules.campaigns.schemas import DeleteOut

from .schemas import RestoreOut, SaveCreateIn, SaveOut
from .service import create_save, delete_save, list_saves, restore_save

router = APIRouter(tags=["saves"])


def _rid(request: Request):
    return getattr(getattr(request, "state", None), "request_id", None)


@router.get("/campaigns/{campaign_id}/saves", response_model=List[SaveOut])
def api_list_saves(campaign_id: str) -> List[SaveOut]:
    return list_saves(parse_id(campaign_id, "campaign_id"))


@router.post("/campaigns/{campaign_id}/saves", response_model=SaveOut)
def api_create_save(campaign_id: str, body: SaveCreateIn, request: Request) -> SaveOut:
    characters = None
    if body.characters is not None:
        characters = [c.model_dump() for c in body.characters]
    return create_save(parse_id(campaign_id, "campaign_id"), body.name, characters, request_id=_rid(request))


@router.delete("/campaigns/{campaign_id}/saves/{save_id}", response_model=DeleteOut)
def api_delete_save(campaign_id: str, save_id: str, request: Request) -> DeleteOut:
    delete_save(parse_id(campaign_id, "campaign_id"), parse_id(save_id, "save_id"), request_id=_rid(request))
    return DeleteOut(success=True)


@router.post("/campaigns/{campaign_id}/saves/{save_id}/restore", response_model=RestoreOut)
def api_restore_save(campaign_id: str, save_id: str, request: Request) -> RestoreOut:
    out = restore_save(parse_id(campaign_id, "campaign_id"), parse_id(save_id, "save_id"), request_id=_rid(request))
    return RestoreOut(**out)

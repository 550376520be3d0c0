from __future__ import annotations

from fastapi import APIRouter

from grail_tracker.core.errors import parse_id
from grail_tracker.modules.campaigns.schemas import DeleteOut

from .schemas import EntryIn, EntryOut, EntryPatchIn, LocationCreateIn, LocationOut, LocationPatchIn
from .service import (
    create_entry,
    create_location,
    delete_entry,
    delete_location,
    get_location,
    update_entry,
    update_location,
)

router = APIRouter(tags=["locations"])


@router.post("/campaigns/{campaign_id}/locations", response_model=LocationOut)
def api_create_location(campaign_id: str, body: LocationCreateIn) -> LocationOut:
    return create_location(parse_id(campaign_id, "campaign_id"), body.model_dump())


@router.get("/campaigns/{campaign_id}/locations/{location_id}", response_model=LocationOut)
def api_get_location(campaign_id: str, location_id: str) -> LocationOut:
    return get_location(parse_id(campaign_id, "campaign_id"), parse_id(location_id, "location_id"))


@router.put("/campaigns/{campaign_id}/locations/{location_id}", response_model=LocationOut)
def api_update_location(campaign_id: str, location_id: str, body: LocationPatchIn) -> LocationOut:
    return update_location(
        parse_id(campaign_id, "campaign_id"),
        parse_id(location_id, "location_id"),
        body.model_dump(exclude_unset=True),
    )


@router.delete("/campaigns/{campaign_id}/locations/{location_id}", response_model=DeleteOut)
def api_delete_location(campaign_id: str, location_id: str) -> DeleteOut:
    delete_location(parse_id(campaign_id, "campaign_id"), parse_id(location_id, "location_id"))
    return DeleteOut(success=True)


@router.post("/campaigns/{campaign_id}/locations/{location_id}/entries", response_model=EntryOut)
def api_create_entry(campaign_id: str, location_id: str, body: EntryIn) -> EntryOut:
    return create_entry(
        parse_id(campaign_id, "campaign_id"),
        parse_id(location_id, "location_id"),
        body.model_dump(),
    )


@router.put("/campaigns/{campaign_id}/locations/{location_id}/entries/{entry_id}", response_model=EntryOut)
def api_update_entry(campaign_id: str, location_id: str, entry_id: str, body: EntryPatchIn) -> EntryOut:
    return update_entry(
        parse_id(campaign_id, "campaign_id"),
        parse_id(location_id, "location_id"),
        parse_id(entry_id, "entry_id"),
        body.model_dump(exclude_unset=True),
    )


@router.delete("/campaigns/{campaign_id}/locations/{location_id}/entries/{entry_id}", response_model=DeleteOut)
def api_delete_entry(campaign_id: str, location_id: str, entry_id: str) -> DeleteOut:
    delete_entry(
        parse_id(campaign_id, "campaign_id"),
        parse_id(location_id, "location_id"),
        parse_id(entry_id, "entry_id"),
    )
    return DeleteOut(success=True)

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from grail_tracker.core.errors import parse_id
from grail_tracker.modules.campaigns.schemas import DeleteOut

from .schemas import CharacterCreateIn, CharacterOut, CharacterPatchIn
from .service import create_character, delete_character, list_characters, update_character

router = APIRouter(tags=["characters"])


@router.get("/campaigns/{campaign_id}/characters", response_model=List[CharacterOut])
def api_list_characters(campaign_id: str) -> List[CharacterOut]:
    return list_characters(parse_id(campaign_id, "campaign_id"))


@router.post("/campaigns/{campaign_id}/characters", response_model=CharacterOut)
def api_create_character(campaign_id: str, body: CharacterCreateIn) -> CharacterOut:
    return create_character(parse_id(campaign_id, "campaign_id"), body.character_type, body.player_name)


@router.put("/campaigns/{campaign_id}/characters/{character_id}", response_model=CharacterOut)
def api_patch_character(campaign_id: str, character_id: str, body: CharacterPatchIn) -> CharacterOut:
    return update_character(
        parse_id(campaign_id, "campaign_id"),
        parse_id(character_id, "character_id"),
        body.model_dump(exclude_unset=True),
    )


@router.delete("/campaigns/{campaign_id}/characters/{character_id}", response_model=DeleteOut)
def api_delete_character(campaign_id: str, character_id: str) -> DeleteOut:
    delete_character(parse_id(campaign_id, "campaign_id"), parse_id(character_id, "character_id"))
    return DeleteOut(success=True)

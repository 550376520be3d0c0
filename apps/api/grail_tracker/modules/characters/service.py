from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from grail_tracker.core.db import connect, now_iso
from grail_tracker.core.errors import (
    CapacityExceeded,
    Conflict,
    InvalidArgument,
    NotFound,
    require_int,
    require_text,
    translate_integrity_errors,
)
from grail_tracker.core.merge import coalesce_defined
from grail_tracker.modules.campaigns.service import require_campaign

MAX_CHARACTERS = 4

# archetype -> starting stats (fixed, not configurable)
ARCHETYPES: Dict[str, Dict[str, int]] = {
    "Iunis": {"energy": 6, "health": 9},
    "Gerdwyn": {"energy": 6, "health": 8},
    "Elgan": {"energy": 6, "health": 7},
    "Osbert": {"energy": 7, "health": 5},
}

RESOURCE_FIELDS = ("food", "wealth", "experience", "magic")
STAT_FIELDS = ("energy", "health", "terror")
COUNTER_FIELDS = RESOURCE_FIELDS + STAT_FIELDS


def validate_character_type(character_type: Optional[str], field: str = "character_type") -> str:
    if not character_type or character_type not in ARCHETYPES:
        raise InvalidArgument(
            f"invalid character type, choose from: {', '.join(ARCHETYPES)}",
            {"field": field, "value": character_type, "allowed": list(ARCHETYPES)},
        )
    return character_type


def starting_counters(character_type: str) -> Dict[str, int]:
    counters = {f: 0 for f in COUNTER_FIELDS}
    counters.update(ARCHETYPES[validate_character_type(character_type)])
    return counters


def _row_to_character(row: sqlite3.Row) -> Dict[str, Any]:
    return dict(row)


def _require_character(conn: sqlite3.Connection, campaign_id: int, character_id: int) -> sqlite3.Row:
    row = conn.execute(
        "SELECT * FROM characters WHERE id=? AND campaign_id=?;",
        (character_id, campaign_id),
    ).fetchone()
    if not row:
        raise NotFound("character not found", {"campaign_id": campaign_id, "character_id": character_id})
    return row


def characters_for_campaign(conn: sqlite3.Connection, campaign_id: int) -> List[Dict[str, Any]]:
    rows = conn.execute(
        "SELECT * FROM characters WHERE campaign_id=? ORDER BY created_at ASC, id ASC;",
        (campaign_id,),
    ).fetchall()
    return [_row_to_character(r) for r in rows]


def list_characters(campaign_id: int) -> List[Dict[str, Any]]:
    conn = connect()
    try:
        require_campaign(conn, campaign_id)
        return characters_for_campaign(conn, campaign_id)
    finally:
        conn.close()


def create_character(campaign_id: int, character_type: Optional[str], player_name: Optional[str]) -> Dict[str, Any]:
    ctype = validate_character_type(character_type)
    name = require_text(player_name, "player_name")

    conn = connect()
    try:
        require_campaign(conn, campaign_id)
        roster = characters_for_campaign(conn, campaign_id)

        if len(roster) >= MAX_CHARACTERS:
            raise CapacityExceeded(
                f"a campaign can have at most {MAX_CHARACTERS} characters",
                {"campaign_id": campaign_id, "max": MAX_CHARACTERS},
            )
        if any(c["character_type"] == ctype for c in roster):
            raise Conflict(
                f"{ctype} is already in this campaign",
                {"field": "character_type", "value": ctype, "campaign_id": campaign_id},
            )

        counters = starting_counters(ctype)
        now = now_iso()
        cols = ["campaign_id", "character_type", "player_name", *COUNTER_FIELDS, "created_at", "updated_at"]
        vals = [campaign_id, ctype, name, *[counters[f] for f in COUNTER_FIELDS], now, now]

        with translate_integrity_errors(f"{ctype} is already in this campaign", {"character_type": ctype}):
            cur = conn.execute(
                f"INSERT INTO characters ({','.join(cols)}) VALUES ({','.join(['?'] * len(cols))});",
                vals,
            )
        conn.commit()
        return _row_to_character(_require_character(conn, campaign_id, int(cur.lastrowid)))
    finally:
        conn.close()


def update_character(campaign_id: int, character_id: int, patch: Dict[str, Any]) -> Dict[str, Any]:
    if patch.get("player_name") is not None:
        patch = dict(patch, player_name=require_text(patch["player_name"], "player_name"))
    for f in COUNTER_FIELDS:
        if patch.get(f) is not None:
            require_int(patch[f], f)

    conn = connect()
    try:
        existing = _require_character(conn, campaign_id, character_id)
        merged = coalesce_defined(patch, existing, ("player_name",) + COUNTER_FIELDS)

        sets = [f"{k}=?" for k in merged] + ["updated_at=?"]
        args = list(merged.values()) + [now_iso(), character_id]
        conn.execute(f"UPDATE characters SET {', '.join(sets)} WHERE id=?;", args)
        conn.commit()
        return _row_to_character(_require_character(conn, campaign_id, character_id))
    finally:
        conn.close()


def delete_character(campaign_id: int, character_id: int) -> None:
    conn = connect()
    try:
        _require_character(conn, campaign_id, character_id)
        # saves keep their snapshot of this archetype
        conn.execute("DELETE FROM characters WHERE id=?;", (character_id,))
        conn.commit()
    finally:
        conn.close()

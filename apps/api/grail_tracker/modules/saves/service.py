"""
Save / restore of character counters.

A save is an immutable value copy of every character's counters (plus the
location number the client reports) at a point in time. Restore replays the
counters onto live characters matched by (campaign_id, character_type), not by
character id: an archetype with no live match is skipped and reported.
"""
from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from grail_tracker.core.db import connect, now_iso
from grail_tracker.core.errors import NotFound, require_int, require_text
from grail_tracker.core.obs import emit
from grail_tracker.modules.campaigns.service import require_campaign
from grail_tracker.modules.characters.service import (
    COUNTER_FIELDS,
    characters_for_campaign,
    validate_character_type,
)

SNAPSHOT_FIELDS = ("character_type", "player_name") + COUNTER_FIELDS + ("location_number",)


def _row_to_save(conn: sqlite3.Connection, row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    rows = conn.execute(
        "SELECT * FROM saved_characters WHERE save_id=? ORDER BY id ASC;",
        (int(row["id"]),),
    ).fetchall()
    d["characters"] = [dict(r) for r in rows]
    return d


def _require_save(conn: sqlite3.Connection, campaign_id: int, save_id: int) -> sqlite3.Row:
    row = conn.execute(
        "SELECT * FROM saves WHERE id=? AND campaign_id=?;",
        (save_id, campaign_id),
    ).fetchone()
    if not row:
        raise NotFound("save not found", {"campaign_id": campaign_id, "save_id": save_id})
    return row


def _snapshot_inputs(characters: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for i, c in enumerate(characters):
        validate_character_type(c.get("character_type"), f"characters[{i}].character_type")
        snap = {f: c.get(f) for f in SNAPSHOT_FIELDS}
        snap["player_name"] = snap["player_name"] or ""
        for f in COUNTER_FIELDS:
            snap[f] = require_int(snap[f] or 0, f"characters[{i}].{f}")
        if snap["location_number"] is not None:
            require_int(snap["location_number"], f"characters[{i}].location_number")
        out.append(snap)
    return out


def list_saves(campaign_id: int) -> List[Dict[str, Any]]:
    conn = connect()
    try:
        require_campaign(conn, campaign_id)
        rows = conn.execute(
            "SELECT * FROM saves WHERE campaign_id=? ORDER BY created_at DESC, id DESC;",
            (campaign_id,),
        ).fetchall()
        return [_row_to_save(conn, r) for r in rows]
    finally:
        conn.close()


def create_save(
    campaign_id: int,
    name: Optional[str],
    characters: Optional[List[Dict[str, Any]]] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    clean = require_text(name, "name")
    snapshots = _snapshot_inputs(characters) if characters is not None else None

    conn = connect()
    try:
        conn.execute("BEGIN;")
        require_campaign(conn, campaign_id)

        if snapshots is None:
            snapshots = _snapshot_inputs(characters_for_campaign(conn, campaign_id))

        cur = conn.execute(
            "INSERT INTO saves (campaign_id, name, created_at) VALUES (?,?,?);",
            (campaign_id, clean, now_iso()),
        )
        save_id = int(cur.lastrowid)

        cols = ("save_id",) + SNAPSHOT_FIELDS
        sql = f"INSERT INTO saved_characters ({','.join(cols)}) VALUES ({','.join(['?'] * len(cols))});"
        for snap in snapshots:
            conn.execute(sql, [save_id] + [snap[f] for f in SNAPSHOT_FIELDS])

        conn.commit()
        out = _row_to_save(conn, _require_save(conn, campaign_id, save_id))
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

    emit(
        "audit",
        "save.create",
        f"save {clean!r} created",
        request_id,
        __name__,
        campaign_id=campaign_id,
        save_id=save_id,
        characters=len(snapshots),
    )
    return out


def delete_save(campaign_id: int, save_id: int, request_id: Optional[str] = None) -> None:
    conn = connect()
    try:
        _require_save(conn, campaign_id, save_id)
        # saved_characters cascade
        conn.execute("DELETE FROM saves WHERE id=?;", (save_id,))
        conn.commit()
    finally:
        conn.close()
    emit("audit", "save.delete", f"save {save_id} deleted", request_id, __name__, campaign_id=campaign_id, save_id=save_id)


def restore_save(campaign_id: int, save_id: int, request_id: Optional[str] = None) -> Dict[str, Any]:
    conn = connect()
    try:
        save = _row_to_save(conn, _require_save(conn, campaign_id, save_id))

        restored = 0
        unmatched: List[str] = []
        now = now_iso()
        sets = ", ".join(f"{f}=?" for f in COUNTER_FIELDS)
        for sc in save["characters"]:
            cur = conn.execute(
                f"UPDATE characters SET {sets}, updated_at=? WHERE campaign_id=? AND character_type=?;",
                [sc[f] for f in COUNTER_FIELDS] + [now, campaign_id, sc["character_type"]],
            )
            if cur.rowcount:
                restored += cur.rowcount
            else:
                unmatched.append(sc["character_type"])

        conn.commit()
    finally:
        conn.close()

    emit(
        "audit",
        "save.restore",
        f"restored from save {save['name']!r}",
        request_id,
        __name__,
        campaign_id=campaign_id,
        save_id=save_id,
        restored=restored,
        unmatched=unmatched,
    )
    return {"success": True, "restored_from": save["name"], "restored": restored, "unmatched": unmatched}

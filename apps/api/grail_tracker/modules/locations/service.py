from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from grail_tracker.core.db import connect, now_iso
from grail_tracker.core.errors import NotFound, require_int, require_text, translate_integrity_errors
from grail_tracker.core.merge import apply_present, coalesce_defined
from grail_tracker.core.numbering import ensure_number_available, ensure_unique_numbers
from grail_tracker.modules.campaigns.service import require_campaign

DEFAULT_ENTRY_STATUS = "unknown"

LOCATION_COALESCE_FIELDS = ("number", "name", "has_menhir")
LOCATION_PRESENT_FIELDS = ("dream", "nightmare", "menhir_note", "notes")
ENTRY_COALESCE_FIELDS = ("number", "status")
ENTRY_PRESENT_FIELDS = ("info",)


def _blank_to_none(v: Any) -> Any:
    return v if v not in ("", None) else None


def _require_number(v: Any, field: str = "number") -> int:
    return require_int(v, field, minimum=1)


# -------------------------
# Rows
# -------------------------
def _row_to_entry(row: sqlite3.Row) -> Dict[str, Any]:
    return dict(row)


def _row_to_location(row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    d["has_menhir"] = bool(d.get("has_menhir"))
    return d


def _entries_for(conn: sqlite3.Connection, location_id: int) -> List[Dict[str, Any]]:
    rows = conn.execute(
        "SELECT * FROM entries WHERE location_id=? ORDER BY number ASC;",
        (location_id,),
    ).fetchall()
    return [_row_to_entry(r) for r in rows]


def _location_with_entries(conn: sqlite3.Connection, row: sqlite3.Row) -> Dict[str, Any]:
    loc = _row_to_location(row)
    loc["entries"] = _entries_for(conn, int(row["id"]))
    return loc


def locations_for_campaign(conn: sqlite3.Connection, campaign_id: int) -> List[Dict[str, Any]]:
    rows = conn.execute(
        "SELECT * FROM locations WHERE campaign_id=? ORDER BY number ASC;",
        (campaign_id,),
    ).fetchall()
    return [_location_with_entries(conn, r) for r in rows]


def _require_location(conn: sqlite3.Connection, campaign_id: int, location_id: int) -> sqlite3.Row:
    row = conn.execute(
        "SELECT * FROM locations WHERE id=? AND campaign_id=?;",
        (location_id, campaign_id),
    ).fetchone()
    if not row:
        raise NotFound("location not found", {"campaign_id": campaign_id, "location_id": location_id})
    return row


def _require_entry(conn: sqlite3.Connection, location_id: int, entry_id: int) -> sqlite3.Row:
    row = conn.execute(
        "SELECT * FROM entries WHERE id=? AND location_id=?;",
        (entry_id, location_id),
    ).fetchone()
    if not row:
        raise NotFound("entry not found", {"location_id": location_id, "entry_id": entry_id})
    return row


def _validate_entries(entries: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    entries = entries or []
    numbers = [_require_number(e.get("number"), "entries.number") for e in entries]
    ensure_unique_numbers(numbers, "entries")
    return entries


def _insert_entries(conn: sqlite3.Connection, location_id: int, entries: List[Dict[str, Any]]) -> None:
    now = now_iso()
    for e in entries:
        # nested entries keep status null unless given
        conn.execute(
            """
            INSERT INTO entries (location_id, number, info, status, created_at, updated_at)
            VALUES (?,?,?,?,?,?);
            """,
            (location_id, e["number"], _blank_to_none(e.get("info")), _blank_to_none(e.get("status")), now, now),
        )


# -------------------------
# Locations
# -------------------------
def get_location(campaign_id: int, location_id: int) -> Dict[str, Any]:
    conn = connect()
    try:
        return _location_with_entries(conn, _require_location(conn, campaign_id, location_id))
    finally:
        conn.close()


def create_location(campaign_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    number = _require_number(data.get("number"))
    name = require_text(data.get("name"), "name")
    entries = _validate_entries(data.get("entries"))

    conn = connect()
    try:
        conn.execute("BEGIN;")
        require_campaign(conn, campaign_id)
        ensure_number_available(conn, "locations", campaign_id, number)

        now = now_iso()
        with translate_integrity_errors("location number already used in this campaign", {"number": number}):
            cur = conn.execute(
                """
                INSERT INTO locations
                (campaign_id, number, name, dream, nightmare, has_menhir, menhir_note, notes, created_at, updated_at)
                VALUES (?,?,?,?,?,?,?,?,?,?);
                """,
                (
                    campaign_id,
                    number,
                    name,
                    _blank_to_none(data.get("dream")),
                    _blank_to_none(data.get("nightmare")),
                    1 if data.get("has_menhir") else 0,
                    _blank_to_none(data.get("menhir_note")),
                    _blank_to_none(data.get("notes")),
                    now,
                    now,
                ),
            )
            location_id = int(cur.lastrowid)
            _insert_entries(conn, location_id, entries)

        conn.commit()
        return _location_with_entries(conn, _require_location(conn, campaign_id, location_id))
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def update_location(campaign_id: int, location_id: int, patch: Dict[str, Any]) -> Dict[str, Any]:
    if patch.get("number") is not None:
        _require_number(patch["number"])
    if patch.get("name") is not None:
        patch = dict(patch, name=require_text(patch["name"], "name"))
    replace_entries = "entries" in patch
    new_entries = _validate_entries(patch.get("entries")) if replace_entries else []

    conn = connect()
    try:
        conn.execute("BEGIN;")
        existing = _require_location(conn, campaign_id, location_id)

        merged = coalesce_defined(patch, existing, LOCATION_COALESCE_FIELDS)
        merged.update(apply_present(patch, existing, LOCATION_PRESENT_FIELDS))

        ensure_number_available(
            conn,
            "locations",
            campaign_id,
            merged["number"],
            current_id=location_id,
            current_number=existing["number"],
        )

        with translate_integrity_errors("location number already used in this campaign", {"number": merged["number"]}):
            conn.execute(
                """
                UPDATE locations
                   SET number=?, name=?, dream=?, nightmare=?, has_menhir=?, menhir_note=?, notes=?, updated_at=?
                 WHERE id=?;
                """,
                (
                    merged["number"],
                    merged["name"],
                    merged["dream"],
                    merged["nightmare"],
                    1 if merged["has_menhir"] else 0,
                    merged["menhir_note"],
                    merged["notes"],
                    now_iso(),
                    location_id,
                ),
            )

            if replace_entries:
                conn.execute("DELETE FROM entries WHERE location_id=?;", (location_id,))
                _insert_entries(conn, location_id, new_entries)

        conn.commit()
        return _location_with_entries(conn, _require_location(conn, campaign_id, location_id))
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def delete_location(campaign_id: int, location_id: int) -> None:
    conn = connect()
    try:
        _require_location(conn, campaign_id, location_id)
        # entries cascade
        conn.execute("DELETE FROM locations WHERE id=?;", (location_id,))
        conn.commit()
    finally:
        conn.close()


# -------------------------
# Entries
# -------------------------
def create_entry(campaign_id: int, location_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    number = _require_number(data.get("number"))

    conn = connect()
    try:
        _require_location(conn, campaign_id, location_id)
        ensure_number_available(conn, "entries", location_id, number)

        now = now_iso()
        with translate_integrity_errors("entry number already used in this location", {"number": number}):
            cur = conn.execute(
                """
                INSERT INTO entries (location_id, number, info, status, created_at, updated_at)
                VALUES (?,?,?,?,?,?);
                """,
                (
                    location_id,
                    number,
                    _blank_to_none(data.get("info")),
                    data.get("status") or DEFAULT_ENTRY_STATUS,
                    now,
                    now,
                ),
            )
        conn.commit()
        return _row_to_entry(_require_entry(conn, location_id, int(cur.lastrowid)))
    finally:
        conn.close()


def update_entry(campaign_id: int, location_id: int, entry_id: int, patch: Dict[str, Any]) -> Dict[str, Any]:
    if patch.get("number") is not None:
        _require_number(patch["number"])

    conn = connect()
    try:
        _require_location(conn, campaign_id, location_id)
        existing = _require_entry(conn, location_id, entry_id)

        merged = coalesce_defined(patch, existing, ENTRY_COALESCE_FIELDS)
        merged.update(apply_present(patch, existing, ENTRY_PRESENT_FIELDS))

        ensure_number_available(
            conn,
            "entries",
            location_id,
            merged["number"],
            current_id=entry_id,
            current_number=existing["number"],
        )

        with translate_integrity_errors("entry number already used in this location", {"number": merged["number"]}):
            conn.execute(
                "UPDATE entries SET number=?, info=?, status=?, updated_at=? WHERE id=?;",
                (merged["number"], merged["info"], merged["status"], now_iso(), entry_id),
            )
        conn.commit()
        return _row_to_entry(_require_entry(conn, location_id, entry_id))
    finally:
        conn.close()


def delete_entry(campaign_id: int, location_id: int, entry_id: int) -> None:
    conn = connect()
    try:
        _require_location(conn, campaign_id, location_id)
        _require_entry(conn, location_id, entry_id)
        conn.execute("DELETE FROM entries WHERE id=?;", (entry_id,))
        conn.commit()
    finally:
        conn.close()

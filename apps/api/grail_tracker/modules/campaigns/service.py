from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from grail_tracker.core.db import connect, now_iso
from grail_tracker.core.errors import NotFound, require_text
from grail_tracker.core.obs import emit


def _row_to_campaign(row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    if "location_count" in d:
        d["location_count"] = int(d["location_count"] or 0)
    return d


def require_campaign(conn: sqlite3.Connection, campaign_id: int) -> sqlite3.Row:
    row = conn.execute("SELECT * FROM campaigns WHERE id=?;", (campaign_id,)).fetchone()
    if not row:
        raise NotFound("campaign not found", {"campaign_id": campaign_id})
    return row


def list_campaigns() -> List[Dict[str, Any]]:
    conn = connect()
    try:
        rows = conn.execute(
            """
            SELECT c.*,
                   (SELECT COUNT(1) FROM locations l WHERE l.campaign_id=c.id) AS location_count
              FROM campaigns c
             ORDER BY c.updated_at DESC, c.id DESC;
            """
        ).fetchall()
        return [_row_to_campaign(r) for r in rows]
    finally:
        conn.close()


def get_campaign(campaign_id: int) -> Dict[str, Any]:
    from grail_tracker.modules.locations.service import locations_for_campaign

    conn = connect()
    try:
        c = _row_to_campaign(require_campaign(conn, campaign_id))
        c["locations"] = locations_for_campaign(conn, campaign_id)
        return c
    finally:
        conn.close()


def create_campaign(name: Optional[str]) -> Dict[str, Any]:
    clean = require_text(name, "name")
    conn = connect()
    try:
        now = now_iso()
        cur = conn.execute(
            "INSERT INTO campaigns (name, created_at, updated_at) VALUES (?,?,?);",
            (clean, now, now),
        )
        conn.commit()
        return _row_to_campaign(require_campaign(conn, int(cur.lastrowid)))
    finally:
        conn.close()


def update_campaign(campaign_id: int, name: Optional[str]) -> Dict[str, Any]:
    clean = require_text(name, "name")
    conn = connect()
    try:
        require_campaign(conn, campaign_id)
        conn.execute(
            "UPDATE campaigns SET name=?, updated_at=? WHERE id=?;",
            (clean, now_iso(), campaign_id),
        )
        conn.commit()
        return _row_to_campaign(require_campaign(conn, campaign_id))
    finally:
        conn.close()


def delete_campaign(campaign_id: int, request_id: Optional[str] = None) -> None:
    conn = connect()
    try:
        row = require_campaign(conn, campaign_id)
        # locations/entries, characters, campaign_statuses, saves cascade
        conn.execute("DELETE FROM campaigns WHERE id=?;", (campaign_id,))
        conn.commit()
    finally:
        conn.close()
    emit("audit", "campaign.delete", f"deleted campaign {row['name']!r}", request_id, __name__, campaign_id=campaign_id)

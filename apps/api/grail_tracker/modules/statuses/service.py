"""
Checklist tracking.

Statuses are a global catalog; each campaign keeps its own progress in
campaign_statuses as free text ("1,3,5"). The text is stored as given once it
validates, and every reader decodes it with parse_checked_boxes.
"""
from __future__ import annotations

import re
import sqlite3
from typing import Any, Dict, List, Optional

from grail_tracker.core.db import connect, now_iso
from grail_tracker.core.errors import InvalidArgument, NotFound, translate_integrity_errors
from grail_tracker.modules.campaigns.service import require_campaign

_BOX_RE = re.compile(r"-?[0-9]+")


def parse_checked_boxes(raw: Optional[str]) -> List[int]:
    """Comma split, keep plain ASCII integer tokens ("-3", "12"). Empty text -> []."""
    out: List[int] = []
    for token in (raw or "").split(","):
        token = token.strip()
        if _BOX_RE.fullmatch(token):
            out.append(int(token))
    return out


def _checked(raw: Optional[str]) -> List[int]:
    return sorted(set(parse_checked_boxes(raw)))


def _require_status(conn: sqlite3.Connection, status_id: int) -> sqlite3.Row:
    row = conn.execute("SELECT * FROM statuses WHERE id=?;", (status_id,)).fetchone()
    if not row:
        raise NotFound("status not found", {"status_id": status_id})
    return row


def _row_to_campaign_status(row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    d["checked_boxes"] = d.get("checked_boxes") or ""
    d["checked"] = _checked(d["checked_boxes"])
    return d


def list_statuses() -> List[Dict[str, Any]]:
    conn = connect()
    try:
        rows = conn.execute("SELECT * FROM statuses ORDER BY name ASC;").fetchall()
        return [dict(r) for r in rows]
    finally:
        conn.close()


def list_campaign_statuses(campaign_id: int) -> List[Dict[str, Any]]:
    conn = connect()
    try:
        require_campaign(conn, campaign_id)
        rows = conn.execute(
            """
            SELECT s.id, s.name, s.checkbox_count,
                   cs.id AS campaign_status_id, cs.checked_boxes
              FROM statuses s
              LEFT JOIN campaign_statuses cs
                ON cs.status_id = s.id AND cs.campaign_id = ?
             ORDER BY s.name ASC;
            """,
            (campaign_id,),
        ).fetchall()

        items: List[Dict[str, Any]] = []
        for r in rows:
            checked_boxes = r["checked_boxes"] or ""
            items.append(
                {
                    "id": int(r["id"]),
                    "name": str(r["name"]),
                    "checkbox_count": int(r["checkbox_count"]),
                    "checked_boxes": checked_boxes,
                    "checked": _checked(checked_boxes),
                    "campaign_status_id": int(r["campaign_status_id"]) if r["campaign_status_id"] is not None else None,
                }
            )
        return items
    finally:
        conn.close()


def validate_checked_boxes(raw: Optional[str], checkbox_count: int) -> str:
    checked_boxes = raw or ""
    bad = [n for n in parse_checked_boxes(checked_boxes) if n < 1 or n > checkbox_count]
    if bad:
        raise InvalidArgument(
            f"checkbox numbers must be between 1 and {checkbox_count}",
            {"field": "checked_boxes", "value": checked_boxes, "invalid": bad, "checkbox_count": checkbox_count},
        )
    return checked_boxes


def set_checked_boxes(campaign_id: int, status_id: int, checked_boxes: Optional[str]) -> Dict[str, Any]:
    conn = connect()
    try:
        require_campaign(conn, campaign_id)
        status = _require_status(conn, status_id)
        value = validate_checked_boxes(checked_boxes, int(status["checkbox_count"]))

        now = now_iso()
        existing = conn.execute(
            "SELECT id FROM campaign_statuses WHERE campaign_id=? AND status_id=?;",
            (campaign_id, status_id),
        ).fetchone()

        if existing:
            cs_id = int(existing["id"])
            conn.execute(
                "UPDATE campaign_statuses SET checked_boxes=?, updated_at=? WHERE id=?;",
                (value, now, cs_id),
            )
        else:
            with translate_integrity_errors(
                "campaign status already exists", {"campaign_id": campaign_id, "status_id": status_id}
            ):
                cur = conn.execute(
                    """
                    INSERT INTO campaign_statuses (campaign_id, status_id, checked_boxes, updated_at)
                    VALUES (?,?,?,?);
                    """,
                    (campaign_id, status_id, value, now),
                )
            cs_id = int(cur.lastrowid)

        conn.commit()
        row = conn.execute("SELECT * FROM campaign_statuses WHERE id=?;", (cs_id,)).fetchone()
        return _row_to_campaign_status(row)
    finally:
        conn.close()

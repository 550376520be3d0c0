"""
Scoped numbering checks.

Locations are numbered within a campaign, entries within a location. The
check only decides; persisting the number is the caller's job.
"""
from __future__ import annotations

import sqlite3
from typing import Iterable, Optional

from .errors import Conflict

# table -> scope column
SCOPES = {
    "locations": "campaign_id",
    "entries": "location_id",
}


def ensure_number_available(
    conn: sqlite3.Connection,
    table: str,
    scope_id: int,
    number: int,
    *,
    current_id: Optional[int] = None,
    current_number: Optional[int] = None,
) -> None:
    scope_col = SCOPES[table]

    if current_id is not None:
        # renumbering to the same value never conflicts with itself
        if number == current_number:
            return
        row = conn.execute(
            f"SELECT id FROM {table} WHERE {scope_col}=? AND number=? AND id<>? LIMIT 1;",
            (scope_id, number, current_id),
        ).fetchone()
    else:
        row = conn.execute(
            f"SELECT id FROM {table} WHERE {scope_col}=? AND number=? LIMIT 1;",
            (scope_id, number),
        ).fetchone()

    if row is not None:
        raise Conflict(
            f"number {number} already used in this {scope_col[: -len('_id')]}",
            {"field": "number", "value": number, scope_col: scope_id, "existing_id": int(row["id"])},
        )


def ensure_unique_numbers(numbers: Iterable[int], field: str = "entries") -> None:
    seen = set()
    for n in numbers:
        if n in seen:
            raise Conflict(f"duplicate number {n} in {field}", {"field": field, "value": n})
        seen.add(n)

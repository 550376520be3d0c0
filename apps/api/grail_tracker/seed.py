"""Seed the global status catalog (upsert by name).

Usage:
    python -m grail_tracker.seed --db sqlite:///./data/app.db
"""
from __future__ import annotations

import argparse
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

from grail_tracker.core.db import connect, init_db

STATUS_CATALOG: Tuple[Tuple[str, int], ...] = (
    ("Abandonnes", 2),
    ("Actes notables", 8),
)


def seed_statuses(catalog: Sequence[Tuple[str, int]] = STATUS_CATALOG) -> List[Dict[str, Any]]:
    conn = connect()
    try:
        for name, checkbox_count in catalog:
            if checkbox_count < 1:
                raise ValueError(f"checkbox_count must be >= 1 for status {name!r}")
            row = conn.execute("SELECT id FROM statuses WHERE name=?;", (name,)).fetchone()
            if row:
                conn.execute("UPDATE statuses SET checkbox_count=? WHERE id=?;", (checkbox_count, row["id"]))
            else:
                conn.execute("INSERT INTO statuses (name, checkbox_count) VALUES (?,?);", (name, checkbox_count))
        conn.commit()

        names = [n for n, _ in catalog]
        rows = conn.execute(
            f"SELECT * FROM statuses WHERE name IN ({','.join(['?'] * len(names))}) ORDER BY name ASC;",
            names,
        ).fetchall() if names else []
        return [dict(r) for r in rows]
    finally:
        conn.close()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Create tables and seed the status catalog.")
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="DATABASE_URL override (default: env DATABASE_URL or sqlite:///./data/app.db)",
    )
    args = parser.parse_args(argv)
    if args.db:
        os.environ["DATABASE_URL"] = args.db

    init_db()
    print("Seeding statuses...")
    for s in seed_statuses():
        print(f"  - {s['name']} ({s['checkbox_count']} checkboxes)")
    print("Seeding complete!")


if __name__ == "__main__":
    main()

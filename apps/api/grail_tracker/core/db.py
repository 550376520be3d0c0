"""
DB utilities (sqlite default).

Defaults:
- DATABASE_URL: sqlite:///./data/app.db

Schema is owned by the SQLModel table models (created through the SQLAlchemy
engine); services use plain sqlite3 connections with foreign keys enabled so
that ON DELETE CASCADE applies.
"""
from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///./data/app.db")


def _repo_root() -> Path:
    # apps/api/grail_tracker/core/db.py -> repo root = parents[4]
    return Path(__file__).resolve().parents[4]


def resolve_sqlite_path(database_url: str) -> Optional[Path]:
    if not database_url.startswith("sqlite:///"):
        return None
    p = database_url[len("sqlite:///") :]

    # absolute unix
    if p.startswith("/"):
        return Path(p)

    # absolute windows drive, both C:/ and C:\ forms
    if len(p) >= 3 and p[1] == ":" and (p[2] == "/" or p[2] == "\\"):
        return Path(p)

    # relative -> repo root
    return (_repo_root() / p).resolve()


def now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def connect() -> sqlite3.Connection:
    url = get_database_url()
    sp = resolve_sqlite_path(url)
    if sp is None:
        raise ValueError(f"Only sqlite supported for now, got DATABASE_URL={url!r}")
    sp.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(sp), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


_engine: Optional[Engine] = None


def _enable_sqlite_fk(dbapi_conn: Any, _record: Any) -> None:
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def get_engine() -> Engine:
    global _engine
    if _engine is not None:
        return _engine

    url = get_database_url()
    connect_args = {}
    if url.startswith("sqlite:///"):
        connect_args = {"check_same_thread": False}

    sp = resolve_sqlite_path(url)
    if sp is not None:
        sp.parent.mkdir(parents=True, exist_ok=True)
        url = "sqlite:///" + sp.as_posix()

    _engine = create_engine(url, future=True, connect_args=connect_args)
    if url.startswith("sqlite"):
        event.listen(_engine, "connect", _enable_sqlite_fk)
    return _engine


def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


def init_db() -> None:
    # register table models on SQLModel.metadata
    from grail_tracker.modules.campaigns import models as _campaigns  # noqa: F401
    from grail_tracker.modules.locations import models as _locations  # noqa: F401
    from grail_tracker.modules.statuses import models as _statuses  # noqa: F401
    from grail_tracker.modules.characters import models as _characters  # noqa: F401
    from grail_tracker.modules.saves import models as _saves  # noqa: F401

    SQLModel.metadata.create_all(get_engine())


def db_health() -> Dict[str, Any]:
    url = get_database_url()
    kind = "sqlite" if url.startswith("sqlite") else "unknown"
    sp = resolve_sqlite_path(url)
    path = str(sp.as_posix()) if sp is not None else url

    try:
        eng = get_engine()
        with eng.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok", "kind": kind, "path": path}
    except Exception as e:
        return {"status": "error", "kind": kind, "path": path, "error": str(e)}

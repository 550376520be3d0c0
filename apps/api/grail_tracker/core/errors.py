"""
Domain error kinds raised by the services.

main.py renders every DomainError with the shared error envelope
(error, message, request_id, details); anything else falls through to the
internal_error handler.
"""
from __future__ import annotations

import re
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class DomainError(Exception):
    status_code = 500
    error = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidArgument(DomainError):
    status_code = 400
    error = "invalid_argument"


class NotFound(DomainError):
    status_code = 404
    error = "not_found"


class Conflict(DomainError):
    status_code = 409
    error = "conflict"


class CapacityExceeded(DomainError):
    status_code = 409
    error = "capacity_exceeded"


_ID_RE = re.compile(r"^[0-9]+$")

# SQLite INTEGER is a signed 64-bit value
MAX_SQLITE_INT = 2**63 - 1


def parse_id(raw: Any, field: str = "id") -> int:
    """Validate an identifier taken from a path as a positive integer."""
    s = str(raw).strip() if raw is not None else ""
    if not _ID_RE.match(s) or not 1 <= int(s) <= MAX_SQLITE_INT:
        raise InvalidArgument(f"invalid {field}", {"field": field, "value": raw})
    return int(s)


def require_text(value: Optional[str], field: str) -> str:
    """Return value stripped; blank or missing is an InvalidArgument."""
    v = (value or "").strip()
    if not v:
        raise InvalidArgument(f"{field} is required", {"field": field})
    return v


@contextmanager
def translate_integrity_errors(message: str, details: Optional[Dict[str, Any]] = None) -> Iterator[None]:
    # check-then-act is not locked; a concurrent writer surfaces here
    try:
        yield
    except sqlite3.IntegrityError as e:
        if "UNIQUE" not in str(e).upper():
            raise
        raise Conflict(message, dict(details or {}, constraint=str(e))) from e


def require_int(value: Any, field: str, *, minimum: Optional[int] = None) -> int:
    """Integer that fits a SQLite INTEGER column (bool is not an integer here)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{field} must be an integer", {"field": field, "value": value})
    low = -MAX_SQLITE_INT - 1 if minimum is None else minimum
    if not low <= value <= MAX_SQLITE_INT:
        raise InvalidArgument(
            f"{field} must be between {low} and {MAX_SQLITE_INT}",
            {"field": field, "value": value},
        )
    return value

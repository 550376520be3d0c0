"""
Observability helpers shared by main.py and the services.

Events are single JSON lines on stdout with the locked keys:
ts, level, message, request_id, event, module.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from grail_tracker.core.db import now_iso

_log = logging.getLogger("grail_tracker")
if not _log.handlers:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))


def emit(level: str, event: str, message: str, request_id: Optional[str], module: str, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "ts": now_iso(),
        "level": level.lower(),
        "message": message,
        "request_id": request_id,
        "event": event,
        "module": module,
    }
    payload.update(extra)
    print(json.dumps(payload, ensure_ascii=False), flush=True)
    return payload

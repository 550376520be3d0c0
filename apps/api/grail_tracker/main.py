from contextlib import asynccontextmanager

from fastapi import FastAPI
import os

from grail_tracker.core.db import db_health, init_db
from grail_tracker.modules.campaigns.router import router as campaigns_router
from grail_tracker.modules.characters.router import router as characters_router
from grail_tracker.modules.locations.router import router as locations_router
from grail_tracker.modules.saves.router import router as saves_router
from grail_tracker.modules.statuses.router import router as statuses_router
from grail_tracker.seed import seed_statuses

APP_VERSION = os.getenv("APP_VERSION", "0.1.0")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    if os.getenv("SEED_STATUSES", "1") == "1":
        seed_statuses()
    yield


app = FastAPI(title="Tainted Grail Campaign Tracker API", version=APP_VERSION, lifespan=lifespan)

# === OBSERVABILITY FOUNDATIONS ===
# Contract locks:
# - /health keys: status, version, db, last_error_summary
# - X-Request-Id in/out (missing -> generated; always echoed back; also on errors)
# - Error envelope keys: error, message, request_id, details
import uuid
from typing import Any, Optional
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from grail_tracker.core.errors import DomainError
from grail_tracker.core.obs import emit as _emit

_last_error: Optional[str] = None


def _err_envelope(error: str, message: str, request_id: Optional[str], details: Any, status_code: int):
    headers = {}
    if request_id:
        headers["X-Request-Id"] = request_id
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "request_id": request_id,
            "details": details,
        },
        headers=headers,
    )

@app.middleware("http")
async def _request_id_mw(request: Request, call_next):
    rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex.upper()
    request.state.request_id = rid
    _emit("info", "http.request.start", f"{request.method} {request.url.path}", rid, __name__)
    try:
        resp = await call_next(request)
    except Exception as e:
        _emit("error", "http.request.exception", str(e), rid, __name__)
        raise
    resp.headers["X-Request-Id"] = rid
    _emit("info", "http.request.end", f"{request.method} {request.url.path} -> {getattr(resp,'status_code',None)}", rid, __name__)
    return resp

@app.exception_handler(DomainError)
async def _domain_exc_handler(request: Request, exc: DomainError):
    rid = getattr(request.state, "request_id", None)
    _emit("warning", "domain.error", exc.message, rid, __name__, error=exc.error)
    return _err_envelope(exc.error, exc.message, rid, exc.details, exc.status_code)

@app.exception_handler(StarletteHTTPException)
async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
    rid = getattr(request.state, "request_id", None)
    return _err_envelope("http_error", str(exc.detail), rid, {"status_code": exc.status_code}, exc.status_code)

@app.exception_handler(RequestValidationError)
async def _validation_exc_handler(request: Request, exc: RequestValidationError):
    rid = getattr(request.state, "request_id", None)
    return _err_envelope("validation_error", "request validation failed", rid, exc.errors(), 422)

@app.exception_handler(Exception)
async def _unhandled_exc_handler(request: Request, exc: Exception):
    global _last_error
    rid = getattr(request.state, "request_id", None)
    _last_error = f"{type(exc).__name__}: {exc}"
    _emit("error", "internal.error", _last_error, rid, __name__)
    return _err_envelope("internal_error", "internal server error", rid, {"type": type(exc).__name__}, 500)
# === END OBSERVABILITY FOUNDATIONS ===


app.include_router(campaigns_router)
app.include_router(locations_router)
app.include_router(statuses_router)
app.include_router(characters_router)
app.include_router(saves_router)


@app.get("/health")
def health():
    # Contract keys are locked
    db = db_health()
    return {
        'status': 'ok' if db.get('status') == 'ok' else 'degraded',
        'version': os.getenv('APP_VERSION', APP_VERSION),
        'db': db,
        'last_error_summary': _last_error,
    }

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from edutable.api.deps import get_store
from edutable.core.config import Settings, get_settings
from edutable.repositories.store import EntityStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/ready")
def health_ready(
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    store_ok = True
    store_error: str | None = None
    counts: dict[str, int] = {}
    try:
        counts = {
            "students": store.students.count(),
            "faculty": store.faculty.count(),
            "courses": store.courses.count(),
            "rooms": store.rooms.count(),
            "scenarios": store.scenarios.count(),
            "timetable_entries": store.timetable.count(),
        }
    except Exception as exc:  # pragma: no cover - backend dependent
        logger.exception("Entity store readiness probe failed")
        store_ok = False
        store_error = str(exc)

    payload = {
        "status": "ok" if store_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "store": {
            "backend": settings.storage_backend,
            "ok": store_ok,
            "counts": counts,
            "error": store_error,
        },
    }
    return JSONResponse(status_code=200 if store_ok else 503, content=payload)

# storefront_api/routers/health.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text

from storefront_api.container import Container
from storefront_api.logging import get_logger
from storefront_api.schemas.common import Envelope, ok

from .deps import get_container

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["system"])


@router.get("", response_model=Envelope[Dict[str, Any]])
def liveness() -> Envelope[Dict[str, Any]]:
    """
    Liveness probe: 200 while the process is serving.
    """
    return ok({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})


@router.get("/ready", response_model=Envelope[Dict[str, Any]])
def readiness(response: Response, container: Container = Depends(get_container)) -> Envelope[Dict[str, Any]]:
    """
    Readiness probe: checks the database and reports whether the notifier
    is configured. 503 when the database is unreachable.
    """
    checks: Dict[str, Any] = {"database": "down", "notifier": "disabled"}

    try:
        with container.engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        checks["database"] = "up"
    except Exception as exc:
        logger.error("health_check_failed", component="database", error=str(exc))

    if container.notifier().enabled:
        checks["notifier"] = "enabled"

    if checks["database"] != "up":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return Envelope(success=False, data=checks, message="Service not ready")
    return ok(checks)

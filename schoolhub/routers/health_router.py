from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from ..db.session import DatabaseReadiness, get_readiness

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["Health"])

HEALTHY_CACHE = "public, max-age=30, stale-while-revalidate=60"
NO_CACHE = "no-cache, no-store, must-revalidate"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
def health_check(readiness: DatabaseReadiness = Depends(get_readiness)):
    try:
        try:
            readiness.ensure_schema()
        except Exception as e:
            # Reported below as a disconnected store
            logger.warning(f"Schema setup skipped: {e}")

        db_status = readiness.status()
        if db_status["available"]:
            return JSONResponse(
                status_code=200,
                content={
                    "status": "healthy",
                    "database": "connected",
                    "initialized": db_status["initialized"],
                    "timestamp": _now(),
                },
                headers={"Cache-Control": HEALTHY_CACHE},
            )
        return JSONResponse(
            status_code=503,
            content={
                "status": "degraded",
                "database": "disconnected",
                "initialized": db_status["initialized"],
                "error": db_status.get("error"),
                "message": "Application running in offline mode",
                "timestamp": _now(),
            },
            headers={"Cache-Control": NO_CACHE},
        )
    except Exception as e:
        logger.error(f"Health check failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "database": "error",
                "error": str(e),
                "timestamp": _now(),
            },
            headers={"Cache-Control": NO_CACHE},
        )

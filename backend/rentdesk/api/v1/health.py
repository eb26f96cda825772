"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter
from sqlalchemy import text

from rentdesk.api.deps import SessionDep
from rentdesk.core.config import get_settings

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck() -> dict[str, str]:
    """Return application health metadata."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.app_env,
    }


@router.get("/db", summary="Database connectivity check")
async def database_healthcheck(session: SessionDep) -> dict[str, str]:
    """Run a trivial query against the configured database."""
    await session.execute(text("SELECT 1"))
    return {"status": "ok", "database": "reachable"}

import time
from datetime import datetime, timezone
from typing import Annotated, TypedDict

from fastapi import APIRouter, Depends, Request

from helper.config_helper import VERSION, Settings

health_router = APIRouter()

_started_at = time.monotonic()


class HealthData(TypedDict):
    status: str
    timestamp: str
    uptime: int
    environment: str
    version: str


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings  # pyright: ignore[reportAny]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@health_router.get("/health")
async def health(settings: Annotated[Settings, Depends(get_settings)]) -> HealthData:
    return {
        "status": "healthy",
        "timestamp": _now(),
        "uptime": int(time.monotonic() - _started_at),
        "environment": settings.environment,
        "version": VERSION,
    }


@health_router.get("/api/health")
async def api_health() -> dict[str, str]:
    return {"status": "Server is running", "timestamp": _now(), "version": VERSION}


@health_router.get("/ready")
async def ready() -> dict[str, str]:
    return {"status": "ready"}


@health_router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "alive"}


@health_router.get("/api")
async def api_info() -> dict[str, object]:
    return {
        "name": "Coin Lobby API",
        "version": VERSION,
        "endpoints": {
            "wallet": "/api/wallet",
            "games": "/api/games",
            "coinPacks": "/api/coin-packs",
            "health": "/api/health",
        },
    }

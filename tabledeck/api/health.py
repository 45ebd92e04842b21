"""
Health check endpoints.

`/health` answers as long as the process is up; `/ready` also requires the
card database, without which no card list can be exported.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from tabledeck.services.card_database import get_card_database

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    card_database: str | None = None
    cards: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Never touches the card database."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response) -> HealthResponse:
    """Readiness probe: 503 until the card database has been downloaded."""
    try:
        card_db = get_card_database()
    except FileNotFoundError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", card_database="missing")
    return HealthResponse(status="ready", card_database="loaded", cards=len(card_db))

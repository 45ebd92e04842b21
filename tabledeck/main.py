import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from tabledeck.api import export_router, health_router
from tabledeck.config import settings
from tabledeck.services.card_database import get_card_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Warm the card database cache so the first export doesn't pay for it."""
    try:
        await run_in_threadpool(get_card_database)
    except FileNotFoundError as e:
        logger.warning("Starting without a card database: %s", e)
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("tabledeck"),
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(export_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from nuban import __version__
from nuban.banks.router import router as banks_router
from nuban.core.config import get_settings
from nuban.core.logging import configure_logging, request_id_middleware
from nuban.prediction.errors import InvalidInputError
from nuban.prediction.selector import get_suggestion_service

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.ENV, settings.DEBUG)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm the bank registry so the first request does not pay for loading it."""
    logger.info(f"Starting NUBAN bank prediction service (env: {settings.ENV})")

    service = get_suggestion_service()
    try:
        banks = await service.get_banks()
        logger.info(
            f"Bank registry ready: {len(banks)} banks from "
            f"{service.registry.provider.get_source_name()}"
        )
    except InvalidInputError as e:
        logger.error(f"Bank registry unavailable at startup: {e.message}")

    yield

    logger.info("NUBAN bank prediction service stopped")


app = FastAPI(title="NUBAN Bank Prediction", version=__version__, lifespan=lifespan)
app.middleware("http")(request_id_middleware)
app.include_router(banks_router)


@app.get("/")
def health_check():
    logger.debug("Health check endpoint called")
    return {"status": "ok"}


@app.get("/healthz")
def healthz():
    registry_loaded = get_suggestion_service().registry.is_loaded
    return {"status": "healthy", "env": settings.ENV, "registry_loaded": registry_loaded}

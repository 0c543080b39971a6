"""Application lifespan: startup and shutdown.

Wiring only: logging setup, shared Keycloak client init and close.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from authflow.infrastructure.keycloak.client import close_keycloak, init_keycloak
from authflow.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit close the Keycloak HTTP pool."""
    setup_logging()
    init_keycloak()
    logger.info("Startup complete")

    yield

    await close_keycloak()

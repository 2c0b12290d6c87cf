"""HTTP liveness endpoint for external uptime checks."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

LOGGER = logging.getLogger(__name__)


def create_app(name: str) -> FastAPI:
    """Create the FastAPI app exposing ``GET /``."""

    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        return f"{name} is running!"

    return app


async def serve(app: FastAPI, host: str, port: int) -> None:
    """Serve the app on the current event loop until cancelled."""

    config = uvicorn.Config(app, host=host, port=port, log_level="warning", access_log=False)
    server = uvicorn.Server(config)
    LOGGER.info("Server running on http://%s:%s", host, port)
    await server.serve()

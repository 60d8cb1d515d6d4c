#!/usr/bin/env python3
"""
Main entry point for the consent API service.

This script initializes and runs the FastAPI application that decodes IAB
Vendor Consent Strings and answers purpose and vendor consent queries.

Key responsibilities include:
- Configuring application-wide logging.
- Initializing the FastAPI application, including:
    - Setting up Prometheus metrics middleware and the /metrics endpoint.
    - Mapping decode errors to HTTP responses.
    - Registering the consent API router.
- Providing a command-line interface to start the Uvicorn server.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import ResponseValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from consent_daemon._version import VERSION
from consent_daemon.api_routers import api_router_consent
from consent_daemon.config import configure_logger, get_fastapi_config, get_server_config
from consent_daemon.middleware import prometheus_http_middleware
from consent_daemon.models import DecodeErrorResponse
from consent_decoder import DecodeError, InvalidState

logger = logging.getLogger(__name__)


def create_app():
    # ── FastAPI setup ──────────────────────────────────────────────────────────
    fastapi_config = get_fastapi_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{fastapi_config['title']} {VERSION} starting up...")
        yield
        logger.info(f"{fastapi_config['title']} shutting down...")

    app = FastAPI(
        title=fastapi_config["title"],
        version=VERSION,
        servers=[{"url": "/", "description": fastapi_config["server_description"]}],
        root_path=fastapi_config["root_path"],
        lifespan=lifespan,
    )

    # ── Middleware ─────────────────────────────────────────────────────────────
    @app.middleware("http")
    async def prometheus_middleware_handler(request, call_next):
        """Prometheus metrics middleware for HTTP requests."""
        return await prometheus_http_middleware(request, call_next)

    # ── Exception Handlers ─────────────────────────────────────────────────────
    @app.exception_handler(DecodeError)
    async def decode_error_handler(request: Request, exc: DecodeError):
        """Bad consent strings are the caller's problem: 422 with the error class."""
        body = DecodeErrorResponse(detail=str(exc), error=type(exc).__name__)
        return JSONResponse(status_code=422, content=body.model_dump())

    @app.exception_handler(InvalidState)
    async def invalid_state_handler(request: Request, exc: InvalidState):
        """Decoder defects are logged with a traceback and reported as 500."""
        logger.error(f"Decoder invariant violated for {request.url.path}: {exc}", exc_info=exc)
        return PlainTextResponse("Internal decoder error", status_code=500)

    @app.exception_handler(ResponseValidationError)
    async def validation_exception_handler(request, exc):
        """Handles response validation errors with a plain text message."""
        return PlainTextResponse(f"Validation error: {exc}", status_code=500)

    # ── Health and metrics ─────────────────────────────────────────────────────
    @app.get("/healthz")
    async def healthz():
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/metrics")
    async def metrics():
        """Prometheus exposition of the service metrics."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # ── API Routers ────────────────────────────────────────────────────────────
    app.include_router(api_router_consent, prefix="/api")

    return app


app = create_app()


# ── Entrypoint ─────────────────────────────────────────────────────────────
def main():
    """
    Main function to run the Uvicorn server for the consent API.

    Configures logging, reads host, port, and log level from the environment,
    then starts the Uvicorn server.
    """
    configure_logger()
    server_config = get_server_config()
    host = server_config["host"]
    port = server_config["port"]
    log_level = server_config["log_level"]

    logger.info(f"Starting Uvicorn server on {host}:{port} with log level '{log_level}'")
    uvicorn.run(app, host=host, port=port, log_level=log_level)


if __name__ == "__main__":
    main()

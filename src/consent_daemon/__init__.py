"""
consent_daemon

HTTP service for decoding IAB Vendor Consent Strings, built on FastAPI.

Modules:
    - api_routers: API endpoint definitions
    - config: Logging and environment-driven settings
    - main: FastAPI application setup and server entry point
    - metrics: Prometheus metric definitions
    - middleware: HTTP metrics middleware
    - models: Pydantic models for API responses
"""

from ._version import VERSION
from .config import configure_logger, get_fastapi_config, get_server_config
from .main import app, create_app, main

__all__ = [
    "VERSION",
    "app",
    "create_app",
    "main",
    "configure_logger",
    "get_fastapi_config",
    "get_server_config",
]

"""
Handles application configuration for the consent API service.

This module is responsible for:
- Configuring logging for the application.
- Providing FastAPI application settings (title, description, root_path).
- Providing Uvicorn server settings (host, port, log level).

All settings come from environment variables with sensible defaults.
"""

import logging
import os

import coloredlogs

# ── Logging Configuration ──────────────────────────────────────────────────
# This logger is for messages originating from the config.py module itself.
module_logger = logging.getLogger(__name__)

DEFAULT_PORT = 8000


def configure_logger():
    root_logger = logging.getLogger()
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()

    log_level_int = getattr(logging, log_level_str, None)
    if not isinstance(log_level_int, int):
        module_logger.warning(f"Invalid LOG_LEVEL '{log_level_str}'. Defaulting to INFO.")
        log_level_int = logging.INFO

    log_format = "%(asctime)s %(name)s[%(process)d] %(levelname)s %(message)s"

    # Handlers filter by their own level; the root logger passes everything.
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    coloredlogs.install(
        level=log_level_int,
        fmt=log_format,
        logger=root_logger,
        reconfigure=True,
    )

    return root_logger


# ── FastAPI Configuration ──────────────────────────────────────────────────
def get_fastapi_config():
    """
    Retrieves FastAPI application settings from environment variables.

    Returns:
        dict: A dictionary containing title, server_description, and root_path
              for the FastAPI application.
    """
    return {
        "title": os.getenv("CONSENT_API_TITLE", "iab-consent-api"),
        "server_description": os.getenv(
            "CONSENT_API_SERVER_DESCRIPTION", "IAB Vendor Consent String decoder"
        ),
        "root_path": os.getenv("CONSENT_API_ROOT_PATH", ""),
    }


# ── Server Configuration ───────────────────────────────────────────────────
def get_server_config():
    """
    Retrieves Uvicorn server settings from environment variables.

    An unparseable CONSENT_API_PORT is logged and replaced by the default port.

    Returns:
        dict: A dictionary containing 'host', 'port' (int) and 'log_level'.
    """
    port_str = os.getenv("CONSENT_API_PORT", str(DEFAULT_PORT))
    try:
        port = int(port_str)
    except ValueError:
        module_logger.warning(
            f"Invalid CONSENT_API_PORT '{port_str}'. Defaulting to {DEFAULT_PORT}."
        )
        port = DEFAULT_PORT

    return {
        "host": os.getenv("CONSENT_API_HOST", "0.0.0.0"),
        "port": port,
        "log_level": os.getenv("CONSENT_API_LOG_LEVEL", "info").lower(),
    }

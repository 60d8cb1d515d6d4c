"""
api_routers

This package contains FastAPI APIRouter modules that define the API endpoints
for the consent API.

Routers:
    - consent: Endpoints for decoding consent strings and checking purposes and vendors
"""

from .consent import api_router_consent

__all__ = ["api_router_consent"]

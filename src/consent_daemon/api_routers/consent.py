"""
Defines FastAPI APIRouter for decoding and querying consent strings.

This module includes routes for:
- Decoding a consent string into all of its fields.
- Checking whether one or more purposes are allowed.
- Checking whether a vendor has consent.

Decode failures propagate as consent_decoder.DecodeError and are turned into
HTTP 422 responses by the exception handlers installed in main.create_app.
"""

import logging
import time
from typing import List

from fastapi import APIRouter, Path, Query

from common.models import ParsedConsent
from consent_daemon.metrics import (
    DECODE_ERRORS,
    DECODE_LATENCY,
    DECODE_REQUESTS,
    SUCCESSFUL_DECODES,
)
from consent_daemon.models import ConsentResponse, PurposeCheckResponse, VendorCheckResponse
from consent_decoder import DecodeError, parse

logger = logging.getLogger(__name__)

api_router_consent = APIRouter()  # FastAPI router for consent string endpoints


def decode_consent(consent_string: str) -> ParsedConsent:
    """
    Decode a consent string, recording request, error and latency metrics.

    Raises:
        DecodeError: If the string is not valid base64 or is truncated.
    """
    DECODE_REQUESTS.inc()
    start = time.perf_counter()
    try:
        consent = parse(consent_string)
    except DecodeError as e:
        DECODE_ERRORS.labels(error=type(e).__name__).inc()
        raise
    finally:
        DECODE_LATENCY.observe(time.perf_counter() - start)
    SUCCESSFUL_DECODES.inc()
    return consent


@api_router_consent.get("/consent/{consent_string}", response_model=ConsentResponse)
async def get_consent(consent_string: str):
    """
    Decode a consent string.

    Args:
        consent_string: URL-safe base64 consent string.

    Returns:
        Every decoded field of the consent string.
    """
    return ConsentResponse.from_parsed(decode_consent(consent_string))


@api_router_consent.get(
    "/consent/{consent_string}/purposes", response_model=PurposeCheckResponse
)
async def check_purposes(
    consent_string: str,
    ids: List[int] = Query(default=[], description="Purpose ids to check"),
):
    """
    Check a set of purposes against a consent string.

    An empty ``ids`` list is trivially allowed.
    """
    consent = decode_consent(consent_string)
    return PurposeCheckResponse(
        purposes={pid: consent.purpose_allowed(pid) for pid in ids},
        all_allowed=consent.every_purpose_allowed(ids),
    )


@api_router_consent.get(
    "/consent/{consent_string}/vendors/{vendor_id}", response_model=VendorCheckResponse
)
async def check_vendor(
    consent_string: str,
    vendor_id: int = Path(..., ge=0, le=0xFFFF),
):
    """Check whether a vendor has consent in a consent string."""
    consent = decode_consent(consent_string)
    allowed = consent.vendor_allowed(vendor_id)
    logger.debug(f"Vendor {vendor_id} allowed={allowed} ({consent.encoding_mode.value})")
    return VendorCheckResponse(
        vendor_id=vendor_id, allowed=allowed, encoding_mode=consent.encoding_mode
    )

"""
Defines Pydantic models for API request/response validation and serialization.

These models are used by the consent router to give the decoded record a
flat, JSON-friendly shape and to document the API.

Models:
    - RangeEntryModel: One vendor id range in a range-encoded consent string
    - ConsentResponse: Every decoded field of a consent string
    - PurposeCheckResponse: Result of checking a set of purpose ids
    - VendorCheckResponse: Result of checking a single vendor id
    - DecodeErrorResponse: Body returned when a consent string cannot be decoded
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from common.models import EncodingMode, ParsedConsent


class RangeEntryModel(BaseModel):
    """An inclusive vendor id range, as exposed by the API."""

    start_vendor_id: int
    end_vendor_id: int


class ConsentResponse(BaseModel):
    """All fields of a decoded consent string."""

    version: int
    created: datetime
    last_updated: datetime
    cmp_id: int
    cmp_version: int
    consent_screen: int
    consent_language: str
    vendor_list_version: int
    purposes_allowed: List[int]
    max_vendor_id: int
    encoding_mode: EncodingMode
    default_consent: bool = Field(
        False, description="Consent for vendors outside every range. Only meaningful in range mode."
    )
    approved_vendor_ids: List[int] = Field(
        default_factory=list, description="Vendors approved in bitfield mode."
    )
    range_entries: List[RangeEntryModel] = Field(
        default_factory=list, description="Exceptions to default_consent in range mode."
    )

    @classmethod
    def from_parsed(cls, consent: ParsedConsent) -> "ConsentResponse":
        return cls(
            version=consent.version,
            created=consent.created,
            last_updated=consent.last_updated,
            cmp_id=consent.cmp_id,
            cmp_version=consent.cmp_version,
            consent_screen=consent.consent_screen,
            consent_language=consent.consent_language,
            vendor_list_version=consent.vendor_list_version,
            purposes_allowed=sorted(consent.purposes_allowed),
            max_vendor_id=consent.max_vendor_id,
            encoding_mode=consent.encoding_mode,
            default_consent=consent.default_consent,
            approved_vendor_ids=sorted(consent.approved_vendor_ids),
            range_entries=[
                RangeEntryModel(start_vendor_id=e.start_vendor_id, end_vendor_id=e.end_vendor_id)
                for e in consent.range_entries
            ],
        )


class PurposeCheckResponse(BaseModel):
    """Per-purpose results plus whether all requested purposes are allowed."""

    purposes: Dict[int, bool]
    all_allowed: bool


class VendorCheckResponse(BaseModel):
    """Whether a single vendor has consent."""

    vendor_id: int
    allowed: bool
    encoding_mode: EncodingMode


class DecodeErrorResponse(BaseModel):
    """Returned with HTTP 422 when a consent string cannot be decoded."""

    detail: str
    error: str = Field(..., description="Error class, e.g. 'MalformedInput' or 'OutOfRange'.")

"""
common.models

Shared Pydantic models for use across the consent decoder and the consent API.

ParsedConsent:
    A fully decoded IAB Vendor Consent String (v1.1). Built once by
    consent_decoder.decode and immutable afterwards.

BitFieldVendors / RangeVendors:
    The two vendor consent encodings, modelled as a tagged union on
    ``encoding_mode`` so that vendor queries dispatch without a fallback branch.

RangeEntry:
    An inclusive span of vendor ids inside a RangeVendors section.
"""

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_PURPOSE_ID = 24
MAX_VENDOR_ID = 0xFFFF


class EncodingMode(str, Enum):
    """How per-vendor consent is stored in the string."""

    BIT_FIELD = "bitfield"
    RANGE = "range"


class RangeEntry(BaseModel):
    """
    RangeEntry

    An inclusive range of vendor ids. A single-id entry has
    start_vendor_id == end_vendor_id.

    Vendor ids issued by the global vendor list start at 1, but the bounds
    here are the full 16-bit field, 0..65535. A zero read from a corrupt
    string is kept as data, so decoding never fails with a validation error
    outside MalformedInput, OutOfRange and InvalidState. A zero entry never
    matches a real vendor id.

    Attributes:
        start_vendor_id (int): First vendor id covered.
        end_vendor_id (int): Last vendor id covered.
    """

    model_config = ConfigDict(frozen=True)

    start_vendor_id: int = Field(ge=0, le=MAX_VENDOR_ID)
    end_vendor_id: int = Field(ge=0, le=MAX_VENDOR_ID)

    def contains(self, vendor_id: int) -> bool:
        return self.start_vendor_id <= vendor_id <= self.end_vendor_id


class BitFieldVendors(BaseModel):
    """Vendor consent stored as one bit per vendor id up to max_vendor_id."""

    model_config = ConfigDict(frozen=True)

    encoding_mode: Literal[EncodingMode.BIT_FIELD] = EncodingMode.BIT_FIELD
    approved_vendor_ids: frozenset[int] = frozenset()

    def allows(self, vendor_id: int) -> bool:
        return vendor_id in self.approved_vendor_ids


class RangeVendors(BaseModel):
    """
    Vendor consent stored as ranges that are exceptions to default_consent.

    Entries keep decode order. They may overlap or arrive unsorted; the first
    entry containing a vendor id decides for it.
    """

    model_config = ConfigDict(frozen=True)

    encoding_mode: Literal[EncodingMode.RANGE] = EncodingMode.RANGE
    default_consent: bool = False
    entries: tuple[RangeEntry, ...] = ()

    def allows(self, vendor_id: int) -> bool:
        for entry in self.entries:
            if entry.contains(vendor_id):
                return not self.default_consent
        return self.default_consent


VendorConsent = Annotated[
    Union[BitFieldVendors, RangeVendors], Field(discriminator="encoding_mode")
]


class ParsedConsent(BaseModel):
    """
    ParsedConsent

    All fields of an IAB Vendor Consent String v1.1.

    Attributes:
        version (int): Consent string format version.
        created (datetime): When the consent was first recorded (UTC, 100 ms resolution).
        last_updated (datetime): When the consent was last changed (UTC, 100 ms resolution).
        cmp_id (int): Consent Management Platform id.
        cmp_version (int): CMP version.
        consent_screen (int): Screen number in the CMP where consent was given.
        consent_language (str): Two-letter language code of the consent screen.
        vendor_list_version (int): Global vendor list version used.
        purposes_allowed (frozenset[int]): Allowed purpose numbers, each in 1..24.
        max_vendor_id (int): Highest vendor id covered by the vendor section.
        vendors (BitFieldVendors | RangeVendors): Per-vendor consent section.
    """

    model_config = ConfigDict(frozen=True)

    version: int
    created: datetime
    last_updated: datetime
    cmp_id: int
    cmp_version: int
    consent_screen: int
    consent_language: str
    vendor_list_version: int
    purposes_allowed: frozenset[int] = frozenset()
    max_vendor_id: int = Field(ge=0, le=MAX_VENDOR_ID)
    vendors: VendorConsent

    @field_validator("purposes_allowed")
    @classmethod
    def _purposes_in_range(cls, v: frozenset[int]) -> frozenset[int]:
        bad = sorted(p for p in v if not 1 <= p <= MAX_PURPOSE_ID)
        if bad:
            raise ValueError(f"purpose ids must be within 1..{MAX_PURPOSE_ID}, got {bad}")
        return v

    @property
    def encoding_mode(self) -> EncodingMode:
        return self.vendors.encoding_mode

    @property
    def default_consent(self) -> bool:
        if isinstance(self.vendors, RangeVendors):
            return self.vendors.default_consent
        return False

    @property
    def approved_vendor_ids(self) -> frozenset[int]:
        if isinstance(self.vendors, BitFieldVendors):
            return self.vendors.approved_vendor_ids
        return frozenset()

    @property
    def range_entries(self) -> tuple[RangeEntry, ...]:
        if isinstance(self.vendors, RangeVendors):
            return self.vendors.entries
        return ()

    @property
    def num_entries(self) -> int:
        return len(self.range_entries)

    def purpose_allowed(self, purpose_id: int) -> bool:
        return purpose_id in self.purposes_allowed

    def every_purpose_allowed(self, purpose_ids: Iterable[int]) -> bool:
        """True if every purpose in ``purpose_ids`` is allowed (True for an empty iterable)."""
        return all(p in self.purposes_allowed for p in purpose_ids)

    def vendor_allowed(self, vendor_id: int) -> bool:
        """
        Whether the user consented to vendor ``vendor_id``.

        In BitField mode this is a membership test. In Range mode the first
        entry containing the id flips default_consent; ids outside every
        entry get default_consent.
        """
        return self.vendors.allows(vendor_id)

    def allowed_vendor_ids(self) -> frozenset[int]:
        """Every vendor id in 1..max_vendor_id that vendor_allowed accepts."""
        return frozenset(v for v in range(1, self.max_vendor_id + 1) if self.vendor_allowed(v))

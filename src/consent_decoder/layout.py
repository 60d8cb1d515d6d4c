"""
consent_decoder.layout

Bit layout of an IAB Vendor Consent String v1.1.

HEADER_FIELDS lists the fixed header in stream order. Everything after the
encoding type flag depends on that flag, so those sections are described by
their start offsets and widths instead.
"""

from typing import NamedTuple


class FieldSpec(NamedTuple):
    """A fixed-position field: name, bit offset from the start of the string, width in bits."""

    name: str
    offset: int
    width: int

    @property
    def end(self) -> int:
        return self.offset + self.width


HEADER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("version", 0, 6),
    FieldSpec("created", 6, 36),
    FieldSpec("last_updated", 42, 36),
    FieldSpec("cmp_id", 78, 12),
    FieldSpec("cmp_version", 90, 12),
    FieldSpec("consent_screen", 102, 6),
    FieldSpec("consent_language", 108, 12),
    FieldSpec("vendor_list_version", 120, 12),
    FieldSpec("purposes_allowed", 132, 24),
    FieldSpec("max_vendor_id", 156, 16),
    FieldSpec("encoding_type", 172, 1),
)

FIELDS: dict[str, FieldSpec] = {f.name: f for f in HEADER_FIELDS}

# Number of 2-letter language code characters packed into consent_language
LANGUAGE_LETTERS = 2

# Sections that follow the encoding type flag
VENDOR_BITFIELD_OFFSET = 173
DEFAULT_CONSENT = FieldSpec("default_consent", 173, 1)
NUM_ENTRIES = FieldSpec("num_entries", 174, 12)
RANGE_ENTRY_OFFSET = 186
VENDOR_ID_BITS = 16

# encoding_type values
ENCODING_BIT_FIELD = 0
ENCODING_RANGE = 1


def range_entry_width(is_range: bool) -> int:
    """Bits taken by one range entry: the is_range flag plus one or two vendor ids."""
    return 1 + VENDOR_ID_BITS * (2 if is_range else 1)

"""
consent_decoder.decode

Core decoding logic for IAB Vendor Consent Strings (v1.1).

Functions:
    - decode_base64: Turns the URL-safe, usually unpadded, base64 transport form into bytes
    - decode_bytes: Decodes the raw bytes of a consent string into a ParsedConsent
    - parse: decode_base64 followed by decode_bytes

Notes:
    - The fixed header is read by walking layout.HEADER_FIELDS. Before each read
      the reader position is checked against the table, so a decoder bug shows up
      as InvalidState rather than as silently shifted fields.
    - Range entries are 17 or 33 bits wide depending on their own flag; the
      entry loop tracks how many bits it has consumed itself.
"""

import base64
import binascii
import logging

from common.models import BitFieldVendors, ParsedConsent, RangeEntry, RangeVendors
from consent_decoder import layout
from consent_decoder.bits import BitReader
from consent_decoder.errors import InvalidState, MalformedInput, OutOfRange

logger = logging.getLogger(__name__)


def decode_base64(consent_string: str) -> bytes:
    """
    Decode the URL-safe base64 form of a consent string.

    Padding is optional, but when present it must be exactly what the length
    calls for. Whitespace, non-ASCII text and characters outside the URL-safe
    alphabet are rejected rather than skipped.

    Raises:
        MalformedInput: If the string is not valid base64.
    """
    if not consent_string.isascii():
        raise MalformedInput("consent string contains non-ASCII characters")
    text = consent_string.rstrip("=")
    padding = len(consent_string) - len(text)
    if padding and padding != -len(text) % 4:
        raise MalformedInput(f"consent string has {padding} padding characters")
    if "+" in text or "/" in text:
        raise MalformedInput("consent string must use the URL-safe base64 alphabet")
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInput(f"consent string is not valid base64: {e}") from e


def _expect_position(reader: BitReader, offset: int, what: str) -> None:
    if reader.position != offset:
        raise InvalidState(
            f"decoder expected to read {what} at bit {offset}, cursor is at {reader.position}"
        )


def _read_header(reader: BitReader) -> dict:
    readers = {
        "created": lambda w: reader.read_timestamp(),
        "last_updated": lambda w: reader.read_timestamp(),
        "consent_language": lambda w: reader.read_letters(layout.LANGUAGE_LETTERS),
        "purposes_allowed": reader.read_bit_set,
        "encoding_type": reader.read_uint,
    }
    header = {}
    for field in layout.HEADER_FIELDS:
        _expect_position(reader, field.offset, field.name)
        read = readers.get(field.name, reader.read_uint)
        try:
            header[field.name] = read(field.width)
        except OutOfRange as e:
            raise e.for_field(field.name) from e
    return header


def _read_range_entries(reader: BitReader, num_entries: int) -> tuple[RangeEntry, ...]:
    entries = []
    parsed_bits = 0
    for i in range(num_entries):
        _expect_position(reader, layout.RANGE_ENTRY_OFFSET + parsed_bits, f"range entry {i}")
        try:
            is_range = reader.read_bool()
            start = reader.read_uint(layout.VENDOR_ID_BITS)
            end = reader.read_uint(layout.VENDOR_ID_BITS) if is_range else start
        except OutOfRange as e:
            raise e.for_field(f"range entry {i}") from e
        parsed_bits += layout.range_entry_width(is_range)
        entries.append(RangeEntry(start_vendor_id=start, end_vendor_id=end))
    return tuple(entries)


def _read_range_section(reader: BitReader) -> RangeVendors:
    try:
        _expect_position(reader, layout.DEFAULT_CONSENT.offset, layout.DEFAULT_CONSENT.name)
        default_consent = reader.read_bool()
        _expect_position(reader, layout.NUM_ENTRIES.offset, layout.NUM_ENTRIES.name)
        num_entries = reader.read_uint(layout.NUM_ENTRIES.width)
    except OutOfRange as e:
        raise e.for_field("range section header") from e
    entries = _read_range_entries(reader, num_entries)
    return RangeVendors(default_consent=default_consent, entries=entries)


def _read_bitfield_section(reader: BitReader, max_vendor_id: int) -> BitFieldVendors:
    _expect_position(reader, layout.VENDOR_BITFIELD_OFFSET, "vendor bitfield")
    try:
        approved = reader.read_bit_set(max_vendor_id)
    except OutOfRange as e:
        raise e.for_field("vendor bitfield") from e
    return BitFieldVendors(approved_vendor_ids=approved)


def decode_bytes(data: bytes) -> ParsedConsent:
    """
    Decode the raw bytes of a consent string.

    Args:
        data: Bytes obtained from decode_base64 (or any other transport).

    Raises:
        OutOfRange: If the buffer ends before a declared field does.
        InvalidState: If the decoder loses track of the field layout.

    Returns:
        ParsedConsent: The decoded record.
    """
    reader = BitReader(data)
    header = _read_header(reader)

    if header["encoding_type"] == layout.ENCODING_RANGE:
        vendors = _read_range_section(reader)
    else:
        vendors = _read_bitfield_section(reader, header["max_vendor_id"])

    consent = ParsedConsent(
        version=header["version"],
        created=header["created"],
        last_updated=header["last_updated"],
        cmp_id=header["cmp_id"],
        cmp_version=header["cmp_version"],
        consent_screen=header["consent_screen"],
        consent_language=header["consent_language"],
        vendor_list_version=header["vendor_list_version"],
        purposes_allowed=header["purposes_allowed"],
        max_vendor_id=header["max_vendor_id"],
        vendors=vendors,
    )
    logger.debug(
        f"Decoded consent v{consent.version} from CMP {consent.cmp_id} "
        f"({consent.encoding_mode.value}, {reader.remaining_bits()} bits unread)"
    )
    return consent


def parse(consent_string: str) -> ParsedConsent:
    """
    Decode a consent string in its base64 transport form.

    Example:
        >>> parse("BONMj34ONMj34ABACDENALqAAAAAplY").consent_language
        'EN'
    """
    try:
        return decode_bytes(decode_base64(consent_string))
    except MalformedInput as e:
        logger.warning(f"Rejected consent string {consent_string[:40]!r}: {e}")
        raise
    except OutOfRange as e:
        logger.warning(f"Truncated consent string {consent_string[:40]!r}: {e}")
        raise

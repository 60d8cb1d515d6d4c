"""Bit-string helpers for building consent buffers by hand in tests."""

# Header shared by every fixture string in fixtures/consent_fixtures.yml,
# as a bit string covering offsets 0..155 (everything before max_vendor_id).
FIXTURE_HEADER_BITS = (
    "000001"  # version 1
    "001110001101001100100011110111111000"  # created
    "001110001101001100100011110111111000"  # last_updated
    "000000000001"  # cmp_id 1
    "000000000010"  # cmp_version 2
    "000011"  # consent_screen 3
    "000100" "001101"  # "EN"
    "000000001011"  # vendor_list_version 11
    "101010000000000000000000"  # purposes 1, 3, 5
)


def uint_bits(value: int, width: int) -> str:
    return format(value, f"0{width}b")


def bits_to_bytes(bits: str) -> bytes:
    """Pack a string of '0'/'1' characters into bytes, zero-padding the last byte."""
    bits = bits.replace(" ", "")
    bits += "0" * (-len(bits) % 8)
    return int(bits, 2).to_bytes(len(bits) // 8, byteorder="big") if bits else b""


def header_bits(max_vendor_id: int) -> str:
    """The fixture header followed by a max_vendor_id field."""
    return FIXTURE_HEADER_BITS + uint_bits(max_vendor_id, 16)


def range_entry_bits(start: int, end: int | None = None) -> str:
    """One range entry; a single-id entry when ``end`` is None."""
    if end is None:
        return "0" + uint_bits(start, 16)
    return "1" + uint_bits(start, 16) + uint_bits(end, 16)

"""
Tests for consent_decoder.bits.BitReader.

Covers MSB-first integer reads across byte boundaries, timestamps, letters,
bit sets, consumption tracking and OutOfRange on over-reads.
"""

from datetime import datetime, timezone

import pytest

from consent_decoder import BitReader, OutOfRange


def test_read_uint_sequence():
    r = BitReader(bytes([0xAA]))
    assert [r.read_uint(1), r.read_uint(1), r.read_uint(3), r.read_uint(3)] == [1, 0, 5, 2]
    assert not r.has_unread()
    assert r.remaining_bits() == 0


def test_read_uint_across_byte_boundary():
    r = BitReader(bytes([0b00000011, 0b11000000]))
    assert r.read_uint(6) == 0
    assert r.read_uint(4) == 0b1111
    assert r.position == 10
    assert r.remaining_bits() == 6


def test_read_uint_full_64_bits():
    r = BitReader(bytes([0xFF] * 8 + [0x80]))
    assert r.read_uint(64) == 2**64 - 1
    assert r.read_bool() is True


@pytest.mark.parametrize("n", [0, -1, 65])
def test_read_uint_rejects_bad_width(n):
    r = BitReader(bytes(16))
    with pytest.raises(ValueError):
        r.read_uint(n)
    assert r.position == 0


@pytest.mark.parametrize("split", range(1, 24))
def test_split_reads_match_single_read(split):
    data = bytes([0xC3, 0x5A, 0x96])
    whole = BitReader(data).read_uint(24)
    r = BitReader(data)
    high = r.read_uint(split)
    low = r.read_uint(24 - split)
    assert (high << (24 - split)) | low == whole


def test_read_past_end_raises_out_of_range():
    r = BitReader(bytes([0xFF]))
    r.read_uint(5)
    with pytest.raises(OutOfRange) as excinfo:
        r.read_uint(4)
    assert excinfo.value.requested == 4
    assert excinfo.value.remaining == 3
    assert excinfo.value.position == 5
    # A failed read leaves the cursor untouched
    assert r.position == 5
    assert r.read_uint(3) == 0b111


def test_empty_buffer():
    r = BitReader(b"")
    assert r.remaining_bits() == 0
    with pytest.raises(OutOfRange):
        r.read_bool()


def test_read_timestamp():
    # 2018-05-18 17:48:31.5 UTC == 15266657115 deciseconds == 0x38df6b35b
    r = BitReader(bytes([0x38, 0xDF, 0x6B, 0x35, 0xB0]))
    ts = r.read_timestamp()
    assert ts == datetime(2018, 5, 18, 17, 48, 31, 500000, tzinfo=timezone.utc)
    assert ts.timestamp() == 1526665711.5
    assert ts.tzinfo is not None
    assert r.remaining_bits() == 4


def test_read_letters():
    # 'E' = 4, 'N' = 13
    r = BitReader(bytes([0b00010000, 0b11010000]))
    assert r.read_letters(2) == "EN"
    assert r.remaining_bits() == 4


def test_read_letters_zero_is_uppercase_a():
    assert BitReader(bytes(2)).read_letters(2) == "AA"


def test_read_bit_set():
    r = BitReader(bytes([0x5A]))  # 01011010
    assert r.read_bit_set(2) == {2}
    assert r.read_bit_set(6) == {2, 3, 5}
    assert not r.has_unread()


def test_read_bit_set_spans_bytes():
    r = BitReader(bytes([0x5A, 0x81]))
    assert r.read_bit_set(16) == {2, 4, 5, 7, 9, 16}


def test_read_bit_set_wider_than_64_bits():
    r = BitReader(bytes([0x80] + [0] * 9 + [0x01]))
    assert r.read_bit_set(88) == {1, 88}


def test_read_bit_set_zero_width():
    r = BitReader(bytes([0xFF]))
    assert r.read_bit_set(0) == frozenset()
    assert r.position == 0


def test_read_bit_set_out_of_range():
    with pytest.raises(OutOfRange):
        BitReader(bytes([0xFF])).read_bit_set(9)

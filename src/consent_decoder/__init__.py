"""
consent_decoder
===============

Library for decoding IAB Vendor Consent Strings (v1.1).

This package contains the bit-level reader, the fixed field layout of the
consent string and the decoder that turns a base64 consent string into a
common.models.ParsedConsent.

Functions:
    - parse: Decode a base64 consent string
    - decode_bytes: Decode the raw bytes of a consent string
    - decode_base64: Decode the URL-safe base64 transport form
"""

from .bits import BitReader
from .decode import decode_base64, decode_bytes, parse
from .errors import DecodeError, InvalidState, MalformedInput, OutOfRange

__all__ = [
    "BitReader",
    "DecodeError",
    "InvalidState",
    "MalformedInput",
    "OutOfRange",
    "decode_base64",
    "decode_bytes",
    "parse",
]

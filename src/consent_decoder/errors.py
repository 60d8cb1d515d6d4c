"""
consent_decoder.errors

Exception types raised while decoding a vendor consent string.

DecodeError and its subclasses describe bad input data and are safe to report
back to whoever supplied the string. InvalidState describes a decoder defect
and deliberately does not derive from DecodeError.
"""


class DecodeError(ValueError):
    """Base class for consent strings that cannot be decoded."""


class MalformedInput(DecodeError):
    """The supplied string is not valid URL-safe base64."""


class OutOfRange(DecodeError):
    """
    A read requested more bits than remain in the buffer.

    Attributes:
        requested (int): Number of bits the read asked for.
        remaining (int): Number of unread bits left in the buffer.
        position (int): Bit offset the read started at.
    """

    def __init__(self, requested: int, remaining: int, position: int, field: str | None = None):
        self.requested = requested
        self.remaining = remaining
        self.position = position
        self.field = field
        where = f"reading {field} " if field else ""
        super().__init__(
            f"{where}at bit {position}: requested {requested} bits, only {remaining} remain"
        )

    def for_field(self, field: str) -> "OutOfRange":
        """Return a copy of this error naming the field that was being read."""
        return OutOfRange(self.requested, self.remaining, self.position, field=field)


class InvalidState(AssertionError):
    """The decoder's cursor disagrees with the field layout; this is a bug, not bad data."""

"""
consent_decoder.bits

Bit-level cursor over a consent string's raw bytes.

Bits are read left to right, most significant bit first within each byte, so
a field that straddles a byte boundary reads as one big-endian integer.
"""

from datetime import datetime, timedelta, timezone

from consent_decoder.errors import OutOfRange

# Deciseconds per second in the consent timestamp encoding
DS_PER_S = 10
TIMESTAMP_BITS = 36
LETTER_BITS = 6
MAX_UINT_BITS = 64

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class BitReader:
    """
    Reads unsigned integers, flags, timestamps, letters and bit sets from a byte buffer.

    Every read either consumes exactly the requested number of bits or raises
    OutOfRange and leaves the cursor where it was.
    """

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self._value = int.from_bytes(self.data, byteorder="big")
        self._length = len(self.data) * 8
        self.position = 0

    def __repr__(self) -> str:
        return f"BitReader(position={self.position}, length={self._length})"

    def remaining_bits(self) -> int:
        return self._length - self.position

    def has_unread(self) -> bool:
        return self.remaining_bits() > 0

    def _take(self, n: int) -> int:
        if n > self.remaining_bits():
            raise OutOfRange(n, self.remaining_bits(), self.position)
        shift = self._length - self.position - n
        self.position += n
        return (self._value >> shift) & ((1 << n) - 1)

    def read_uint(self, n: int) -> int:
        """Consume the next ``n`` bits (1..64) as an unsigned big-endian integer."""
        if not 1 <= n <= MAX_UINT_BITS:
            raise ValueError(f"read_uint width must be between 1 and {MAX_UINT_BITS}, got {n}")
        return self._take(n)

    def read_bool(self) -> bool:
        return self.read_uint(1) != 0

    def read_timestamp(self) -> datetime:
        """
        Consume a 36-bit decisecond count since the Unix epoch.

        Returns:
            datetime: Timezone-aware UTC instant with 100 ms resolution.
        """
        ds = self.read_uint(TIMESTAMP_BITS)
        seconds, tenths = divmod(ds, DS_PER_S)
        return _EPOCH + timedelta(seconds=seconds, milliseconds=tenths * 100)

    def read_letters(self, count: int) -> str:
        """Consume ``count`` 6-bit groups, mapping 0 to 'A', 1 to 'B' and so on."""
        letters = [chr(ord("A") + self.read_uint(LETTER_BITS)) for _ in range(count)]
        return "".join(letters)

    def read_bit_set(self, bit_count: int) -> frozenset[int]:
        """
        Consume ``bit_count`` bits; bit ``i`` (0-based) set means ``i + 1`` is a member.

        Unlike read_uint this is not limited to 64 bits, since the vendor
        bitfield is as wide as the declared maximum vendor id.
        """
        if bit_count <= 0:
            return frozenset()
        value = self._take(bit_count)
        return frozenset(
            i + 1 for i in range(bit_count) if (value >> (bit_count - 1 - i)) & 1
        )

from typing import Optional

from .exceptions import OutOfData

MAX_READ_BITS = 32


class BitReader:
    """
    Most-significant-bit first reader over a slice of a byte buffer.

    Reads past the end of the slice raise :class:`OutOfData`. The failure is
    sticky: once a read has failed, every further read fails as well.
    """

    def __init__(
        self, data: bytes, offset: int = 0, size: Optional[int] = None
    ) -> None:
        if size is None:
            size = len(data) - offset
        assert 0 <= offset and 0 <= size, "invalid slice"

        self._data = memoryview(data)[offset : offset + size]
        self._length = len(self._data) * 8
        self._pos = 0
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    def bits_available(self) -> int:
        return self._length - self._pos

    def tell(self) -> int:
        """
        Return the current position, in bits from the start of the slice.
        """
        return self._pos

    def byte_align(self) -> None:
        """
        Advance to the next byte boundary.
        """
        self._pos = min((self._pos + 7) & ~7, self._length)

    def read_bits(self, n: int) -> int:
        """
        Read an `n`-bit unsigned integer.
        """
        if not 1 <= n <= MAX_READ_BITS:
            raise ValueError(f"Cannot read {n} bits at once")
        self._check(n)

        pos = self._pos
        value = 0
        while n:
            byte = self._data[pos >> 3]
            used = pos & 7
            take = min(8 - used, n)
            shift = 8 - used - take
            value = (value << take) | ((byte >> shift) & ((1 << take) - 1))
            pos += take
            n -= take

        self._pos = pos
        return value

    def read_bool(self) -> bool:
        return self.read_bits(1) == 1

    def read_signed(self, n: int) -> int:
        """
        Read a magnitude of `n` bits followed by a sign bit.
        """
        value = self.read_bits(n)
        return -value if self.read_bool() else value

    def skip_bits(self, n: int) -> None:
        self._check(n)
        self._pos += n

    def _check(self, n: int) -> None:
        if self.failed or n > self.bits_available():
            self._failed = True
            raise OutOfData(
                f"Cannot read {n} bits at bit position {self._pos}, "
                f"{self.bits_available()} bits available"
            )

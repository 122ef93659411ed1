"""A fixed-size bitmap."""

from __future__ import annotations


class Bitmap:
    """Fixed number of bits, each of which can be set, read and cleared in bulk."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("bitmap size must be non-negative")
        self._size = size
        self._bytes = bytearray((size + 7) // 8)

    def __len__(self) -> int:
        return self._size

    def _check(self, pos: int) -> None:
        if not 0 <= pos < self._size:
            raise IndexError(f"bit {pos} out of range for bitmap of size {self._size}")

    def reset(self) -> None:
        """Clear every bit."""
        self._bytes[:] = bytes(len(self._bytes))

    def set_all(self) -> None:
        """Set every bit."""
        self._bytes[:] = b"\xff" * len(self._bytes)

    def set_bit(self, pos: int) -> None:
        """Set the bit at ``pos``."""
        self._check(pos)
        self._bytes[pos >> 3] |= 1 << (pos & 7)

    def get_bit(self, pos: int) -> bool:
        """Return whether the bit at ``pos`` is set."""
        self._check(pos)
        return bool((self._bytes[pos >> 3] >> (pos & 7)) & 1)

    def swap(self, other: "Bitmap") -> None:
        """Exchange contents with another bitmap."""
        self._size, other._size = other._size, self._size
        self._bytes, other._bytes = other._bytes, self._bytes
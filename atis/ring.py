"""
Bounded bit window used by the sync tracker.
"""

import numpy as np

from . import SYMBOL_BITS


class BitRingError(RuntimeError):
    """Base class for bit ring misuse."""


class BitRingOverflow(BitRingError):
    """Raised when appending to a full ring."""


class BitRingUnderflow(BitRingError):
    """Raised when reading past the unconsumed bits."""


class BitRing:
    """
    Fixed-capacity circular buffer of unconsumed bits.

    Bits are appended at the tail, inspected by offset from the head and
    removed from the head. Unlike ``deque(maxlen=...)`` a full ring never
    drops old bits: appending raises ``BitRingOverflow`` instead.
    """

    DEFAULT_CAPACITY = 32

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize ring.

        Args:
            capacity: Maximum number of unconsumed bits (must exceed one symbol)
        """
        if capacity <= SYMBOL_BITS:
            raise ValueError(f"capacity must exceed {SYMBOL_BITS} bits")

        self.capacity = capacity
        self._bits = np.zeros(capacity, dtype=np.uint8)
        self._head = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"BitRing({self.peek_many(self._count)}, capacity={self.capacity})"

    def clear(self):
        """Discard all unconsumed bits."""
        self._head = 0
        self._count = 0

    def append(self, bit: int):
        """Append a bit at the tail."""
        if self._count >= self.capacity:
            raise BitRingOverflow(f"bit ring full ({self.capacity} bits)")

        self._bits[(self._head + self._count) % self.capacity] = bit & 1
        self._count += 1

    def peek(self, offset: int) -> int:
        """Return the bit at ``offset`` from the head without removing it."""
        if not 0 <= offset < self._count:
            raise BitRingUnderflow(f"offset {offset} outside {self._count} bits")

        return int(self._bits[(self._head + offset) % self.capacity])

    def peek_many(self, n: int) -> list[int]:
        """Return the oldest ``n`` bits without removing them."""
        if n > self._count:
            raise BitRingUnderflow(f"need {n} bits, have {self._count}")

        return [self.peek(i) for i in range(n)]

    def pop(self) -> int:
        """Remove and return the oldest bit."""
        if self._count == 0:
            raise BitRingUnderflow("bit ring empty")

        bit = int(self._bits[self._head])
        self._head = (self._head + 1) % self.capacity
        self._count -= 1
        return bit

    def pop_many(self, n: int) -> list[int]:
        """Remove and return the oldest ``n`` bits."""
        bits = self.peek_many(n)
        self._head = (self._head + n) % self.capacity
        self._count -= n
        return bits

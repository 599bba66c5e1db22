"""
DSC 10-bit symbol encoding/decoding (ITU-R M.493).
"""

from typing import Optional, Sequence

from . import SYMBOL_BITS, DATA_BITS, CHECK_BITS


def check_bits(value: int) -> int:
    """Number of zero bits among the 7 data bits of a symbol value."""
    return DATA_BITS - bin(value & 0x7F).count("1")


class SymbolCodec:
    """
    ITU-R M.493 symbol codec.

    Symbol structure (transmission order):
    - Data: 7 bits, least significant bit first (value 0-127)
    - Check: 3 bits, most significant bit first

    The check field is the count of zero bits in the data portion. This
    catches every single-bit error and most multi-bit errors.
    """

    @classmethod
    def encode(cls, value: int) -> list[int]:
        """
        Encode a symbol value to its 10 transmitted bits.

        Args:
            value: Symbol value (0 to 127)

        Returns:
            List of 10 bits in transmission order
        """
        if not 0 <= value <= 0x7F:
            raise ValueError("symbol value must be 0-127")

        bits = [(value >> i) & 1 for i in range(DATA_BITS)]

        check = check_bits(value)
        for i in range(CHECK_BITS - 1, -1, -1):
            bits.append((check >> i) & 1)

        return bits

    @classmethod
    def decode(cls, bits: Sequence[int]) -> Optional[int]:
        """
        Decode 10 received bits.

        Args:
            bits: 10 bits in transmission order

        Returns:
            Symbol value (0 to 127), or None if the check field does not match
        """
        if len(bits) != SYMBOL_BITS:
            return None

        value = 0
        for i in range(DATA_BITS):
            value |= (bits[i] & 1) << i

        check = 0
        for bit in bits[DATA_BITS:]:
            check = (check << 1) | (bit & 1)

        if check != check_bits(value):
            return None

        return value

    @classmethod
    def is_valid(cls, bits: Sequence[int]) -> bool:
        """Check whether 10 bits form a valid symbol."""
        return cls.decode(bits) is not None

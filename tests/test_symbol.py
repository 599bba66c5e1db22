"""
Tests for DSC symbol encoding/decoding.
"""

import itertools

import pytest

from atis import SymbolCodec, PHASING_DX, EOS
from atis.symbol import check_bits


class TestCheckBits:
    """Test check field computation."""

    def test_all_zero_data(self):
        assert check_bits(0) == 7

    def test_all_one_data(self):
        assert check_bits(127) == 0

    def test_phasing_symbol(self):
        # 125 = 1111101b, one zero bit
        assert check_bits(PHASING_DX) == 1


class TestSymbolCodec:
    """Test symbol encoding and decoding."""

    def test_round_trip_digit_pairs(self):
        for value in range(100):
            assert SymbolCodec.decode(SymbolCodec.encode(value)) == value

    def test_round_trip_reserved(self):
        for value in range(100, 128):
            assert SymbolCodec.decode(SymbolCodec.encode(value)) == value

    def test_encode_phasing(self):
        """Data bits go out LSB first, check bits MSB first."""
        assert SymbolCodec.encode(PHASING_DX) == [1, 0, 1, 1, 1, 1, 1, 0, 0, 1]

    def test_encode_eos(self):
        assert SymbolCodec.encode(EOS) == [1, 1, 1, 1, 1, 1, 1, 0, 0, 0]

    def test_encode_zero(self):
        assert SymbolCodec.encode(0) == [0, 0, 0, 0, 0, 0, 0, 1, 1, 1]

    def test_encode_length(self):
        assert len(SymbolCodec.encode(42)) == 10

    def test_encode_limits(self):
        """Test symbol value validation."""
        SymbolCodec.encode(0)
        SymbolCodec.encode(127)

        with pytest.raises(ValueError):
            SymbolCodec.encode(-1)
        with pytest.raises(ValueError):
            SymbolCodec.encode(128)

    def test_single_bit_errors_rejected(self):
        """Any single flipped bit breaks the check field."""
        for value in range(128):
            bits = SymbolCodec.encode(value)
            for i in range(10):
                corrupted = list(bits)
                corrupted[i] ^= 1
                assert SymbolCodec.decode(corrupted) is None

    def test_wrong_check_field_rejected(self):
        bits = SymbolCodec.encode(37)
        for check in range(8):
            if check == check_bits(37):
                continue
            candidate = bits[:7] + [(check >> 2) & 1, (check >> 1) & 1, check & 1]
            assert SymbolCodec.decode(candidate) is None
            assert SymbolCodec.is_valid(candidate) is False

    def test_exactly_128_valid_patterns(self):
        """Every valid 10-bit pattern is the encoding of its value."""
        valid = 0
        for pattern in itertools.product((0, 1), repeat=10):
            value = SymbolCodec.decode(pattern)
            if value is not None:
                valid += 1
                assert SymbolCodec.encode(value) == list(pattern)
        assert valid == 128

    def test_wrong_length(self):
        assert SymbolCodec.decode([1, 0, 1]) is None
        assert SymbolCodec.decode(SymbolCodec.encode(5) + [0]) is None

"""
ATIS Encoder - Generates FSK-modulated ATIS bursts.
"""

import math
from pathlib import Path

import numpy as np
import soundfile as sf

from . import (
    SAMPLE_RATE,
    MARK_FREQ,
    SPACE_FREQ,
    BAUD_RATE,
    PHASING_DX,
    PHASING_RX,
    FORMAT_ATIS,
    EOS,
    DIVERSITY_OFFSET,
    IDENTIFIER_PAIRS,
    DOT_PATTERN_BITS,
)
from .symbol import SymbolCodec

# DX positions carrying the phasing symbol before the message
PHASING_DX_COUNT = 6


class ATISEncoder:
    """
    FSK encoder for ATIS test bursts.

    Uses BFSK (Binary Frequency Shift Keying) with continuous phase.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        mark_freq: float = MARK_FREQ,
        space_freq: float = SPACE_FREQ,
        baud_rate: int = BAUD_RATE,
    ):
        """
        Initialize encoder.

        Args:
            sample_rate: Output audio sample rate (Hz)
            mark_freq: Frequency for logic 1 (Hz)
            space_freq: Frequency for logic 0 (Hz)
            baud_rate: Bit rate (bits per second)
        """
        if sample_rate % baud_rate != 0:
            raise ValueError(
                f"sample rate {sample_rate} Hz is not a whole multiple of {baud_rate} baud"
            )

        self.sample_rate = sample_rate
        self.mark_freq = mark_freq
        self.space_freq = space_freq
        self.baud_rate = baud_rate

        self.samples_per_bit = sample_rate // baud_rate

        # Phase accumulator for continuous phase
        self.phase = 0.0

    def reset_phase(self):
        """Reset phase accumulator."""
        self.phase = 0.0

    @staticmethod
    def identifier_pairs(identifier: str) -> list[int]:
        """
        Split an identifier into digit pairs.

        Args:
            identifier: 9 or 10 decimal digits (9 digits are padded with '0')

        Returns:
            List of 5 values (0 to 99)
        """
        if not identifier.isdigit() or len(identifier) not in (9, 10):
            raise ValueError(f"identifier must be 9 or 10 digits: {identifier!r}")

        padded = identifier.rjust(IDENTIFIER_PAIRS * 2, "0")
        return [int(padded[i:i + 2]) for i in range(0, len(padded), 2)]

    def burst_symbols(self, identifier: str) -> list[int]:
        """
        Build the interleaved DX/RX symbol sequence of a burst.

        DX positions carry phasing, format specifier, identifier and EOS.
        Each RX position repeats the DX symbol sent five slots earlier, or an
        RX phasing symbol while there is nothing to repeat.

        Args:
            identifier: 9 or 10 digit identifier

        Returns:
            Symbol values in transmission order
        """
        dx = (
            [PHASING_DX] * PHASING_DX_COUNT
            + [FORMAT_ATIS, FORMAT_ATIS]
            + self.identifier_pairs(identifier)
            + [EOS, EOS, EOS]
        )

        lag = (DIVERSITY_OFFSET - 1) // 2
        symbols = []
        for j, value in enumerate(dx):
            symbols.append(value)
            if j >= lag and dx[j - lag] != PHASING_DX:
                symbols.append(dx[j - lag])
            else:
                symbols.append(PHASING_RX[min(j, len(PHASING_RX) - 1)])

        return symbols

    def burst_bits(self, identifier: str) -> list[int]:
        """
        Build the full bit sequence of a burst, dot pattern included.

        Args:
            identifier: 9 or 10 digit identifier

        Returns:
            List of bits in transmission order
        """
        bits = [(i + 1) % 2 for i in range(DOT_PATTERN_BITS)]
        for value in self.burst_symbols(identifier):
            bits.extend(SymbolCodec.encode(value))
        return bits

    def _generate_bit(self, bit: int) -> np.ndarray:
        """
        Generate FSK modulated audio for one bit.

        Args:
            bit: 0 or 1

        Returns:
            Array of audio samples (-1.0 to 1.0)
        """
        freq = self.mark_freq if bit else self.space_freq
        omega = 2 * math.pi * freq / self.sample_rate

        phases = self.phase + omega * np.arange(self.samples_per_bit)
        self.phase = (self.phase + omega * self.samples_per_bit) % (2 * math.pi)

        return np.sin(phases)

    def modulate(self, bits: list[int]) -> np.ndarray:
        """
        Modulate a bit sequence with continuous phase.

        Args:
            bits: List of bits

        Returns:
            Array of audio samples (-1.0 to 1.0)
        """
        if not bits:
            return np.zeros(0)
        return np.concatenate([self._generate_bit(bit) for bit in bits])

    def generate(
        self,
        identifier: str,
        amplitude: float = 0.7,
        lead_in_ms: int = 50,
        tail_ms: int = 50,
    ) -> tuple[np.ndarray, int]:
        """
        Generate one ATIS burst surrounded by silence.

        Args:
            identifier: 9 or 10 digit identifier
            amplitude: Output amplitude (0.0 to 1.0)
            lead_in_ms: Silence before the burst
            tail_ms: Silence after the burst

        Returns:
            Tuple of (audio_samples, sample_rate)
        """
        self.reset_phase()

        burst = self.modulate(self.burst_bits(identifier)) * amplitude
        lead_in = np.zeros(int(self.sample_rate * lead_in_ms / 1000))
        tail = np.zeros(int(self.sample_rate * tail_ms / 1000))

        return np.concatenate([lead_in, burst, tail]), self.sample_rate

    def generate_pcm16(self, identifier: str, **kwargs) -> np.ndarray:
        """Generate one burst as signed 16-bit samples."""
        samples, _ = self.generate(identifier, **kwargs)
        return np.round(np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)

    def generate_to_file(
        self,
        output_path: str | Path,
        identifier: str,
        amplitude: float = 0.7,
    ):
        """
        Generate and save an ATIS burst to file.

        Args:
            output_path: Output WAV file path
            identifier: 9 or 10 digit identifier
            amplitude: Output amplitude (0.0 to 1.0)
        """
        samples, sample_rate = self.generate(identifier, amplitude=amplitude)

        sf.write(
            str(output_path),
            samples,
            sample_rate,
            subtype='PCM_16'
        )

"""
ATIS Decoder - Recovers vessel identifiers from DSC-format FSK audio.
"""

import logging
import math
from typing import Callable, Iterable, Optional, Sequence

import numpy as np

from . import (
    SAMPLE_RATE,
    MARK_FREQ,
    SPACE_FREQ,
    BAUD_RATE,
    SYMBOL_BITS,
    MAX_DIGIT_PAIR,
    PHASING_DX,
    IDENTIFIER_PAIRS,
)
from .ring import BitRing
from .symbol import SymbolCodec

# Module-level logger
_logger = logging.getLogger(__name__)


def goertzel_power(samples: Sequence[float], freq: float, sample_rate: int) -> float:
    """
    Signal power at a single frequency using the Goertzel recurrence.

    Args:
        samples: One analysis window
        freq: Frequency of interest (Hz)
        sample_rate: Sample rate of the window (Hz)

    Returns:
        Magnitude squared of the single-bin DFT at ``freq``
    """
    coeff = 2.0 * math.cos(2.0 * math.pi * freq / sample_rate)
    q1 = 0.0
    q2 = 0.0
    for sample in samples:
        q0 = coeff * q1 - q2 + float(sample)
        q2 = q1
        q1 = q0
    return q1 * q1 + q2 * q2 - q1 * q2 * coeff


class FrequencyClassifier:
    """
    Mark/space tone discriminator for one bit period.

    Compares signal power at the two FSK tones. There is no amplitude or
    SNR gating: every window yields a bit, silence included.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        mark_freq: float = MARK_FREQ,
        space_freq: float = SPACE_FREQ,
        baud_rate: int = BAUD_RATE,
    ):
        """
        Initialize classifier.

        Args:
            sample_rate: Audio sample rate (Hz)
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

        # Single-bin DFT references for block classification
        self._mark_ref = self._reference(mark_freq)
        self._space_ref = self._reference(space_freq)

    def _reference(self, freq: float) -> np.ndarray:
        n = np.arange(self.samples_per_bit)
        return np.exp(-2j * np.pi * freq * n / self.sample_rate)

    def classify(self, window: Sequence[float]) -> int:
        """
        Classify one bit period.

        Args:
            window: Exactly ``samples_per_bit`` samples

        Returns:
            1 if mark power exceeds space power, else 0
        """
        if len(window) != self.samples_per_bit:
            raise ValueError(
                f"window must be {self.samples_per_bit} samples, got {len(window)}"
            )

        mark = goertzel_power(window, self.mark_freq, self.sample_rate)
        space = goertzel_power(window, self.space_freq, self.sample_rate)
        return 1 if mark > space else 0

    def classify_block(self, samples: np.ndarray) -> np.ndarray:
        """
        Classify every whole bit period in a block of samples.

        A trailing partial window is ignored.

        Args:
            samples: Audio samples, any numeric dtype

        Returns:
            Array of bits (uint8), one per whole window
        """
        samples = np.asarray(samples, dtype=np.float64).ravel()
        n_bits = len(samples) // self.samples_per_bit
        if n_bits == 0:
            return np.zeros(0, dtype=np.uint8)

        windows = samples[:n_bits * self.samples_per_bit].reshape(n_bits, self.samples_per_bit)
        mark = np.abs(windows @ self._mark_ref) ** 2
        space = np.abs(windows @ self._space_ref) ** 2
        return (mark > space).astype(np.uint8)


def normalize_identifier(raw: str) -> str:
    """
    Drop the padding digit of a 9-digit identifier.

    Five digit pairs always give 10 characters. A leading '0' on exactly 10
    characters is padding for the conventional 9-digit form.
    """
    if len(raw) == 10 and raw[0] == "0":
        return raw[1:]
    return raw


class DiversityCollector:
    """
    Collapses time-diversity repeats into one digit sequence.

    Every symbol is transmitted twice, the repeat arriving five slots after
    the original, so originals and repeats alternate in decode order. Once
    the first digit pair is seen, even positions are read and odd positions
    are skipped without looking at their content.
    """

    def __init__(self, pairs: int = IDENTIFIER_PAIRS):
        self.pairs = pairs
        self.started = False
        self.alternation = 0
        self.digits: list[int] = []

    def push(self, value: int) -> Optional[str]:
        """
        Feed one decoded symbol value.

        Args:
            value: Symbol value (0 to 127)

        Returns:
            Identifier string once all digit pairs are collected, else None
        """
        if not self.started:
            if value > MAX_DIGIT_PAIR:
                # Still in phasing / format specifier area
                return None
            self.started = True
            self.alternation = 0

        if self.alternation % 2 == 0:
            if value <= MAX_DIGIT_PAIR and len(self.digits) < self.pairs:
                self.digits.append(value)
        self.alternation += 1

        if len(self.digits) == self.pairs:
            raw = "".join(f"{pair:02d}" for pair in self.digits)
            return normalize_identifier(raw)

        return None

    def __repr__(self) -> str:
        return (
            f"DiversityCollector(started={self.started}, "
            f"alternation={self.alternation}, digits={self.digits})"
        )


class Searching:
    """Hunting for the phasing symbol one bit at a time."""

    locked = False

    def __repr__(self) -> str:
        return "Searching()"


class Locked:
    """Aligned to symbol boundaries and collecting digits."""

    locked = True

    def __init__(self, bit_offset: int = 0, collector: Optional[DiversityCollector] = None):
        self.bit_offset = bit_offset
        self.collector = collector if collector is not None else DiversityCollector()

    def __repr__(self) -> str:
        return f"Locked(bit_offset={self.bit_offset}, collector={self.collector!r})"


class SyncTracker:
    """
    Frame acquisition and symbol recovery from a bit stream.

    While searching, every bit alignment is tried until the oldest 10 bits
    decode to the DX phasing symbol. Once locked, bits are grouped 10 at a
    time; any invalid group drops the lock.
    """

    def __init__(self, ring_capacity: int = BitRing.DEFAULT_CAPACITY):
        """
        Initialize tracker.

        Args:
            ring_capacity: Size of the unconsumed bit window
        """
        self.ring = BitRing(ring_capacity)
        self.state = Searching()

        # Statistics
        self.bits_processed = 0
        self.locks_acquired = 0
        self.sync_losses = 0
        self.identifiers_decoded = 0

    @property
    def is_locked(self) -> bool:
        return self.state.locked

    def reset(self):
        """Return to searching with an empty bit window."""
        self.ring.clear()
        self.state = Searching()

    def push_bit(self, bit: int) -> Optional[str]:
        """
        Feed one classified bit.

        Args:
            bit: 0 or 1

        Returns:
            Decoded identifier if this bit completed one, else None
        """
        self.bits_processed += 1
        self.ring.append(bit)

        if isinstance(self.state, Searching):
            self._search()
            return None

        return self._collect(self.state)

    def _search(self):
        while len(self.ring) >= SYMBOL_BITS:
            if SymbolCodec.decode(self.ring.peek_many(SYMBOL_BITS)) == PHASING_DX:
                self.ring.pop_many(SYMBOL_BITS)
                self.state = Locked()
                self.locks_acquired += 1
                _logger.debug(f"Phasing symbol found, locked after {self.bits_processed} bits")
                return
            self.ring.pop()

    def _collect(self, state: Locked) -> Optional[str]:
        state.bit_offset += 1
        if state.bit_offset < SYMBOL_BITS:
            return None
        state.bit_offset = 0

        value = SymbolCodec.decode(self.ring.pop_many(SYMBOL_BITS))
        if value is None:
            self.state = Searching()
            self.sync_losses += 1
            _logger.debug(f"Invalid symbol, sync lost after {self.bits_processed} bits")
            return None

        identifier = state.collector.push(value)
        if identifier is not None:
            self.state = Searching()
            self.identifiers_decoded += 1
            _logger.info(f"Decoded ATIS identifier {identifier}")

        return identifier


class ATISDecoder:
    """
    Decoder context for one audio stream.

    Buffers partial bit windows between calls, so samples may arrive in
    blocks of any size.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        callback: Optional[Callable[[str], None]] = None,
        ring_capacity: int = BitRing.DEFAULT_CAPACITY,
    ):
        """
        Initialize decoder.

        Args:
            sample_rate: Audio sample rate (Hz)
            callback: Optional callback for each decoded identifier
            ring_capacity: Size of the unconsumed bit window
        """
        self.sample_rate = sample_rate
        self.callback = callback

        # Components
        self.classifier = FrequencyClassifier(sample_rate)
        self.tracker = SyncTracker(ring_capacity)

        # Samples left over from the last block (less than one bit)
        self._pending = np.zeros(0, dtype=np.float64)

    def reset(self):
        """Reset decoder state."""
        self._pending = np.zeros(0, dtype=np.float64)
        self.tracker.reset()

    def process(self, samples: np.ndarray) -> list[str]:
        """
        Process incoming audio samples.

        Args:
            samples: Signed audio samples (int16 or float)

        Returns:
            List of identifiers decoded from this block
        """
        samples = np.asarray(samples, dtype=np.float64).ravel()
        buffer = np.concatenate([self._pending, samples])

        spb = self.classifier.samples_per_bit
        whole = (len(buffer) // spb) * spb
        bits = self.classifier.classify_block(buffer[:whole])
        self._pending = buffer[whole:]

        return self.process_bits(bits)

    def process_bits(self, bits: Iterable[int]) -> list[str]:
        """
        Feed already classified bits.

        Args:
            bits: Bits (0 or 1)

        Returns:
            List of identifiers decoded
        """
        identifiers = []
        for bit in bits:
            identifier = self.tracker.push_bit(int(bit))
            if identifier is not None:
                identifiers.append(identifier)
                if self.callback:
                    self.callback(identifier)
        return identifiers

    def run(self, blocks: Iterable[np.ndarray]) -> int:
        """
        Decode a stream of sample blocks until it is exhausted.

        Returns:
            Number of identifiers decoded
        """
        count = 0
        for block in blocks:
            count += len(self.process(block))
        return count

    def get_statistics(self) -> dict:
        """
        Get decoder statistics.

        Returns:
            Dict with: bits_processed, locks_acquired, sync_losses,
            identifiers_decoded, locked
        """
        return {
            "bits_processed": self.tracker.bits_processed,
            "locks_acquired": self.tracker.locks_acquired,
            "sync_losses": self.tracker.sync_losses,
            "identifiers_decoded": self.tracker.identifiers_decoded,
            "locked": self.tracker.is_locked,
        }


def decode_file(file_path: str) -> list[tuple[float, str]]:
    """
    Decode ATIS from an audio file.

    Args:
        file_path: Path to a 24000 Hz audio file

    Returns:
        List of (time_seconds, identifier) tuples
    """
    from .audio import read_audio_file

    results = []
    decoder = ATISDecoder()

    def record(identifier: str):
        seconds = decoder.tracker.bits_processed / decoder.classifier.baud_rate
        results.append((seconds, identifier))

    decoder.callback = record
    decoder.run(read_audio_file(file_path))

    return results

"""
ATIS - Automatic Transmitter Identification System decoder.
Recovers vessel identifiers from 1200 baud DSC-format FSK audio.
"""

__version__ = "0.1.0"

# Protocol constants
MARK_FREQ = 1300  # Hz - logic 1 (B)
SPACE_FREQ = 2100  # Hz - logic 0 (Y)
BAUD_RATE = 1200  # bits per second
SAMPLE_RATE = 24000  # Hz (fixed: exactly 20 samples per bit)

# Symbol structure (ITU-R M.493)
SYMBOL_BITS = 10  # 7 data bits + 3 check bits
DATA_BITS = 7
CHECK_BITS = 3

# Reserved symbol values
MAX_DIGIT_PAIR = 99
PHASING_DX = 125
PHASING_RX = [111, 110, 109, 108, 107, 106, 105, 104]
FORMAT_ATIS = 121
EOS = 127

# Time diversity: each symbol repeats this many slots later
DIVERSITY_OFFSET = 5

# Identifier structure: 5 digit pairs = 10 digits
IDENTIFIER_PAIRS = 5

# Dot pattern preceding the phasing sequence (VHF)
DOT_PATTERN_BITS = 20

from .ring import BitRing, BitRingError, BitRingOverflow, BitRingUnderflow
from .symbol import SymbolCodec
from .decoder import (
    ATISDecoder,
    DiversityCollector,
    FrequencyClassifier,
    Locked,
    Searching,
    SyncTracker,
    decode_file,
    goertzel_power,
    normalize_identifier,
)
from .encoder import ATISEncoder
from .sink import ConsoleSink, UDPSink

__all__ = [
    "ATISDecoder",
    "ATISEncoder",
    "BitRing",
    "BitRingError",
    "BitRingOverflow",
    "BitRingUnderflow",
    "ConsoleSink",
    "DiversityCollector",
    "FrequencyClassifier",
    "Locked",
    "Searching",
    "SymbolCodec",
    "SyncTracker",
    "UDPSink",
    "decode_file",
    "goertzel_power",
    "normalize_identifier",
]

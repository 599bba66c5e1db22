"""
Sample sources: raw PCM streams, audio files and live input devices.

Each source yields blocks of int16 samples at 24000 Hz.
"""

import logging
from typing import BinaryIO, Iterator, Optional

import numpy as np

from . import SAMPLE_RATE

_logger = logging.getLogger(__name__)

# 0.1 s of audio
DEFAULT_BLOCK_SAMPLES = SAMPLE_RATE // 10


def read_raw_stream(
    stream: BinaryIO,
    block_samples: int = DEFAULT_BLOCK_SAMPLES,
) -> Iterator[np.ndarray]:
    """
    Read raw signed 16-bit little-endian mono PCM.

    A trailing odd byte at end of stream is dropped.

    Args:
        stream: Binary stream (e.g. stdin)
        block_samples: Samples per read

    Yields:
        int16 sample blocks
    """
    leftover = b""
    while True:
        chunk = stream.read(block_samples * 2)
        if not chunk:
            break

        data = leftover + chunk
        usable = len(data) - (len(data) % 2)
        leftover = data[usable:]
        if usable:
            yield np.frombuffer(data[:usable], dtype="<i2")

    if leftover:
        _logger.debug("Dropping trailing odd byte at end of stream")


def read_audio_file(
    file_path: str,
    block_samples: int = SAMPLE_RATE,
) -> Iterator[np.ndarray]:
    """
    Read an audio file supported by soundfile.

    Multi-channel files are decoded from their first channel.

    Args:
        file_path: Path to audio file (must be 24000 Hz)
        block_samples: Samples per block (default 1 second)

    Yields:
        int16 sample blocks
    """
    import soundfile as sf

    info = sf.info(file_path)
    if info.samplerate != SAMPLE_RATE:
        raise ValueError(
            f"{file_path}: sample rate {info.samplerate} Hz not supported "
            f"(need {SAMPLE_RATE} Hz)"
        )

    for block in sf.blocks(file_path, blocksize=block_samples, dtype="int16", always_2d=True):
        yield block[:, 0]


def read_device(
    device: Optional[int] = None,
    block_samples: int = DEFAULT_BLOCK_SAMPLES,
) -> Iterator[np.ndarray]:
    """
    Read live audio from an input device with blocking reads.

    Args:
        device: Audio input device (None = default)
        block_samples: Samples per read

    Yields:
        int16 sample blocks, until interrupted
    """
    import sounddevice as sd

    with sd.InputStream(
        device=device,
        channels=1,
        samplerate=SAMPLE_RATE,
        dtype="int16",
    ) as stream:
        while True:
            block, overflowed = stream.read(block_samples)
            if overflowed:
                _logger.warning("Audio input overflow")
            yield block[:, 0]


def list_input_devices() -> list[tuple[int, str]]:
    """
    List audio input devices.

    Returns:
        List of (index, name) tuples
    """
    import sounddevice as sd

    return [
        (i, dev["name"])
        for i, dev in enumerate(sd.query_devices())
        if dev["max_input_channels"] > 0
    ]

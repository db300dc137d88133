"""Reading PCM data out of WAV files and wrapping PCM in a WAV header."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_MIN_WAV_SIZE = 44
_PCM_FORMAT = 1
_BITS_PER_SAMPLE = 16


@dataclass
class WavInfo:
    """PCM samples and the format read from a WAV file."""

    pcm: bytes
    sample_rate: int
    channels: int
    bits_per_sample: int

    def duration(self) -> float:
        """Length of the audio in seconds, or 0.0 if the format is degenerate."""
        divisor = self.channels * self.bits_per_sample * self.sample_rate
        if not divisor:
            return 0.0
        return len(self.pcm) * 8.0 / divisor


def _find_chunk(data: bytes, tag: bytes, start: int) -> int:
    """Scan byte by byte for ``tag``; return where the scan stopped."""
    offset = start
    while offset + 8 < len(data):
        if data[offset:offset + 4] == tag:
            break
        offset += 1
    return offset


def convert_wav_to_pcm(data: bytes) -> WavInfo:
    """Extract PCM samples and format details from a PCM WAV file.

    Raises ValueError if the data is not a readable PCM WAV file.
    """
    data = bytes(data)
    if len(data) < _MIN_WAV_SIZE:
        raise ValueError("Invalid WAV file: too small")
    if data[0:4] != b"RIFF":
        raise ValueError("Invalid WAV file: missing RIFF header")
    if data[8:12] != b"WAVE":
        raise ValueError("Invalid WAV file: missing WAVE format")

    fmt = _find_chunk(data, b"fmt ", 12)
    if fmt + 24 > len(data) or data[fmt:fmt + 4] != b"fmt ":
        raise ValueError("Invalid WAV file: no 'fmt' chunk")

    audio_format, channels, sample_rate = struct.unpack_from("<hhi", data, fmt + 8)
    (bits_per_sample,) = struct.unpack_from("<h", data, fmt + 22)
    if audio_format != _PCM_FORMAT:
        raise ValueError("Unsupported WAV format: only PCM is supported")

    chunk = _find_chunk(data, b"data", fmt + 24)
    if chunk + 8 > len(data) or data[chunk:chunk + 4] != b"data":
        raise ValueError("Invalid WAV file: no 'data' chunk")

    (size,) = struct.unpack_from("<i", data, chunk + 4)
    start = chunk + 8
    if size < 0 or start + size > len(data):
        raise ValueError("Invalid WAV file: PCM data size mismatch")

    return WavInfo(
        pcm=data[start:start + size],
        sample_rate=sample_rate,
        channels=channels,
        bits_per_sample=bits_per_sample,
    )


def pcm_to_wav(pcm: bytes, sample_rate: int, channels: int) -> bytes:
    """Wrap 16-bit PCM samples in a canonical 44-byte WAV header."""
    pcm = bytes(pcm)
    block_align = channels * _BITS_PER_SAMPLE // 8
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + len(pcm),
        b"WAVE",
        b"fmt ",
        16,
        _PCM_FORMAT,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        _BITS_PER_SAMPLE,
        b"data",
        len(pcm),
    )
    return header + pcm
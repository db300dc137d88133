"""Framing of raw Opus packet streams and the minimal serialized layout.

The minimal layout is: packet count as little-endian uint32, then each
packet size as little-endian int16, then the concatenated packet bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterator

_COUNT = struct.Struct("<I")
_SIZE_BYTES = 2
_SAMPLE_BYTES = 2


@dataclass
class OpusMinimalStream:
    """Packet sizes and the concatenated compressed packets."""

    packet_sizes: list[int] = field(default_factory=list)
    compressed_bytes: bytes = b""


@dataclass
class OpusCoderConfig:
    """Coder settings and the frame sizes derived from them."""

    sample_rate: int = 16000
    channels: int = 1
    bit_rate: int = 24000
    max_packet_size: int = 3 * 1276
    frame_size_ms: int = 60
    reset_between_encoding: bool = True
    application_voip: bool = True
    lowest_possible_latency: bool = False

    def frame_size(self) -> int:
        """Samples per channel in one frame."""
        return (self.sample_rate * self.frame_size_ms) // 1000

    def max_frame_size(self) -> int:
        return self.frame_size() * 6

    def bytes_per_frame(self) -> int:
        """Bytes of 16-bit interleaved PCM in one frame."""
        return self.frame_size() * self.channels * _SAMPLE_BYTES


def serialize_minimal(stream: OpusMinimalStream) -> bytes:
    """Serialize a stream into the minimal layout."""
    count = len(stream.packet_sizes)
    try:
        sizes = struct.pack(f"<{count}h", *stream.packet_sizes)
    except struct.error as exc:
        raise ValueError(f"packet size does not fit in 16 bits: {exc}") from exc
    return _COUNT.pack(count) + sizes + bytes(stream.compressed_bytes)


def deserialize_minimal(data: bytes) -> OpusMinimalStream:
    """Parse the minimal layout back into a stream."""
    data = bytes(data)
    if len(data) < _COUNT.size:
        raise ValueError("data too short for a packet count")
    (count,) = _COUNT.unpack_from(data)
    offset = _COUNT.size
    end = offset + count * _SIZE_BYTES
    if end > len(data):
        raise ValueError(f"data too short for {count} packet sizes")
    sizes = list(struct.unpack_from(f"<{count}h", data, offset))
    return OpusMinimalStream(packet_sizes=sizes, compressed_bytes=data[end:])


def iter_pcm_frames(pcm: bytes, config: OpusCoderConfig) -> Iterator[bytes]:
    """Yield full PCM frames for encoding; the last one is zero-padded."""
    step = config.bytes_per_frame()
    if step <= 0:
        raise ValueError("frame size must be positive")
    view = memoryview(bytes(pcm))
    for offset in range(0, len(view), step):
        frame = bytes(view[offset:offset + step])
        yield frame.ljust(step, b"\x00")


def iter_packets(stream: OpusMinimalStream) -> Iterator[bytes]:
    """Yield each compressed packet of the stream in order."""
    data = bytes(stream.compressed_bytes)
    offset = 0
    sizes = iter(stream.packet_sizes)
    while offset < len(data):
        try:
            size = next(sizes)
        except StopIteration:
            raise ValueError("compressed bytes exceed the listed packet sizes") from None
        if size < 0 or offset + size > len(data):
            raise ValueError(f"packet size {size} does not fit the remaining data")
        yield data[offset:offset + size]
        offset += size
"""Socket.IO style message model, timers, threading helpers, Opus stream framing, WAV and file utilities."""

__version__ = "0.1.0"

__all__ = [
    "audio",
    "calls",
    "convert",
    "files",
    "message",
    "opus_stream",
    "runnable",
    "timer",
]
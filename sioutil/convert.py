"""Conversions between bytes, strings and compact transform arrays."""

from __future__ import annotations

import codecs
import hashlib
import struct
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

_FLOAT = struct.Struct("<f")
_TRANSFORM = struct.Struct("<9f")
_POSITION = struct.Struct("<3f")

Vector = tuple[float, float, float]

_DATE_FORMAT = "%Y.%m.%d-%H.%M.%S"
_MACHINE_ID_FILES = ("/etc/machine-id", "/var/lib/dbus/machine-id")


@dataclass(frozen=True)
class Transform:
    """Rotation as (pitch, yaw, roll), translation and scale."""

    rotation: Vector = (0.0, 0.0, 0.0)
    translation: Vector = (0.0, 0.0, 0.0)
    scale: Vector = (1.0, 1.0, 1.0)


def bytes_to_string(data: bytes) -> str:
    """Decode text bytes, honouring a UTF-16 or UTF-8 byte order mark.

    Without a mark the bytes are read as UTF-8; undecodable bytes are replaced.
    """
    data = bytes(data)
    if data.startswith(codecs.BOM_UTF16_LE):
        return data[2:].decode("utf-16-le", errors="replace")
    if data.startswith(codecs.BOM_UTF16_BE):
        return data[2:].decode("utf-16-be", errors="replace")
    if data.startswith(codecs.BOM_UTF8):
        data = data[3:]
    return data.decode("utf-8", errors="replace")


def string_to_bytes(text: str) -> bytes:
    """Encode a string as UTF-8 without a terminator."""
    return text.encode("utf-8")


def _check_float_groups(data: bytes, group: int) -> bytes:
    data = bytes(data)
    if len(data) % _FLOAT.size:
        raise ValueError("byte count is not a whole number of 32-bit floats")
    if (len(data) // _FLOAT.size) % group:
        raise ValueError(f"float array is not divisible by {group}")
    return data


def compact_bytes_to_transforms(data: bytes) -> list[Transform]:
    """Read little-endian float32 groups [pitch, yaw, roll, x, y, z, sx, sy, sz].

    Raises ValueError if the data is not a whole number of such groups.
    """
    data = _check_float_groups(data, 9)
    return [
        Transform(
            rotation=(pitch, yaw, roll),
            translation=(x, y, z),
            scale=(sx, sy, sz),
        )
        for pitch, yaw, roll, x, y, z, sx, sy, sz in _TRANSFORM.iter_unpack(data)
    ]


def compact_position_bytes_to_transforms(data: bytes) -> list[Transform]:
    """Read little-endian float32 groups [x, y, z] as unrotated, unscaled transforms.

    Raises ValueError if the data is not a whole number of such groups.
    """
    data = _check_float_groups(data, 3)
    return [Transform(translation=position) for position in _POSITION.iter_unpack(data)]


def now_utc_string() -> str:
    """The current UTC time as ``YYYY.MM.DD-HH.MM.SS``."""
    return datetime.now(timezone.utc).strftime(_DATE_FORMAT)


def get_login_id() -> str:
    """A stable identifier for this machine, as 32 lower-case hex digits."""
    for name in _MACHINE_ID_FILES:
        try:
            machine_id = Path(name).read_text(encoding="ascii").strip().lower()
        except (OSError, UnicodeDecodeError):
            continue
        if len(machine_id) == 32 and all(c in "0123456789abcdef" for c in machine_id):
            return machine_id
    node = f"{uuid.getnode():012x}"
    return hashlib.md5(node.encode("ascii")).hexdigest()
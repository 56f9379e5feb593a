"""splitarc - Fixed-width unsigned integer codec."""
from __future__ import annotations

from .protocol import LEN_SIZE


def encode(value: int, width: int = LEN_SIZE) -> bytes:
    """Encode ``value`` as ``width`` little-endian bytes.

    Values wider than ``width`` bytes are truncated to their low bits.
    """
    mask = (1 << (8 * width)) - 1
    return (value & mask).to_bytes(width, "little")


def decode(data: bytes | bytearray | memoryview | None, start: int = 0, width: int = LEN_SIZE) -> int:
    """Decode ``width`` little-endian bytes of ``data`` starting at ``start``."""
    if data is None:
        return 0
    return int.from_bytes(data[start:start + width], "little")

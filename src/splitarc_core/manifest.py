"""splitarc - Manifest record (segment count + total payload bytes)."""
from __future__ import annotations

import os
import struct
from typing import NamedTuple

from .errors import CorruptArchiveError
from .protocol import MANIFEST_FMT, MANIFEST_LEN, SEGMENT_SUFFIX, U64_MAX


class Manifest(NamedTuple):
    segment_count: int
    total_bytes: int

    def pack(self) -> bytes:
        # Fields wider than u64 are truncated the same way the length codec does
        return struct.pack(MANIFEST_FMT, self.segment_count & U64_MAX, self.total_bytes & U64_MAX)

    @classmethod
    def unpack(cls, raw: bytes, path: str | None = None) -> "Manifest":
        if len(raw) < MANIFEST_LEN:
            raise CorruptArchiveError(
                f"manifest is {len(raw)} bytes, expected {MANIFEST_LEN}", path
            )
        count, total = struct.unpack(MANIFEST_FMT, raw[:MANIFEST_LEN])
        return cls(int(count), int(total))


def segment_path(base_path: str | os.PathLike, index: int) -> str:
    """Name of segment ``index`` belonging to the manifest at ``base_path``."""
    return f"{os.fspath(base_path)}{SEGMENT_SUFFIX}{index}"

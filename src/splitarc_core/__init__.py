"""splitarc core - Shared codec, protocol constants and errors."""
from .codec import encode, decode
from .errors import (
    ArchiveError,
    ArchiveIOError,
    AllocationError,
    CorruptArchiveError,
    EncodeError,
    MissingSegmentError,
    ParseError,
)
from .manifest import Manifest, segment_path
from .sizes import parse_size

__all__ = [
    "encode",
    "decode",
    "Manifest",
    "segment_path",
    "parse_size",
    "ArchiveError",
    "ArchiveIOError",
    "AllocationError",
    "CorruptArchiveError",
    "EncodeError",
    "MissingSegmentError",
    "ParseError",
]

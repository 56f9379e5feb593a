"""splitarc - Manifest reading and segment reassembly."""
from __future__ import annotations

import logging
import os

from splitarc_core.errors import AllocationError, ArchiveIOError, CorruptArchiveError, MissingSegmentError
from splitarc_core.manifest import Manifest, segment_path
from splitarc_core.protocol import MANIFEST_LEN

logger = logging.getLogger(__name__)


def read_manifest(path: str | os.PathLike) -> Manifest:
    path = os.fspath(path)
    try:
        with open(path, "rb") as f:
            raw = f.read(MANIFEST_LEN)
    except OSError as e:
        raise ArchiveIOError(f"could not read manifest: {e.strerror or e}", path) from e
    manifest = Manifest.unpack(raw, path)
    logger.debug("Manifest '%s': %d segments, %d bytes", path, *manifest)
    return manifest


def gather_segments(base_path: str | os.PathLike, manifest: Manifest) -> bytearray:
    """Concatenate all segments of ``manifest`` into one buffer.

    Every segment is checked for access before any byte is read. The copy
    is aborted before it can run past ``manifest.total_bytes``.
    """
    for i in range(manifest.segment_count):
        name = segment_path(base_path, i)
        if not os.path.isfile(name) or not os.access(name, os.R_OK):
            raise MissingSegmentError("segment is absent or unreadable", name)

    try:
        buf = bytearray(manifest.total_bytes)
    except (MemoryError, OverflowError) as e:
        raise AllocationError(f"{manifest.total_bytes} bytes for archive data", os.fspath(base_path)) from e

    offset = 0
    for i in range(manifest.segment_count):
        name = segment_path(base_path, i)
        logger.info("Reading file '%s'", os.path.basename(name))
        try:
            with open(name, "rb") as f:
                data = f.read()
        except OSError as e:
            raise ArchiveIOError(f"could not read segment: {e.strerror or e}", name) from e

        if offset + len(data) > manifest.total_bytes:
            raise CorruptArchiveError(
                f"segment data exceeds declared total of {manifest.total_bytes} bytes", name
            )
        buf[offset:offset + len(data)] = data
        offset += len(data)

    if offset != manifest.total_bytes:
        raise CorruptArchiveError(
            f"segments hold {offset} bytes, manifest declares {manifest.total_bytes}",
            os.fspath(base_path),
        )
    return buf

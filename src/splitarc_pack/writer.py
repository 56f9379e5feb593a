"""splitarc - Segment writer: splits encoded records across capped-size files."""
from __future__ import annotations

import logging
import os
from typing import BinaryIO, Iterable

from splitarc_core.errors import ArchiveIOError
from splitarc_core.manifest import Manifest, segment_path
from splitarc_core.protocol import UNLIMITED, WRITE_CHUNK_SIZE

from splitarc_pack.records import encode_record

logger = logging.getLogger(__name__)


def write_chunked(f: BinaryIO, data: bytes | bytearray | memoryview) -> int:
    """Write ``data`` in slices of at most WRITE_CHUNK_SIZE.

    Returns the number of bytes written. Stops early on a short write.
    """
    view = memoryview(data)
    written = 0
    while written < len(view):
        n = f.write(view[written:written + WRITE_CHUNK_SIZE])
        if not n:
            break
        written += n
    return written


class ArchiveWriter:
    """Splits a stream of encoded records across capped-size segment files.

    - Records are written back to back; a segment boundary can fall anywhere
      inside a record, the rest of it is carried into the next segment.
    - A new segment is opened exactly when the committed byte count is a
      multiple of the segment cap.
    - The manifest at ``base_path`` is written last, by ``finish()``.
    """

    def __init__(self, base_path: str | os.PathLike, max_segment_size: int = 0):
        if max_segment_size < 0:
            raise ValueError(f"max_segment_size must be >= 0, got {max_segment_size}")
        self.base_path = os.fspath(base_path)
        self.max_segment_size = max_segment_size or UNLIMITED

        self.written_total = 0
        self.bytes_carry = 0
        self.bytes_offset = 0
        self.segment_index = 0
        self.record_count = 0

        self._segment: BinaryIO | None = None
        self._segment_name: str | None = None
        self._finished = False
        self.manifest: Manifest | None = None

    def __enter__(self) -> "ArchiveWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.finish()
        else:
            self._close_segment()

    def _close_segment(self) -> None:
        if self._segment is not None:
            try:
                self._segment.close()
            except OSError as e:
                raise ArchiveIOError(f"could not close file: {e.strerror or e}", self._segment_name) from e
            finally:
                self._segment = None

    def _rotate(self) -> None:
        self._close_segment()
        name = segment_path(self.base_path, self.segment_index)
        try:
            self._segment = open(name, "wb")
        except OSError as e:
            raise ArchiveIOError(f"could not open file: {e.strerror or e}", name) from e
        self._segment_name = name
        self.segment_index += 1
        logger.info("Opened segment '%s'", name)

    def _write(self, data: memoryview) -> int:
        if self._segment is None:
            raise RuntimeError("no segment is open")
        logger.info("Writing %d MiB to file '%s'.", len(data) // (1024 * 1024), self._segment_name)
        try:
            written = write_chunked(self._segment, data)
        except OSError as e:
            raise ArchiveIOError(f"could not write to file: {e.strerror or e}", self._segment_name) from e
        if written < len(data):
            raise ArchiveIOError(f"short write ({written} of {len(data)} bytes)", self._segment_name)
        return written

    def add_record(self, record: bytes | bytearray) -> None:
        """Write one encoded record, rotating segments as the cap is reached."""
        if self._finished:
            raise RuntimeError("ArchiveWriter is already finished")

        view = memoryview(record)
        self.bytes_offset = 0
        self.bytes_carry = len(view)

        # draining-carry: same record, possibly across several segments
        while self.bytes_carry:
            bytes_left = self.max_segment_size - (self.written_total % self.max_segment_size)
            write_n = min(bytes_left, len(view) - self.bytes_offset)

            if bytes_left == self.max_segment_size:
                self._rotate()

            written = self._write(view[self.bytes_offset:self.bytes_offset + write_n])
            self.written_total += written
            self.bytes_offset += written
            self.bytes_carry = len(view) - self.bytes_offset

            if self.bytes_carry:
                logger.debug("Carrying %d bytes into the next segment", self.bytes_carry)

        self.record_count += 1

    def add(self, path: str | os.PathLike) -> None:
        # loading-next-record
        self.add_record(encode_record(path))

    def finish(self) -> Manifest:
        """Close the last segment and write the manifest."""
        if self._finished:
            raise RuntimeError("ArchiveWriter is already finished")
        self._close_segment()

        manifest = Manifest(self.segment_index, self.written_total)
        raw = manifest.pack()
        try:
            with open(self.base_path, "wb") as f:
                written = f.write(raw)
        except OSError as e:
            raise ArchiveIOError(f"could not write manifest: {e.strerror or e}", self.base_path) from e
        if written < len(raw):
            raise ArchiveIOError("short write on manifest", self.base_path)

        self._finished = True
        self.manifest = manifest
        logger.info(
            "Successfully wrote %d bytes to %d files.", manifest.total_bytes, manifest.segment_count
        )
        return manifest


def pack_files(
    paths: Iterable[str | os.PathLike],
    base_path: str | os.PathLike,
    max_segment_size: int = 0,
) -> Manifest:
    """Encode ``paths`` into segments next to ``base_path`` and write the manifest."""
    writer = ArchiveWriter(base_path, max_segment_size)
    with writer:
        for p in paths:
            writer.add(p)
    return writer.manifest

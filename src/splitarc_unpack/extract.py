"""splitarc - Record decoding and file extraction."""
from __future__ import annotations

import logging
import os
from typing import Iterator

from splitarc_core.codec import decode
from splitarc_core.errors import ArchiveIOError, CorruptArchiveError
from splitarc_core.protocol import LEN_SIZE, LOG_NAME, PATH_SEPARATORS

from splitarc_pack.writer import write_chunked
from splitarc_unpack.reader import gather_segments, read_manifest

logger = logging.getLogger(__name__)


def _take(view: memoryview, pos: int, n: int, what: str) -> memoryview:
    if n > len(view) - pos:
        raise CorruptArchiveError(
            f"{what} of {n} bytes at offset {pos} runs past end of data ({len(view)} bytes)"
        )
    return view[pos:pos + n]


def _check_name(name: str, log_name: str) -> None:
    if name in ("", ".", "..") or "\x00" in name or any(sep in name for sep in PATH_SEPARATORS):
        raise CorruptArchiveError(f"unsafe record name {name!r}")
    if name == log_name:
        raise CorruptArchiveError(f"record name {name!r} collides with the extraction log")


def iter_records(buffer: bytes | bytearray | memoryview) -> Iterator[tuple[str, memoryview]]:
    """Yield ``(name, content)`` for each record in a concatenated buffer.

    Every length field is bounds-checked; truncated data raises
    CorruptArchiveError instead of reading past the end.
    """
    view = memoryview(buffer)
    pos = 0
    while pos < len(view):
        name_len = decode(_take(view, pos, LEN_SIZE, "name length"))
        pos += LEN_SIZE
        name = os.fsdecode(bytes(_take(view, pos, name_len, "name")))
        pos += name_len

        content_len = decode(_take(view, pos, LEN_SIZE, "content length"))
        pos += LEN_SIZE
        content = _take(view, pos, content_len, f"content of '{name}'")
        pos += content_len

        yield name, content


def extract_records(
    buffer: bytes | bytearray | memoryview,
    out_dir: str | os.PathLike = ".",
    log_name: str = LOG_NAME,
) -> list[str]:
    """Write every record in ``buffer`` to ``out_dir`` and log its name.

    Existing files are overwritten. The log is truncated first.
    """
    out_dir = os.fspath(out_dir)
    log_path = os.path.join(out_dir, log_name)
    names: list[str] = []

    try:
        log = open(log_path, "wb")
    except OSError as e:
        raise ArchiveIOError(f"could not open log: {e.strerror or e}", log_path) from e

    with log:
        for name, content in iter_records(buffer):
            _check_name(name, log_name)
            target = os.path.join(out_dir, name)
            logger.info("Writing file '%s'", name)

            try:
                with open(target, "wb") as out:
                    written = write_chunked(out, content)
            except OSError as e:
                raise ArchiveIOError(f"could not write file: {e.strerror or e}", target) from e
            if written < len(content):
                raise ArchiveIOError(f"short write ({written} of {len(content)} bytes)", target)

            try:
                log.write(os.fsencode(name) + b"\n")
            except OSError as e:
                raise ArchiveIOError(f"could not write log: {e.strerror or e}", log_path) from e
            names.append(name)

    return names


def unpack_archive(manifest_path: str | os.PathLike, out_dir: str | os.PathLike = ".") -> list[str]:
    """Read the manifest, reassemble its segments and extract every file."""
    manifest = read_manifest(manifest_path)
    data = gather_segments(manifest_path, manifest)
    names = extract_records(data, out_dir)
    logger.info("Successfully extracted all files.")
    return names

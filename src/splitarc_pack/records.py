"""splitarc - File reading and record encoding."""
from __future__ import annotations

import logging
import os

from splitarc_core.codec import encode
from splitarc_core.errors import AllocationError, ArchiveIOError, EncodeError
from splitarc_core.protocol import LEN_SIZE, LOG_NAME, PATH_SEPARATORS

logger = logging.getLogger(__name__)


def read_bytes(path: str | os.PathLike) -> bytes:
    """Read the complete content of ``path``.

    The size is taken from ``os.stat`` (symlinks are followed, as ``open``
    does) and exactly that many bytes are requested. A file changing size
    between the two calls is not handled.
    """
    try:
        size = os.stat(path).st_size
    except OSError as e:
        raise ArchiveIOError(f"could not determine size: {e.strerror or e}", os.fspath(path)) from e

    try:
        with open(path, "rb") as f:
            data = f.read(size)
    except MemoryError as e:
        raise AllocationError(f"{size} bytes for file content", os.fspath(path)) from e
    except OSError as e:
        raise ArchiveIOError(f"could not read file: {e.strerror or e}", os.fspath(path)) from e
    return data


def basename(path: str) -> str:
    """Return the part of ``path`` after its last ``/`` or ``\\``."""
    cut = max(path.rfind(sep) for sep in PATH_SEPARATORS)
    return path[cut + 1:]


def encoded_size(name_len: int, content_len: int) -> int:
    return 2 * LEN_SIZE + name_len + content_len


def encode_record(path: str | os.PathLike) -> bytearray:
    """Encode one file as ``[len(name)][name][len(content)][content]``."""
    path_str = os.fspath(path)
    name = os.fsencode(basename(path_str))
    if os.fsdecode(name) == LOG_NAME:
        raise EncodeError("name is reserved for the extraction log", path_str)
    logger.info("Encoding file '%s'...", os.fsdecode(name))

    try:
        content = read_bytes(path_str)
    except ArchiveIOError as e:
        raise EncodeError(e.detail, path_str) from e

    try:
        buf = bytearray(encoded_size(len(name), len(content)))
    except MemoryError as e:
        raise AllocationError("record buffer", path_str) from e

    idx = 0
    buf[idx:idx + LEN_SIZE] = encode(len(name))
    idx += LEN_SIZE
    buf[idx:idx + len(name)] = name
    idx += len(name)
    buf[idx:idx + LEN_SIZE] = encode(len(content))
    idx += LEN_SIZE
    buf[idx:] = content

    logger.debug("Record '%s': %d name bytes, %d content bytes", os.fsdecode(name), len(name), len(content))
    return buf

"""splitarc - Error taxonomy.

Every failure is fatal to the current run. The CLI maps any ArchiveError
to exit status 1 and prints its message.
"""
from __future__ import annotations

ERRORS = {
    "E_PARSE_SIZE": "Error parsing the given max. output size",
    "E_IO": "File could not be opened, read or written",
    "E_ENCODE": "Could not encode file",
    "E_ALLOC": "Could not allocate memory",
    "E_SEGMENT_MISSING": "Can not access segment file",
    "E_CORRUPT": "Archive is corrupted",
}


class ArchiveError(Exception):
    code = "E_ARCHIVE"

    def __init__(self, detail: str, path: str | None = None):
        self.detail = detail
        self.path = path
        super().__init__(self.message)

    @property
    def message(self) -> str:
        base = ERRORS.get(self.code, "Archive error")
        msg = f"{base}: {self.detail}"
        if self.path is not None:
            msg += f" ('{self.path}')"
        return msg


class ParseError(ArchiveError, ValueError):
    code = "E_PARSE_SIZE"


class ArchiveIOError(ArchiveError):
    code = "E_IO"


class EncodeError(ArchiveError):
    code = "E_ENCODE"


class AllocationError(ArchiveError):
    code = "E_ALLOC"


class MissingSegmentError(ArchiveError):
    code = "E_SEGMENT_MISSING"


class CorruptArchiveError(ArchiveError):
    code = "E_CORRUPT"

"""splitarc - Max segment size parsing."""
from __future__ import annotations

import re

from .errors import ParseError
from .protocol import U64_MAX, UNIT_MULTIPLIERS, UNLIMITED

_SIZE_RE = re.compile(r"^(\d+)([A-Za-z]?)$")


def parse_size(text: str) -> int:
    """Parse a size such as ``32M`` into bytes.

    ``K``, ``M`` and ``G`` (either case) are powers of 1024. ``0``, with no
    unit or any single-letter one, means unlimited and returns ``UNLIMITED``.
    A nonzero value must carry a unit.
    """
    m = _SIZE_RE.match(text.strip())
    if not m:
        raise ParseError(f"'{text}'")

    value = int(m.group(1))
    unit = m.group(2).upper()

    # Zero is unlimited whatever follows it
    if value == 0:
        return UNLIMITED

    if not unit or unit not in UNIT_MULTIPLIERS:
        raise ParseError(f"missing or invalid unit in '{text}' (valid units are: K | M | G)")

    size = value * UNIT_MULTIPLIERS[unit]
    if size > U64_MAX:
        raise ParseError(f"'{text}' (overflow)")
    return size

"""splitarc on-disk protocol constants.

Single source of truth for field widths, file naming and size limits.
Keep this file stable. Writer and Reader must remain synchronized.
"""

# Every length field (name, content, manifest) is a little-endian u64
LEN_SIZE = 8

# Manifest: [SegmentCount(8) | TotalBytes(8)] = 16 bytes
MANIFEST_FMT = "<QQ"
MANIFEST_LEN = 16

# max_size of 0 means "no cap"; stored as the largest u64 so the
# segment modulo never forces a rotation
U64_MAX = 2**64 - 1
UNLIMITED = U64_MAX

# Segment files are named <manifest>_data<N>
SEGMENT_SUFFIX = "_data"

# Bound on a single write() call, not on memory use
WRITE_CHUNK_SIZE = 128 * 1024 * 1024  # 128 MiB

# Decode audit log, one extracted name per line
LOG_NAME = "parser.log"

# Size suffixes accepted on the command line (powers of 1024)
UNIT_MULTIPLIERS = {
    "K": 1024,
    "M": 1024 * 1024,
    "G": 1024 * 1024 * 1024,
}

# Characters that end a path component when taking a basename
PATH_SEPARATORS = ("/", "\\")

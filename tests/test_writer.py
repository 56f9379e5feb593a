import pytest

from splitarc_core import Manifest
from splitarc_core.errors import ArchiveIOError, EncodeError
from splitarc_core.protocol import UNLIMITED
from splitarc_pack.records import encode_record
from splitarc_pack.writer import ArchiveWriter, pack_files, write_chunked


def segment_sizes(base, count):
    return [(base.parent / f"{base.name}_data{i}").stat().st_size for i in range(count)]


def test_unlimited_two_small_files(make_file, tmp_path):
    a = make_file("a", b"xyz")
    b = make_file("b", b"ab")
    out = tmp_path / "out"

    manifest = pack_files([a, b], out, 0)

    assert manifest == Manifest(1, 39)
    assert out.read_bytes() == Manifest(1, 39).pack()
    assert (tmp_path / "out_data0").read_bytes() == encode_record(a) + encode_record(b)


def test_exact_fit_single_segment(make_file, tmp_path):
    p = make_file("f", b"\x00" * 47)  # 8 + 1 + 8 + 47 == 64
    out = tmp_path / "out"

    manifest = pack_files([p], out, 64)

    assert manifest == Manifest(1, 64)
    assert segment_sizes(out, 1) == [64]
    assert not (tmp_path / "out_data1").exists()


def test_one_byte_over_spills_into_second_segment(make_file, tmp_path):
    p = make_file("f", b"\x01" * 48)  # 65 encoded bytes
    out = tmp_path / "out"

    manifest = pack_files([p], out, 64)

    assert manifest == Manifest(2, 65)
    assert segment_sizes(out, 2) == [64, 1]
    assert (tmp_path / "out_data1").read_bytes() == b"\x01"


def test_carry_across_many_segments(make_file, tmp_path):
    a = make_file("a", b"xyz")
    b = make_file("b", b"ab")
    out = tmp_path / "out"

    manifest = pack_files([a, b], out, 10)

    assert manifest == Manifest(4, 39)
    sizes = segment_sizes(out, 4)
    assert sizes == [10, 10, 10, 9]
    joined = b"".join((tmp_path / f"out_data{i}").read_bytes() for i in range(4))
    assert joined == encode_record(a) + encode_record(b)


def test_accounting_matches_records(make_file, tmp_path):
    paths = [make_file(f"f{i}", bytes([i]) * (i * 37)) for i in range(8)]
    out = tmp_path / "out"

    manifest = pack_files(paths, out, 100)

    records_total = sum(len(encode_record(p)) for p in paths)
    assert manifest.total_bytes == records_total
    assert sum(segment_sizes(out, manifest.segment_count)) == records_total
    assert manifest.segment_count == -(-records_total // 100)


def test_writer_state_tracks_carry(make_file, tmp_path):
    p = make_file("big", b"z" * 101)  # 120 encoded bytes
    w = ArchiveWriter(tmp_path / "out", 50)
    w.add(p)

    assert w.segment_index == 3
    assert w.written_total == 120
    assert w.bytes_offset == 120
    assert w.bytes_carry == 0
    assert w.finish() == Manifest(3, 120)


def test_zero_means_unlimited(tmp_path):
    w = ArchiveWriter(tmp_path / "out", 0)
    assert w.max_segment_size == UNLIMITED


def test_negative_size_rejected(tmp_path):
    with pytest.raises(ValueError):
        ArchiveWriter(tmp_path / "out", -1)


def test_no_inputs_writes_empty_manifest(tmp_path):
    out = tmp_path / "out"
    assert pack_files([], out, 0) == Manifest(0, 0)
    assert out.read_bytes() == b"\x00" * 16


def test_missing_input_aborts_without_manifest(make_file, tmp_path):
    a = make_file("a", b"xyz")
    out = tmp_path / "out"

    with pytest.raises(EncodeError):
        pack_files([a, tmp_path / "missing"], out, 0)

    # Segment already flushed stays, manifest never written
    assert (tmp_path / "out_data0").exists()
    assert not out.exists()


def test_unwritable_segment_location(make_file, tmp_path):
    a = make_file("a", b"xyz")
    with pytest.raises(ArchiveIOError) as exc:
        pack_files([a], tmp_path / "no_such_dir" / "out", 0)
    assert "out_data0" in str(exc.value)


def test_finish_twice_rejected(tmp_path):
    w = ArchiveWriter(tmp_path / "out", 0)
    w.finish()
    with pytest.raises(RuntimeError):
        w.finish()


class ShortWriter:
    def __init__(self, limit):
        self.limit = limit
        self.chunks = []

    def write(self, data):
        n = min(len(data), self.limit)
        self.limit -= n
        self.chunks.append(bytes(data[:n]))
        return n


def test_write_chunked_reports_short_write():
    f = ShortWriter(5)
    assert write_chunked(f, b"0123456789") == 5
    assert b"".join(f.chunks) == b"01234"


def test_write_chunked_splits_at_chunk_size(monkeypatch):
    monkeypatch.setattr("splitarc_pack.writer.WRITE_CHUNK_SIZE", 4)
    f = ShortWriter(100)
    assert write_chunked(f, b"0123456789") == 10
    assert f.chunks == [b"0123", b"4567", b"89"]


def test_log_name_input_aborts_before_manifest(make_file, tmp_path):
    log_like = make_file("parser.log", b"ORIGINAL CONTENT OF THE LOG FILE")
    x = make_file("x", b"payload")
    out = tmp_path / "out"

    with pytest.raises(EncodeError):
        pack_files([log_like, x], out, 0)
    assert not out.exists()


def test_write_without_open_segment(tmp_path):
    w = ArchiveWriter(tmp_path / "out", 0)
    with pytest.raises(RuntimeError, match="no segment"):
        w._write(memoryview(b"abc"))

from pathlib import Path

import pytest


@pytest.fixture
def make_file(tmp_path):
    """Write ``content`` to ``tmp_path/inputs/name`` and return the path."""
    src = tmp_path / "inputs"
    src.mkdir(exist_ok=True)

    def _make(name: str, content: bytes) -> Path:
        p = src / name
        p.write_bytes(content)
        return p

    return _make

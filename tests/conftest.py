from datetime import datetime, timezone
from pathlib import Path

import pytest

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_now():
    return FIXED_NOW


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch):
    """
    Temporary working directory with a few input files:
      a.txt       -> hello`world
      b.txt       -> plain
      gopher.png  -> binary bytes
    """
    (tmp_path / "a.txt").write_text("hello`world", encoding="utf-8")
    (tmp_path / "b.txt").write_text("plain", encoding="utf-8")
    (tmp_path / "gopher.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff")
    monkeypatch.chdir(tmp_path)
    return tmp_path

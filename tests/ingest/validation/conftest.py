"""Fixtures for integrity validation tests."""

from datetime import datetime
from pathlib import Path

import pytest

from mediaingest.ingest.validation import BaseTimestampReader, IntegrityValidator


class FakeTimestampReader(BaseTimestampReader):
    """Returns canned capture times keyed by file name."""

    def __init__(self, times: dict[str, datetime | Exception] | None = None) -> None:
        self.times = times or {}

    async def read_capture_time(self, file_path: Path) -> datetime | None:
        value = self.times.get(Path(file_path).name)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def fake_reader() -> FakeTimestampReader:
    return FakeTimestampReader()


@pytest.fixture
def validator(fake_reader, mock_logger) -> IntegrityValidator:
    return IntegrityValidator(timestamp_reader=fake_reader, logger=mock_logger)


@pytest.fixture
def file_pair(tmp_path: Path):
    """Create a source/destination pair with the given contents."""

    def make(name: str, source: bytes, dest: bytes | None) -> tuple[Path, Path]:
        src = tmp_path / "card" / name
        dst = tmp_path / "dest" / name
        src.parent.mkdir(parents=True, exist_ok=True)
        dst.parent.mkdir(parents=True, exist_ok=True)
        src.write_bytes(source)
        if dest is not None:
            dst.write_bytes(dest)
        return src, dst

    return make

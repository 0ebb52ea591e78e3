"""Tests for per-file validation and timestamp extraction."""

from datetime import datetime

import pytest

from mediaingest.domain.exceptions import FileAccessError, SizeMismatchError
from mediaingest.domain.integrity import TimestampConfidence, TimestampSource
from mediaingest.ingest.validation import (
    EXTRACTION_FAILED_WARNING,
    FILESYSTEM_FALLBACK_WARNING,
)

CAPTURED = datetime(2024, 10, 3, 14, 22, 5)


class TestValidateFile:
    @pytest.mark.asyncio
    async def test_matching_sizes_pass(self, validator, fake_reader, file_pair) -> None:
        fake_reader.times["A.JPG"] = CAPTURED
        src, dst = file_pair("A.JPG", b"x" * 100, b"x" * 100)

        result = await validator.validate_file(src, dst)

        assert result.file == "A.JPG"
        assert result.size_match is True
        assert result.source_size == result.dest_size == 100
        assert result.timestamp == CAPTURED
        assert result.timestamp_source == TimestampSource.EXIF
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_size_mismatch_raises(self, validator, file_pair) -> None:
        src, dst = file_pair("B.JPG", b"x" * 1000, b"x" * 999)

        with pytest.raises(SizeMismatchError) as exc_info:
            await validator.validate_file(src, dst)

        error = exc_info.value
        assert error.code == "SIZE_MISMATCH"
        assert error.file == "B.JPG"
        assert error.source_size == 1000
        assert error.dest_size == 999
        assert "source=1000, dest=999" in str(error)

    @pytest.mark.asyncio
    async def test_missing_destination_is_access_error(self, validator, file_pair) -> None:
        src, dst = file_pair("C.JPG", b"x", None)

        with pytest.raises(FileAccessError) as exc_info:
            await validator.validate_file(src, dst)

        assert exc_info.value.code == "FILE_ACCESS"
        assert exc_info.value.file == "C.JPG"

    @pytest.mark.asyncio
    async def test_filesystem_fallback_adds_warning(self, validator, file_pair) -> None:
        src, dst = file_pair("D.MOV", b"abc", b"abc")

        result = await validator.validate_file(src, dst)

        assert result.timestamp_source == TimestampSource.FILESYSTEM
        assert result.timestamp is not None
        assert result.warnings == [FILESYSTEM_FALLBACK_WARNING]


class TestExtractTimestamp:
    @pytest.mark.asyncio
    async def test_exif_is_high_confidence(self, validator, fake_reader, file_pair) -> None:
        fake_reader.times["E.JPG"] = CAPTURED
        src, _ = file_pair("E.JPG", b"1", b"1")

        result = await validator.extract_timestamp(src)

        assert result.source == TimestampSource.EXIF
        assert result.confidence == TimestampConfidence.HIGH
        assert result.warning is None

    @pytest.mark.asyncio
    async def test_reader_failure_falls_back_to_filesystem(
        self, validator, fake_reader, file_pair
    ) -> None:
        fake_reader.times["F.JPG"] = ValueError("corrupt EXIF")
        src, _ = file_pair("F.JPG", b"1", b"1")

        result = await validator.extract_timestamp(src)

        assert result.source == TimestampSource.FILESYSTEM
        assert result.confidence == TimestampConfidence.MEDIUM
        assert result.warning == FILESYSTEM_FALLBACK_WARNING

    @pytest.mark.asyncio
    async def test_unreadable_file_is_low_confidence(
        self, validator, fake_reader, tmp_path
    ) -> None:
        fake_reader.times["G.JPG"] = OSError("gone")

        result = await validator.extract_timestamp(tmp_path / "G.JPG")

        assert result.timestamp is None
        assert result.source is None
        assert result.confidence == TimestampConfidence.LOW
        assert result.warning == EXTRACTION_FAILED_WARNING

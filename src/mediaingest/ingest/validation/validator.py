"""Post-transfer integrity validation.

A copy is accepted only when its byte size matches the source. Each file
also gets a best-effort capture timestamp, graded by where it came from:
embedded EXIF (HIGH), filesystem metadata (MEDIUM), or nothing (LOW).
Only EXIF timestamps are trusted for strict chronological ordering.
"""

import os
import typing as t
from datetime import datetime
from pathlib import Path

import aiofiles.os

from ...domain.exceptions import FileAccessError, SizeMismatchError
from ...domain.integrity import (
    BatchValidationResult,
    BatchWarning,
    FileTransferRecord,
    FileValidationResult,
    TimestampConfidence,
    TimestampResult,
    TimestampSource,
    ValidationSeverity,
)
from ...infrastructure.logging import get_logger
from .readers import BaseTimestampReader, ExifTimestampReader

if t.TYPE_CHECKING:
    from loguru import Logger

FILESYSTEM_FALLBACK_WARNING: t.Final = (
    "EXIF DateTimeOriginal missing - using file creation time. "
    "Verify camera clock accuracy before cataloging."
)
EXTRACTION_FAILED_WARNING: t.Final = (
    "Could not extract timestamp from file. Manual timestamp correction required."
)


def _filesystem_time(stat: os.stat_result) -> datetime:
    """Creation time where the platform records it, else modification time."""
    birthtime = getattr(stat, "st_birthtime", None)
    return datetime.fromtimestamp(birthtime if birthtime else stat.st_mtime)


class IntegrityValidator:
    """Validates transferred files and aggregates batch reports."""

    def __init__(
        self,
        *,
        timestamp_reader: BaseTimestampReader | None = None,
        logger: t.Optional["Logger"] = None,
    ) -> None:
        self._reader = timestamp_reader or ExifTimestampReader()
        self._logger = logger or get_logger(__name__)

    async def validate_file(
        self, source_path: Path, dest_path: Path
    ) -> FileValidationResult:
        """Check a copy against its source and attach a capture timestamp.

        Raises:
            FileAccessError: If either file cannot be stat'd.
            SizeMismatchError: If source and destination sizes differ.
        """
        source_path = Path(source_path)
        dest_path = Path(dest_path)
        name = source_path.name

        source_size = await self._size_of(source_path, name)
        dest_size = await self._size_of(dest_path, name)

        if source_size != dest_size:
            raise SizeMismatchError(
                file=name, source_size=source_size, dest_size=dest_size
            )

        timestamp = await self.extract_timestamp(source_path)
        warnings = [timestamp.warning] if timestamp.warning else []

        self._logger.debug(
            "File validated successfully",
            file=name,
            size=source_size,
            timestamp_source=timestamp.source,
        )

        return FileValidationResult(
            file=name,
            size_match=True,
            source_size=source_size,
            dest_size=dest_size,
            timestamp=timestamp.timestamp,
            timestamp_source=timestamp.source,
            warnings=warnings,
        )

    async def extract_timestamp(self, file_path: Path) -> TimestampResult:
        """Best-effort capture timestamp. Never raises."""
        file_path = Path(file_path)

        try:
            captured = await self._reader.read_capture_time(file_path)
        except Exception as e:
            self._logger.warning(f"EXIF extraction failed for {file_path}: {e}")
        else:
            if captured is not None:
                return TimestampResult(
                    timestamp=captured,
                    source=TimestampSource.EXIF,
                    confidence=TimestampConfidence.HIGH,
                )

        try:
            stat = await aiofiles.os.stat(file_path)
        except OSError as e:
            self._logger.warning(f"Timestamp extraction failed for {file_path}: {e}")
            return TimestampResult(
                timestamp=None,
                source=None,
                confidence=TimestampConfidence.LOW,
                warning=EXTRACTION_FAILED_WARNING,
            )

        return TimestampResult(
            timestamp=_filesystem_time(stat),
            source=TimestampSource.FILESYSTEM,
            confidence=TimestampConfidence.MEDIUM,
            warning=FILESYSTEM_FALLBACK_WARNING,
        )

    def validate_batch(
        self,
        records: t.Sequence[FileTransferRecord],
        expected_count: int | None = None,
    ) -> BatchValidationResult:
        """Aggregate per-file transfer records into a batch report.

        Args:
            records: One record per file that reached the destination.
            expected_count: Number of files on the source. Defaults to
                ``len(records)``.
        """
        dest_count = len(records)
        source_count = dest_count if expected_count is None else expected_count

        size_passed = sum(1 for r in records if r.size_validated)
        exif_found = sum(1 for r in records if r.timestamp_source == TimestampSource.EXIF)
        fallbacks = sum(
            1 for r in records if r.timestamp_source == TimestampSource.FILESYSTEM
        )
        missing = dest_count - exif_found - fallbacks

        # A single non-EXIF timestamp breaks strict ordering for the batch
        chronological = exif_found == dest_count

        warnings: list[BatchWarning] = []

        if source_count != dest_count:
            warnings.append(
                BatchWarning(
                    severity=ValidationSeverity.ERROR,
                    message=(
                        f"File count mismatch: expected {source_count} files, "
                        f"found {dest_count}"
                    ),
                    suggested_action="Check the source card for missing files and retry transfer",
                )
            )

        if size_passed < dest_count:
            warnings.append(
                BatchWarning(
                    severity=ValidationSeverity.ERROR,
                    message=(
                        f"{dest_count - size_passed} file(s) failed size validation"
                    ),
                    suggested_action="Delete the affected copies and transfer them again",
                )
            )

        if fallbacks:
            warnings.append(
                BatchWarning(
                    severity=ValidationSeverity.WARNING,
                    message=(
                        f"Filesystem timestamp fallback used for {fallbacks} file(s) "
                        f"({exif_found} EXIF). Chronological ordering cannot be enforced."
                    ),
                    suggested_action=(
                        "Review files with filesystem timestamps and verify "
                        "camera clock settings"
                    ),
                )
            )

        if missing:
            warnings.append(
                BatchWarning(
                    severity=ValidationSeverity.WARNING,
                    message=f"No timestamp could be extracted for {missing} file(s)",
                    suggested_action="Correct the capture time of these files manually",
                )
            )

        return BatchValidationResult(
            file_count_match=source_count == dest_count,
            source_file_count=source_count,
            dest_file_count=dest_count,
            size_validation_passed=size_passed,
            exif_timestamps_found=exif_found,
            filesystem_fallbacks=fallbacks,
            timestamps_missing=missing,
            chronological_order_enforceable=chronological,
            warnings=warnings,
        )

    async def _size_of(self, path: Path, name: str) -> int:
        try:
            stat = await aiofiles.os.stat(path)
        except OSError as exc:
            raise FileAccessError(
                f"Unable to stat file for validation: {path}", file=name
            ) from exc
        return stat.st_size

"""Embedded capture-time readers used by the integrity validator."""

import asyncio
import typing as t
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

import exifread

EXIF_DATE_FORMAT: t.Final = "%Y:%m:%d %H:%M:%S"
DATE_TIME_ORIGINAL_TAG: t.Final = "EXIF DateTimeOriginal"


class BaseTimestampReader(ABC):
    """Reads the camera capture time embedded in a media file."""

    @abstractmethod
    async def read_capture_time(self, file_path: Path) -> datetime | None:
        """Return the embedded capture time, or None if the file has none.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the embedded value cannot be parsed.
        """


class NullTimestampReader(BaseTimestampReader):
    """Reader for setups without embedded metadata support."""

    async def read_capture_time(self, file_path: Path) -> datetime | None:
        return None


def parse_exif_date(value: str) -> datetime:
    """Parse an EXIF ``YYYY:MM:DD HH:MM:SS`` value as a naive local time."""
    return datetime.strptime(value.strip(), EXIF_DATE_FORMAT)


class ExifTimestampReader(BaseTimestampReader):
    """Reads EXIF DateTimeOriginal with exifread, off the event loop."""

    async def read_capture_time(self, file_path: Path) -> datetime | None:
        return await asyncio.to_thread(self._read_sync, file_path)

    def _read_sync(self, file_path: Path) -> datetime | None:
        with file_path.open("rb") as handle:
            tags = exifread.process_file(
                handle, details=False, stop_tag="DateTimeOriginal"
            )

        value = tags.get(DATE_TIME_ORIGINAL_TAG)
        if value is None:
            return None

        text = str(value).strip()
        if not text or text == "-":
            return None
        return parse_exif_date(text)

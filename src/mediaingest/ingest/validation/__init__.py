"""Integrity validation of transferred files."""

from .readers import (
    BaseTimestampReader,
    ExifTimestampReader,
    NullTimestampReader,
    parse_exif_date,
)
from .validator import (
    EXTRACTION_FAILED_WARNING,
    FILESYSTEM_FALLBACK_WARNING,
    IntegrityValidator,
)

__all__ = [
    "BaseTimestampReader",
    "ExifTimestampReader",
    "NullTimestampReader",
    "parse_exif_date",
    "IntegrityValidator",
    "FILESYSTEM_FALLBACK_WARNING",
    "EXTRACTION_FAILED_WARNING",
]

"""Domain models for copying media off a camera card."""

import enum
import typing as t
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .integrity import BatchValidationResult, FileTransferRecord

PHOTO_EXTENSIONS: t.Final = frozenset({".jpg", ".jpeg"})
VIDEO_EXTENSIONS: t.Final = frozenset({".mov", ".mp4"})


class MediaType(enum.StrEnum):
    PHOTO = "photo"
    VIDEO = "video"

    @classmethod
    def from_extension(cls, extension: str) -> "MediaType | None":
        """Classify a file extension, None for non-media files."""
        ext = extension.lower()
        if ext in PHOTO_EXTENSIONS:
            return cls.PHOTO
        if ext in VIDEO_EXTENSIONS:
            return cls.VIDEO
        return None


class TransferDestinations(BaseModel):
    """Where each media type is routed."""

    model_config = ConfigDict(frozen=True)

    photos: Path = Field(description="Destination for photos (AI cataloging)")
    raw_videos: Path = Field(description="Destination for raw video (archival)")

    def for_media(self, media_type: MediaType) -> Path:
        return self.photos if media_type == MediaType.PHOTO else self.raw_videos


class FileTransferTask(BaseModel):
    """One file to copy from the card."""

    model_config = ConfigDict(frozen=True)

    source: Path
    destination: Path
    size: int = Field(ge=0)
    media_type: MediaType
    enqueued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TransferFailure(BaseModel):
    """A file that could not be copied or failed validation."""

    model_config = ConfigDict(frozen=True)

    file: str
    source: str
    code: str
    user_message: str
    recovery_action: str
    attempts: int = Field(default=0, ge=0)


class TransferReport(BaseModel):
    """Result of transferring a set of tasks."""

    records: list[FileTransferRecord] = Field(default_factory=list)
    failures: list[TransferFailure] = Field(default_factory=list)
    card_removed: bool = False
    cancelled: bool = False
    validation: BatchValidationResult

    @property
    def succeeded(self) -> bool:
        return (
            not self.failures
            and not self.card_removed
            and not self.cancelled
            and not self.validation.has_errors()
        )

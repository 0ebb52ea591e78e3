"""Base event model."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class BaseEvent(BaseModel):
    """Immutable base for all events, stamped with a UTC time."""

    model_config = ConfigDict(frozen=True)

    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event happened (UTC)",
    )

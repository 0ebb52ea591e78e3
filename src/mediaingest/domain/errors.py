"""Domain models for error classification."""

import enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorCategory(enum.StrEnum):
    """How a failed filesystem/network operation should be treated."""

    TRANSIENT = "TRANSIENT"  # Expected to self-resolve, retry with 1s base
    FATAL = "FATAL"  # Operator must intervene, never retried
    NETWORK = "NETWORK"  # Connectivity issue, retry with 2s base


UNKNOWN_CODE = "UNKNOWN"


class ErrorClassification(BaseModel):
    """Retry guidance and user messaging derived from an error code."""

    model_config = ConfigDict(frozen=True)

    category: ErrorCategory
    code: str = Field(description="OS-style error code, UNKNOWN if absent")
    retriable: bool
    user_message: str = Field(description="Non-technical message for the user")
    recovery_action: str = Field(description="What the user can do about it")

"""Serialisable description of an exception."""

import traceback as tb

from pydantic import BaseModel, ConfigDict


class ErrorInfo(BaseModel):
    """Exception details safe to put on an event."""

    model_config = ConfigDict(frozen=True)

    exc_type: str
    message: str
    code: str | None = None
    traceback: str | None = None

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        code: str | None = None,
        include_traceback: bool = False,
    ) -> "ErrorInfo":
        exc_cls = type(exc)
        return cls(
            exc_type=f"{exc_cls.__module__}.{exc_cls.__qualname__}",
            message=str(exc),
            code=code,
            traceback=(
                "".join(tb.format_exception(exc_cls, exc, exc.__traceback__))
                if include_traceback
                else None
            ),
        )

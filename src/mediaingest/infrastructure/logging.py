"""Logging setup built on loguru.

Components call ``get_logger(__name__)`` and never configure sinks
themselves. The app (or a test) decides once how output looks via
``setup_logging`` / ``configure_logger``; ``get_logger`` falls back to
defaults if nobody did.
"""

import sys
import typing as t

from loguru import logger

from ..config.settings import Environment, LogLevel, Settings

if t.TYPE_CHECKING:
    import loguru

_DEVELOPMENT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
_PRODUCTION_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} - {message}"

_configured = False


def configure_logger(
    level: LogLevel = LogLevel.INFO,
    environment: Environment = Environment.PRODUCTION,
) -> None:
    """Replace loguru's sinks with one stderr sink for the environment."""
    global _configured

    logger.remove()
    logger.configure(extra={"name": "mediaingest"})
    development = environment == Environment.DEVELOPMENT
    logger.add(
        sys.stderr,
        level=str(level),
        format=_DEVELOPMENT_FORMAT if development else _PRODUCTION_FORMAT,
        colorize=development,
        backtrace=development,
        diagnose=development,
    )
    _configured = True


def setup_logging(settings: Settings) -> None:
    """Configure logging from application settings."""
    configure_logger(level=settings.log_level, environment=settings.environment)


def get_logger(name: str) -> "loguru.Logger":
    """Return a logger bound to ``name``, configuring defaults on first use."""
    if not _configured:
        configure_logger()
    return logger.bind(name=name)


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Drop all sinks and forget configuration (used by tests)."""
    global _configured

    logger.remove()
    _configured = False

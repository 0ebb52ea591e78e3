"""Retry strategies for filesystem operations."""

from .base import BaseRetryStrategy
from .strategy import RetryStrategy

__all__ = ["BaseRetryStrategy", "RetryStrategy"]

"""Small shared helpers."""

from .sanitize import sanitize_error_message

__all__ = ["sanitize_error_message"]

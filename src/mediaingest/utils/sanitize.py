"""Strip filesystem details from error text before showing it to users."""

import errno
import re
import typing as t

GENERIC_MESSAGE: t.Final = "An error occurred"
PATH_PLACEHOLDER: t.Final = "[path]"

_UNIX_PATH = re.compile(r"/\S+")
_WINDOWS_PATH = re.compile(r"[A-Z]:[/\\]\S+", re.IGNORECASE)
_RELATIVE_PATH = re.compile(r"\.{1,2}/\S+")


def sanitize_error_message(error: object) -> str:
    """Return a user-safe message for ``error``.

    Strings are treated as already-extracted messages; any other
    non-exception value yields a generic message.

    Examples:
        >>> sanitize_error_message(FileNotFoundError("ENOENT: no such file, open '/Volumes/CARD/A.JPG'"))
        'File not found'
        >>> sanitize_error_message(RuntimeError("copy of /tmp/a failed"))
        'File operation failed'
        >>> sanitize_error_message(42)
        'An error occurred'
    """
    if isinstance(error, BaseException):
        message = str(error)
    elif isinstance(error, str):
        message = error
    else:
        return GENERIC_MESSAGE

    message = _UNIX_PATH.sub(PATH_PLACEHOLDER, message)
    message = _WINDOWS_PATH.sub(PATH_PLACEHOLDER, message)
    message = _RELATIVE_PATH.sub(PATH_PLACEHOLDER, message)

    code = getattr(error, "errno", None)
    if code == errno.ENOENT or "ENOENT" in message:
        return "File not found"
    if code == errno.EACCES or "EACCES" in message:
        return "Permission denied"
    if PATH_PLACEHOLDER in message:
        return "File operation failed"
    return message

"""
Classification of version-control error output.

``svn`` and ``git`` report conditions such as "a password is needed" or
"there is nothing to commit" only through their stderr text. The texts
below cover the English and Chinese builds of both tools. They are not a
stable interface: localized or future releases may word them differently,
in which case :func:`classify_error` falls back to
:attr:`ErrorKind.UNKNOWN`.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class ErrorKind(Enum):
    """Semantic kind of a version-control failure."""

    AUTH_REQUIRED = "auth_required"
    NOTHING_TO_COMMIT = "nothing_to_commit"
    UNKNOWN = "unknown"


_MARKERS: Dict[ErrorKind, Tuple[str, ...]] = {
    ErrorKind.AUTH_REQUIRED: (
        "unable to connect",
        "authentication failed",
        "can't get password",
        "无法取得密码",
    ),
    ErrorKind.NOTHING_TO_COMMIT: (
        "nothing to commit",
        "无文件要提交",
    ),
}


def classify_error(text: str) -> ErrorKind:
    """Map tool output to an :class:`ErrorKind` by substring matching."""
    lowered = (text or "").lower()
    for kind, markers in _MARKERS.items():
        if any(marker in lowered for marker in markers):
            return kind
    return ErrorKind.UNKNOWN

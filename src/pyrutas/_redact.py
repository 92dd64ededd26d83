"""Helpers for readable debug logging.

Route payloads carry long serialized geometries. Values are shortened
before they reach a log line or an exception message.
"""

from __future__ import annotations

from typing import Any

_LOG_PREVIEW = 120


def preview_for_log(value: Any, *, max_string: int = _LOG_PREVIEW) -> str:
    """Short single-line rendering of *value* for log messages."""
    text = value if isinstance(value, str) else repr(value)
    text = " ".join(text.split())
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text

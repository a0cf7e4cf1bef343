"""Helpers for safe debug logging.

Requests carry caller-supplied credentials in headers (``Authorization``)
and user records fetched with elevated scopes may carry e-mail addresses
or phone numbers. Scrub them before anything reaches a DEBUG log.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "email",
        "password",
        "phone",
        "token",
    }
)


def redact_for_log(value: Any, *, max_string: int = 256) -> Any:
    """Return a copy of *value* with sensitive keys masked and long strings cut."""
    if isinstance(value, Mapping):
        return {
            str(key): REDACTED if str(key).lower() in _SENSITIVE_KEYS else redact_for_log(item, max_string=max_string)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string) for item in value]
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value

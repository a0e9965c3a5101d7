"""Masking of sensitive values before they reach a log line."""

from typing import Any

REDACTED = "[REDACTED]"

# Matched case-insensitively against dict keys at any depth
SENSITIVE_KEYS = frozenset({
    "client_secret",
    "clientsecret",
    "secret",
    "password",
    "security_code",
    "cvv",
    "cvv2",
    "card_number",
    "number",
    "access_token",
    "refresh_token",
    "token",
    "authorization",
})


def is_sensitive(key: Any) -> bool:
    """Return True if a mapping key names a sensitive field."""
    return isinstance(key, str) and key.lower() in SENSITIVE_KEYS


def redact(data: Any) -> Any:
    """
    Return a copy of data with every sensitive field replaced by REDACTED.

    Walks nested dicts, lists and tuples. Scalars are returned unchanged and
    the input is never mutated, so redacting twice yields the same result.
    """
    if isinstance(data, dict):
        return {
            key: REDACTED if is_sensitive(key) else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data

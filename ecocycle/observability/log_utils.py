"""
Helpers for putting request data into logs and error bodies.

Error details and log context can carry user input (phone numbers,
tokens echoed back from a bad header). Everything passes through
``mask_sensitive_data`` before it leaves the process.

Dependencies: logging (stdlib)
System role: Redaction and summarising of logged values
"""

from typing import Any

SENSITIVE_KEYS = ("password", "token", "secret", "apikey", "api_key", "authorization", "jwt")
REDACTED = "***REDACTED***"


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return any(marker in lowered for marker in SENSITIVE_KEYS)


def mask_sensitive_data(data: Any) -> Any:
    """Copy of ``data`` with credential-like keys redacted, walking nested dicts and lists."""
    if isinstance(data, dict):
        return {key: REDACTED if _is_sensitive(key) else mask_sensitive_data(val) for key, val in data.items()}
    if isinstance(data, (list, tuple)):
        return [mask_sensitive_data(item) for item in data]
    return data


def summarize(value: Any, max_length: int = 200) -> Any:
    """
    Shrink a value to something fit for a single log line.

    Scalars pass through, containers are reduced to their size and long
    strings are cut at ``max_length``.
    """
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, dict):
        return f"dict[{len(value)}]"
    text = str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}...(+{len(text) - max_length} chars)"
    return text


def log_context(**context: Any) -> dict[str, Any]:
    """Build an ``extra=`` mapping: redacted, then summarised value by value."""
    return {key: summarize(val) for key, val in mask_sensitive_data(context).items()}

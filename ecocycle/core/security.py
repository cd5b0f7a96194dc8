"""
Input sanitisation and upload validation helpers.

Dependencies: None (stdlib only)
System role: Text cleanup before persistence, upload pre-checks
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
}
_HTML_CHARS = re.compile(r"[&<>\"'/]")

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")


@dataclass(frozen=True)
class FileCheck:
    valid: bool
    error: str | None = None


def sanitize_input(value: str) -> str:
    """Trim and collapse internal whitespace runs to a single space."""
    return _WHITESPACE.sub(" ", value.strip())


def sanitize_html(value: str) -> str:
    """Escape characters that could open markup or attributes."""
    return _HTML_CHARS.sub(lambda m: _HTML_ESCAPES[m.group(0)], value)


def sanitize_url(url: str) -> str | None:
    """
    Accept only absolute http(s) URLs.

    Args:
        url: Candidate URL

    Returns:
        str | None: The URL unchanged when acceptable, None otherwise
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        logger.warning("Invalid URL format", extra={"url": url})
        return None

    if parsed.scheme not in ("http", "https"):
        logger.warning("Invalid URL protocol", extra={"url": url, "protocol": parsed.scheme})
        return None
    if not parsed.netloc:
        logger.warning("Invalid URL format", extra={"url": url})
        return None
    return url


def validate_file(
    size: int,
    content_type: str,
    max_size: int = DEFAULT_MAX_FILE_SIZE,
    allowed_types: tuple[str, ...] | list[str] = DEFAULT_ALLOWED_TYPES,
) -> FileCheck:
    """
    Check an upload's size and declared MIME type.

    Args:
        size: Payload size in bytes
        content_type: Declared MIME type
        max_size: Largest accepted size in bytes
        allowed_types: Accepted MIME types

    Returns:
        FileCheck: valid flag plus a user-facing error when invalid
    """
    if size > max_size:
        return FileCheck(False, f"File size exceeds {max_size / 1024 / 1024:.0f}MB limit")
    if content_type not in allowed_types:
        return FileCheck(
            False,
            f"File type {content_type} is not allowed. Allowed types: {', '.join(allowed_types)}",
        )
    return FileCheck(True)

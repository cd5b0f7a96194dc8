"""
Observability module.

Logging setup, correlation IDs, request middleware and redaction helpers.
"""

from ecocycle.observability.correlation import correlation_scope, get_correlation_id, set_correlation_id
from ecocycle.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "correlation_scope",
    "get_correlation_id",
    "set_correlation_id",
]

"""
Logging setup for the API process and scripts.

Records go to stdout as one line each. Whatever a call site passes via
``extra=`` is appended as ``key=value`` pairs so the ledger operations
(coins credited, reward id, booking status) stay greppable.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from ecocycle.observability.correlation import get_correlation_id

# Attributes every LogRecord carries; anything else came from ``extra=``
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "correlation_id",
    "color_message",
    "taskName",
}

NOISY_LOGGERS = ("httpx", "httpcore", "botocore", "boto3", "urllib3", "sqlalchemy.engine")


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


class ContextFormatter(logging.Formatter):
    """Plain formatter that appends ``extra`` fields after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler on the root logger.

    Safe to call more than once: previously installed handlers are removed
    first, so reloads under uvicorn do not duplicate lines.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        ContextFormatter(
            "%(asctime)s %(levelname)-8s %(name)s [%(correlation_id)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

"""Observability module for Furnishot.

Provides structured logging and per-request log context.
"""

from furnishot.observability.logging import (
    close_file_logging,
    configure_logging,
    get_logger,
    request_context,
)

__all__ = [
    "close_file_logging",
    "configure_logging",
    "get_logger",
    "request_context",
]

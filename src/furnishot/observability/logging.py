"""Structured logging configuration for Furnishot.

Console output goes to stderr through rich at a level chosen by ``-v``.
With ``--log-dir`` every event is also appended to ``{log_dir}/debug.jsonl``.

Engine calls run inside :func:`request_context`, so every event emitted while
composing one prompt carries the product and context preset it belongs to.
The composition engine itself is pure; logging is its only side effect.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003 - Used at runtime for path operations
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.typing import EventDict, Processor, WrappedLogger

# Module-level state
_configured = False
_file_handler: logging.FileHandler | None = None

# Added by the shared processors; rich renders level and time itself.
_CONSOLE_HIDDEN_KEYS = frozenset({"event", "level", "timestamp"})


def _render_console(_logger: WrappedLogger, _name: str, event_dict: EventDict) -> str:
    """Render ``event key=value ...`` with request context keys first."""
    event = str(event_dict.get("event", ""))
    pairs = [f"{k}={v!r}" for k, v in event_dict.items() if k not in _CONSOLE_HIDDEN_KEYS]
    return " ".join([event, *pairs])


class JSONLFileHandler(logging.FileHandler):
    """File handler writing one JSON object per event."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: dict[str, Any] = {
                "timestamp": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
            }
            if isinstance(record.msg, dict):
                fields = {
                    k: v for k, v in record.msg.items() if k not in ("level", "timestamp")
                }
                entry["event"] = fields.pop("event", "")
                entry.update(fields)
            else:
                entry["event"] = record.getMessage()

            if self.stream:
                self.stream.write(json.dumps(entry, default=str) + "\n")
                self.stream.flush()
        except Exception:
            self.handleError(record)


def configure_logging(
    verbosity: int = 0,
    log_to_file: bool = False,
    log_dir: Path | None = None,
) -> None:
    """Configure logging for Furnishot.

    Args:
        verbosity: 0=WARNING (default), 1=INFO, 2+=DEBUG
        log_to_file: If True, append JSONL events to ``log_dir/debug.jsonl``.
        log_dir: Directory for file logging. Required if log_to_file=True.

    Raises:
        ValueError: If log_to_file=True but log_dir is not provided.
    """
    global _configured, _file_handler

    if log_to_file and log_dir is None:
        raise ValueError("log_dir is required when log_to_file=True")

    close_file_logging()

    levels = {0: logging.WARNING, 1: logging.INFO}
    console_level = levels.get(verbosity, logging.DEBUG)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbosity >= 1,
        show_path=verbosity >= 2,
        markup=False,
        level=console_level,
    )
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _render_console,
            ],
            foreign_pre_chain=shared_processors,
        )
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_to_file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        _file_handler = JSONLFileHandler(str(log_dir / "debug.jsonl"), mode="a")
        _file_handler.setLevel(logging.DEBUG)
        handlers.append(_file_handler)

    root_level = logging.DEBUG if (verbosity > 0 or log_to_file) else logging.WARNING
    logging.basicConfig(level=root_level, format="%(message)s", handlers=handlers, force=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a structured logger, configuring logging on first use."""
    if not _configured:
        configure_logging()

    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return logger


@contextmanager
def request_context(**fields: Any) -> Iterator[None]:
    """Bind ``fields`` to every event logged inside the block.

    Nested blocks add to the outer fields and restore them on exit.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield


def close_file_logging() -> None:
    """Close the JSONL file handler, if any."""
    global _file_handler
    if _file_handler is not None:
        _file_handler.close()
        _file_handler = None

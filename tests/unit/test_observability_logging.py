"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import pytest

import furnishot.observability.logging as log_module
from furnishot.models import ContextPreset, ProductSpecification
from furnishot.observability import (
    close_file_logging,
    configure_logging,
    get_logger,
    request_context,
)
from furnishot.pipeline import EngineConfig, generate_prompt

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    close_file_logging()
    configure_logging(verbosity=0)


def _entries(log_dir: Path) -> list[dict[str, Any]]:
    close_file_logging()
    lines = (log_dir / "debug.jsonl").read_text().splitlines()
    return [json.loads(line) for line in lines]


def test_default_verbosity_is_warning() -> None:
    configure_logging(verbosity=0)
    assert logging.getLogger().level == logging.WARNING


@pytest.mark.parametrize("verbosity", [1, 2])
def test_verbose_opens_root_level(verbosity: int) -> None:
    """Root stays at DEBUG; the console handler filters."""
    configure_logging(verbosity=verbosity)
    assert logging.getLogger().level == logging.DEBUG


def test_get_logger_auto_configures() -> None:
    log_module._configured = False

    logger = get_logger("test")

    assert log_module._configured is True
    assert hasattr(logger, "warning")


def test_file_logging_requires_log_dir() -> None:
    with pytest.raises(ValueError, match="log_dir is required"):
        configure_logging(verbosity=0, log_to_file=True, log_dir=None)


def test_file_logging_creates_directory(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"
    configure_logging(verbosity=0, log_to_file=True, log_dir=log_dir)

    assert log_dir.exists()
    assert (log_dir / "debug.jsonl").exists()


def test_reconfiguration_without_file_drops_handler(tmp_path: Path) -> None:
    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path / "logs")
    configure_logging(verbosity=0)

    assert log_module._file_handler is None


def test_reconfiguration_closes_previous_handler(tmp_path: Path) -> None:
    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)
    first_handler = log_module._file_handler
    assert first_handler is not None

    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)

    assert first_handler.stream is None or first_handler.stream.closed
    assert log_module._file_handler is not None


def test_jsonl_entries_carry_event_fields(tmp_path: Path) -> None:
    configure_logging(verbosity=2, log_to_file=True, log_dir=tmp_path)

    get_logger("test.fields").info("prompt_composed", preset="hero", length=2800)

    entry = next(e for e in _entries(tmp_path) if e["event"] == "prompt_composed")
    assert entry["preset"] == "hero"
    assert entry["length"] == 2800
    assert entry["level"] == "INFO"
    assert entry["logger"] == "test.fields"


def test_request_context_binds_and_restores(tmp_path: Path) -> None:
    configure_logging(verbosity=2, log_to_file=True, log_dir=tmp_path)
    logger = get_logger("test.context")

    with request_context(product="Oak Desk"):
        with request_context(context="hero"):
            logger.warning("inner")
        logger.warning("outer")
    logger.warning("after")

    entries = {e["event"]: e for e in _entries(tmp_path)}
    assert entries["inner"]["product"] == "Oak Desk"
    assert entries["inner"]["context"] == "hero"
    assert entries["outer"]["product"] == "Oak Desk"
    assert "context" not in entries["outer"]
    assert "product" not in entries["after"]


def test_engine_events_carry_product_and_context(tmp_path: Path) -> None:
    configure_logging(verbosity=2, log_to_file=True, log_dir=tmp_path)
    spec = ProductSpecification(product_name="Oak Desk", product_type="desk")

    generate_prompt(spec, ContextPreset.HERO, config=EngineConfig(max_prompt_length=500))

    entry = next(e for e in _entries(tmp_path) if e["event"] == "prompt_invalid")
    assert entry["product"] == "Oak Desk"
    assert entry["context"] == "hero"
    assert entry["issues"]


def test_console_line_lists_fields_after_event() -> None:
    line = log_module._render_console(
        None, "info", {"event": "prompt_generated", "level": "info", "score": 90}
    )

    assert line == "prompt_generated score=90"

"""Structured logging configuration with structlog.

Environment variables:
- LOG_FORMAT: "json" for machine-readable game logs, "console" or unset for
  human-readable colored output.
- LOG_LEVEL: "DEBUG", "INFO" (default), "WARNING", "ERROR", or "CRITICAL".
  Ignored actions are only logged at DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
GAME_CONTEXT_KEY = "game"
SEED_PREFIX_LENGTH = 16

_VALID_LOG_FORMATS = {"json", "console", ""}
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _plain(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple | list):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def _serialize_enums(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Replace Enum instances, also inside tuples, lists and dicts, with their .value."""
    for key, value in event_dict.items():
        event_dict[key] = _plain(value)
    return event_dict


def bind_game_context(seed: str) -> None:
    """Tag every following log line with a short prefix of the game seed."""
    structlog.contextvars.bind_contextvars(**{GAME_CONTEXT_KEY: seed[:SEED_PREFIX_LENGTH]})


def _is_test() -> bool:
    return "pytest" in sys.modules


def _resolve_json_mode() -> bool:
    value = os.environ.get("LOG_FORMAT", "").lower()
    if value not in _VALID_LOG_FORMATS:
        msg = f"Invalid LOG_FORMAT={value!r}. Must be 'json', 'console', or unset."
        raise ValueError(msg)
    return value == "json"


def _resolve_log_level() -> int:
    """Resolve log level from LOG_LEVEL env var. Defaults to INFO."""
    value = os.environ.get("LOG_LEVEL", "INFO").upper()
    if value not in _VALID_LOG_LEVELS:
        msg = f"Invalid LOG_LEVEL={value!r}. Must be one of {', '.join(sorted(_VALID_LOG_LEVELS))}."
        raise ValueError(msg)
    return getattr(logging, value)


def _build_stdlib_formatter(*, json_mode: bool, colors: bool = False) -> logging.Formatter:
    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def setup_logging(
    log_dir: Path | str | None = None,
    level: int | None = None,
) -> Path | None:
    """Configure structlog with stdout and optional file output.

    Log level is resolved from the LOG_LEVEL env var (default: INFO).
    When log_dir is provided, each run writes a datetime-stamped log file
    inside that directory (not under pytest). Returns the log file path if
    created, None otherwise.
    """
    json_mode = _resolve_json_mode()

    if level is None:
        level = _resolve_log_level()

    # format_exc_info runs in ProcessorFormatter, not here, so file output
    # does not render tracebacks twice
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _serialize_enums,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(_build_stdlib_formatter(json_mode=json_mode, colors=sys.stdout.isatty()))
    root_logger.addHandler(stdout_handler)

    if log_dir is None or _is_test():
        return None

    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    file_path = dir_path / f"{datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)}.log"
    file_handler = logging.FileHandler(file_path)
    file_handler.setFormatter(_build_stdlib_formatter(json_mode=json_mode, colors=False))
    root_logger.addHandler(file_handler)
    return file_path


def rotate_log_file(log_dir: Path | str, name: str | None = None) -> Path | None:
    """Swap the current file handler for a new file in log_dir.

    Simulation runs call this once per game so each game gets its own file.
    The file is named `<name>.log`, or timestamped when no name is given.
    Not applied under pytest.
    """
    if _is_test():
        return None

    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]:
        handler.close()
        root_logger.removeHandler(handler)

    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    stem = name or datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)
    file_path = dir_path / f"{stem}.log"
    file_handler = logging.FileHandler(file_path)
    file_handler.setFormatter(_build_stdlib_formatter(json_mode=_resolve_json_mode(), colors=False))
    root_logger.addHandler(file_handler)
    return file_path

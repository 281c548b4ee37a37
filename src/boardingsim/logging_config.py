"""Structured logging configuration for boardingsim.

Configurable via environment variables:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
- LOG_FORMAT: Set format ('text' or 'json'). Default: text
- LOG_FILE: Also write logs to this file. Default: unset (stderr only)

Long runs log progress with an extra ``sim_time`` field, which both
formatters render next to the wall-clock timestamp:

    logger.info("Batch called", extra={"sim_time": scene.time})

Usage:
    from boardingsim.logging_config import configure_logging
    configure_logging()  # Call once at program startup
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, ClassVar

NAMESPACE = "boardingsim"

# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


class JSONFormatter(logging.Formatter):
    """JSON lines formatter.

    Every line carries timestamp, level, logger and message; ``sim_time`` is
    promoted to a top-level field and other extras go under ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = _extras(record)
        if "sim_time" in extras:
            log_data["sim_time"] = extras.pop("sim_time")

        if record.levelno >= logging.ERROR:
            log_data["source"] = f"{record.pathname}:{record.lineno}"
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if extras:
            log_data["extra"] = extras

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human readable formatter.

    Format: TIMESTAMP LEVEL [LOGGER] (t=SIM_TIME) MESSAGE
    """

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold red
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%H:%M:%S.%f")[:-3]
        level = f"{record.levelname:8s}"
        if self.use_colors:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"

        logger_name = record.name.removeprefix(f"{NAMESPACE}.")
        sim_time = getattr(record, "sim_time", None)
        clock = f" (t={sim_time:.2f}s)" if isinstance(sim_time, int | float) else ""

        text = f"{timestamp} {level} [{logger_name}]{clock} {record.getMessage()}"
        if record.exc_info:
            text += f"\n{self.formatException(record.exc_info)}"
        return text


def get_log_level() -> int:
    """Log level from the LOG_LEVEL environment variable (INFO if unset or invalid)."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    if level_name == "WARN":
        level_name = "WARNING"
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def get_log_format() -> str:
    """Log format from the LOG_FORMAT environment variable ('text' or 'json')."""
    format_name = os.environ.get("LOG_FORMAT", "text").lower()
    return format_name if format_name in ("text", "json") else "text"


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    use_colors: bool = True,
    log_file: str | None = None,
) -> None:
    """Configure the boardingsim logger namespace.

    Args:
        level: Log level; read from LOG_LEVEL if None.
        format_type: 'text' or 'json'; read from LOG_FORMAT if None.
        use_colors: Color text output when stderr is a TTY.
        log_file: Extra file to log into; read from LOG_FILE if None.
    """
    if level is None:
        level = get_log_level()
    if format_type is None:
        format_type = get_log_format()
    if log_file is None:
        log_file = os.environ.get("LOG_FILE") or None

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        if format_type == "json":
            handler.setFormatter(JSONFormatter())
        else:
            # Never write color codes into files
            colors = use_colors and not isinstance(handler, logging.FileHandler)
            handler.setFormatter(TextFormatter(use_colors=colors))

    root_logger = logging.getLogger(NAMESPACE)
    root_logger.setLevel(level)
    for old in root_logger.handlers:
        old.close()
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.propagate = False

    # The HTTP server's access log goes through the same handlers
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers.clear()
    for handler in handlers:
        uvicorn_access.addHandler(handler)
    uvicorn_access.setLevel(level)
    uvicorn_access.propagate = False

    root_logger.debug(
        "Logging configured: level=%s, format=%s, file=%s",
        logging.getLevelName(level),
        format_type,
        log_file,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the boardingsim namespace."""
    if not name.startswith(NAMESPACE):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)

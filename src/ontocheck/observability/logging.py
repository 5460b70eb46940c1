"""Logging configuration for validation runs.

Provides:
- JSON-formatted logs for log aggregation
- A human-readable console format for interactive use
- Run context (run id, dataset, ontology) attached to every record

Logs always go to stderr so they never mix with a report written to stdout.

Usage:
    from ontocheck.observability.logging import LogContext, configure_logging

    configure_logging(json_format=False, level="INFO")

    with LogContext(run_id="a1b2c3d4", dataset="animals.csv"):
        logger.info("Validating")  # Includes run_id and dataset
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Context variables for run correlation
run_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="")
dataset_var: contextvars.ContextVar[str] = contextvars.ContextVar("dataset", default="")
ontology_var: contextvars.ContextVar[str] = contextvars.ContextVar("ontology", default="")

_CONTEXT_VARS: dict[str, contextvars.ContextVar[str]] = {
    "run_id": run_id_var,
    "dataset": dataset_var,
    "ontology": ontology_var,
}

# Standard LogRecord attributes, not copied into JSON output
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


def current_context() -> dict[str, str]:
    """Get the non-empty run context values."""
    return {key: var.get() for key, var in _CONTEXT_VARS.items() if var.get()}


class JsonFormatter(logging.Formatter):
    """JSON log formatter with run context.

    Output format:
    {
        "timestamp": "2026-01-10T12:34:56.789Z",
        "level": "INFO",
        "logger": "ontocheck.validation.report",
        "message": "Validated 3 rows: ...",
        "module": "report",
        "function": "validate_dataset",
        "line": 42,
        "run_id": "a1b2c3d4"
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(current_context())

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                try:
                    json.dumps(value)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter.

    Output format:
    2026-01-10 12:34:56 | INFO | ontocheck.validation.report | Validated 3 rows | run=a1b2c3d4
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console output."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            level = f"{color}{level}{self.RESET}"

        message = record.getMessage()

        run_id = run_id_var.get()
        context = f" | run={run_id}" if run_id else ""

        result = f"{timestamp} | {level:8} | {record.name} | {message}{context}"

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


def configure_logging(
    json_format: bool = False,
    level: str = "INFO",
    use_colors: bool = True,
) -> None:
    """Configure application-wide logging.

    Args:
        json_format: Use JSON format instead of the console format
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_colors: Use ANSI colors in console format
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)

    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(use_colors=use_colors))

    root_logger.addHandler(handler)

    # rdflib is chatty at DEBUG while parsing
    logging.getLogger("rdflib").setLevel(logging.WARNING)


class LogContext:
    """Context manager for adding run context to log records.

    Usage:
        with LogContext(run_id="123", dataset="animals.csv"):
            logger.info("Validating")  # Includes run_id and dataset
    """

    def __init__(self, **kwargs: str) -> None:
        self.extra = kwargs
        self._tokens: dict[str, contextvars.Token[str]] = {}

    def __enter__(self) -> LogContext:
        for key, value in self.extra.items():
            var = _CONTEXT_VARS.get(key)
            if var is not None:
                self._tokens[key] = var.set(value)
        return self

    def __exit__(self, *args: Any) -> None:
        for key, token in self._tokens.items():
            _CONTEXT_VARS[key].reset(token)
        self._tokens.clear()

"""Observability for ontocheck: structured logging with run context."""

from ontocheck.observability.logging import (
    LogContext,
    configure_logging,
    run_id_var,
)

__all__ = [
    "configure_logging",
    "LogContext",
    "run_id_var",
]

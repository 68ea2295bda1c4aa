"""Public logging API for strong identifiers.

Wraps Python's ``logging`` module with structured context propagation and
JSON/plain formatters.
"""

from .config import configure_logging, get_logger
from .context import bind_context, clear_context, get_context, log_context

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_context",
    "get_logger",
    "log_context",
]

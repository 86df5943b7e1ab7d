"""
SCM context logger.

Provides logging interface for the SCM context with automatic [scm] prefix.
A missing client degrades to an empty record by design, so this context only
writes debug lines; nothing reaches the console at the default level.
"""

from loguru import logger

CONTEXT_PREFIX = "[scm]"


def _log_debug(message: str) -> None:
    """Log debug message with [scm] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")

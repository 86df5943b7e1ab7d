"""
Templating context logger.

Provides logging interface for the templating context with automatic
[template] prefix on debug lines. All templating modules should import from
this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_notice(message: str) -> None:
    """Log a console notice."""
    logger.info(message)


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")

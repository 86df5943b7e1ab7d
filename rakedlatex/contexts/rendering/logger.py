"""
Rendering context logger.

Provides logging interface for the rendering context. Notices, warnings and
errors go to the console (prefixed by the console format in
rakedlatex.utils.logger); debug lines carry an automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

import os
from pathlib import Path
from typing import List, Optional, TextIO

from dotenv import load_dotenv
from loguru import logger

from rakedlatex.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Optional[Path] = None,
    verbose: bool = False,
    console: Optional[TextIO] = None,
) -> Optional[Path]:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session (None for console only)
        verbose: Show debug lines on the console
        console: Stream for console lines (default stdout)

    Returns:
        Path to log file, or None
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        verbose=verbose,
        console=console,
        extra_provenance={
            "LaTeX compiler": os.getenv("LATEX_COMPILER", "latex"),
            "BibTeX compiler": os.getenv("BIBTEX_COMPILER", "bibtex"),
        },
    )


# Wrapper functions


def _log_notice(message: str) -> None:
    """Log a console notice."""
    logger.info(message)


def _log_warning(message: str) -> None:
    """Log a console warning."""
    logger.warning(message)


def _log_error(message: str) -> None:
    """Log a console error."""
    logger.error(message)


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_tool_warnings(executable: str, warnings: List[str]) -> None:
    """Report the warnings captured from one tool run."""
    _log_notice(f"Warnings from {executable}:")
    for message in warnings:
        _log_warning(message)


def log_pass_start(build_name: str, pass_number: int, working_dir: Path) -> None:
    """Log start of a typesetting pass."""
    _log_debug(f"{build_name}: pass {pass_number} in {working_dir}")

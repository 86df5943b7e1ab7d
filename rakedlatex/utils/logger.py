"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.

Console output mirrors the classic task-runner conventions:
    notices  -> plain lines
    warnings -> "  - message"
    errors   -> "  * message"
"""

import sys
from pathlib import Path
from typing import Optional, TextIO

from loguru import logger

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

# Console line prefixes by level name
CONSOLE_PREFIXES = {
    "WARNING": "  - ",
    "ERROR": "  * ",
    "CRITICAL": "  * ",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"


def console_format(record) -> str:
    """Loguru format callable: prefix console lines by level."""
    prefix = CONSOLE_PREFIXES.get(record["level"].name, "")
    return "<level>" + prefix + "{message}</level>\n{exception}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    verbose: bool = False,
    extra_provenance: dict = None,
    level_colors: dict = {},
    console: Optional[TextIO] = None,
) -> Optional[Path]:
    """
    Configure loguru for a context.

    Always sets up a console handler (stdout unless console is given). When
    log_dir is given, a DEBUG-level file handler is added as well and the execution provenance
    (script, command, working directory, Python version) is written to it.

    Args:
        context_name: Context identifier (e.g., "render", "template", "scm")
        log_dir: Directory for this logging session (None for console only)
        verbose: Show DEBUG messages on the console
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console: Stream for console lines (e.g., sys.stderr when stdout carries data)

    Returns:
        Path to log file, or None when logging to the console only

    Example:
        from rakedlatex.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs"),
            extra_provenance={"LaTeX compiler": "latex"}
        )
    """
    # Remove default logger
    logger.remove()

    # Apply level colors (defaults + overrides)
    colors = {**LEVEL_COLORS, **level_colors}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    # Colors only on a terminal; redirected output keeps plain prefixes
    logger.add(
        console or sys.stdout,
        format=console_format,
        level="DEBUG" if verbose else "INFO",
        colorize=None,
    )

    if log_dir is None:
        return None

    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # File handler captures everything (DEBUG level)
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """
    Log execution provenance at DEBUG level.

    Logs standard context (script, command, working directory, Python version)
    plus any additional context provided.

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.debug("=" * 80)
    logger.debug(f"Script: {sys.argv[0]}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)

"""
Shared utilities for rakedlatex.

Common functionality used across contexts:
- Logger setup and console formatting
- Text processing for generated LaTeX
"""

from rakedlatex.utils.logger import setup_logger
from rakedlatex.utils.text_processing import set_max_consecutive_blank_lines

__all__ = ["setup_logger", "set_max_consecutive_blank_lines"]

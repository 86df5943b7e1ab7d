"""
Text processing utilities for generated LaTeX.
"""

import re


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Conditional template blocks that render nothing leave their surrounding
    blank lines behind; this collapses those runs.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        # Any blank line at all
        pattern = r"\n[ \t]*\n([ \t]*\n)*"
    else:
        # Runs longer than max_consecutive
        pattern = r"\n([ \t]*\n){%d,}" % (max_consecutive + 1)

    replacement = "\n" * (max_consecutive + 1)
    return re.sub(pattern, replacement, content)


def strip_leading_blank_lines(content: str) -> str:
    """Remove blank lines at the start of content."""
    return re.sub(r"\A([ \t]*\n)+", "", content)

"""
Rendering Context

Responsibilities:
- Runs latex and bibtex on the base document
- Filters tool output down to actionable warnings
- Builds dvi/pdf output in a build directory with the minimal number of passes

Owns: External tool invocation, build directory management
Never: Modifies document content
"""

from rakedlatex.contexts.rendering.builder import (
    Builder,
    BuildResult,
    BuildState,
    DviBuilder,
    PdfBuilder,
)
from rakedlatex.contexts.rendering.runner import BibTeXRunner, LaTeXRunner, ToolRunner

__all__ = [
    "BibTeXRunner",
    "BuildResult",
    "BuildState",
    "Builder",
    "DviBuilder",
    "LaTeXRunner",
    "PdfBuilder",
    "ToolRunner",
]

"""
Default values for document configurations.

Used by:
- document_config.py (dataclass field defaults)
"""

from typing import Dict, List

# Plain article class without options
DEFAULT_DOCUMENT_CLASS: Dict[str, List[str]] = {"article": []}

DEFAULT_BASE_LATEX_FILE = "base.tex"


def get_default_document_class() -> Dict[str, List[str]]:
    """Return a fresh copy of the default document class mapping."""
    return {name: list(options) for name, options in DEFAULT_DOCUMENT_CLASS.items()}

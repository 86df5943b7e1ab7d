"""Custom exceptions for the templating context."""

from pathlib import Path
from typing import Optional


class TemplateRenderError(Exception):
    """
    Exception raised when base template rendering fails.

    Attributes:
        message: Error description
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_path:
            parts.append(f"\nTemplate: {template_path}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class InvalidConfigurationError(ValueError):
    """
    Exception raised when a project file doesn't match the configuration schema.

    Raised for unknown keys and for values of the wrong shape (e.g., a string
    where a list of content files is expected).
    """

    pass

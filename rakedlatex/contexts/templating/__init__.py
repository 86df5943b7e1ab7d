"""
Templating Context

Responsibilities:
- Holds the document configuration (class, packages, title page, content)
- Loads configurations from YAML project files
- Renders the base LaTeX document from the configuration

Owns: Document configuration, base document template
Never: Runs LaTeX or other external tools
"""

from rakedlatex.contexts.templating.base_template import BaseTemplate
from rakedlatex.contexts.templating.config_loader import load_configuration
from rakedlatex.contexts.templating.document_config import Author, Configuration
from rakedlatex.contexts.templating.exceptions import (
    InvalidConfigurationError,
    TemplateRenderError,
)

__all__ = [
    "Author",
    "BaseTemplate",
    "Configuration",
    "InvalidConfigurationError",
    "TemplateRenderError",
    "load_configuration",
]

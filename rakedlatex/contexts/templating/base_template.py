"""
Base Template

Renders the base LaTeX document (preamble, front matter, includes, and
bibliography) from a Configuration.

The template uses custom Jinja2 delimiters to avoid conflicts with LaTeX syntax:
- Variable: <<< var >>>
- Block: <%% block %%>
- Comment: <# comment #>
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from rakedlatex.contexts.templating.document_config import Configuration
from rakedlatex.contexts.templating.exceptions import TemplateRenderError
from rakedlatex.contexts.templating.logger import _log_debug, _log_notice
from rakedlatex.utils.text_processing import (
    set_max_consecutive_blank_lines,
    strip_leading_blank_lines,
)

load_dotenv()

# User text emitted as-is; kept out of the blank-line collapse
VERBATIM_KEYS = ["preamble_extras", "abstract", "acknowledgments"]

TEMPLATING_CONTEXT_PATH = Path(__file__).parent
BASE_TEMPLATE_PATH = Path(
    os.getenv("BASE_TEMPLATE_PATH", TEMPLATING_CONTEXT_PATH / "template" / "base.tex.jinja")
)


class BaseTemplate:
    """Generates the base LaTeX file for a configuration."""

    def __init__(self, template_path: Path = BASE_TEMPLATE_PATH):
        """
        Initialize the base template.

        Args:
            template_path: Jinja2 template file. Defaults to BASE_TEMPLATE_PATH
                          from environment, or the bundled base.tex.jinja
        """
        self.template_path = Path(template_path)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_path.parent)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Custom delimiters to avoid LaTeX brace conflicts
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Block tags sit on their own lines and must leave no trace
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self) -> Template:
        """Load the Jinja2 template."""
        return self.env.get_template(self.template_path.name)

    def generate(self, config: Configuration) -> str:
        """
        Generate the base LaTeX document.

        Args:
            config: Document configuration

        Returns:
            Complete LaTeX document string

        Raises:
            TemplateRenderError: If the template cannot be loaded or rendered
        """
        values = config.values()
        verbatim = {}
        for key in VERBATIM_KEYS:
            if values[key]:
                placeholder = f"@@verbatim:{key}@@"
                verbatim[placeholder] = values[key]
                values[key] = placeholder

        try:
            latex = self.get_template().render(**values)
        except TemplateError as e:
            raise TemplateRenderError(
                "Failed to render base document",
                template_path=self.template_path,
                original_error=e,
            ) from e

        # Omitted blocks leave runs of blank lines behind
        latex = strip_leading_blank_lines(latex)
        latex = set_max_consecutive_blank_lines(latex, max_consecutive=1)

        for placeholder, text in verbatim.items():
            latex = latex.replace(placeholder, text)
        return latex

    def create_file(self, config: Configuration) -> Path:
        """
        Write the base LaTeX document to config.base_path.

        Args:
            config: Document configuration

        Returns:
            Path to the written file
        """
        base_path = config.base_path
        latex = self.generate(config)

        _log_debug(f"Writing {len(latex)} characters to {base_path}")
        base_path.write_text(latex, encoding="utf-8")

        _log_notice(
            f"Creation completed for: {config.base_latex_file} in {config.source_directory}"
        )
        return base_path

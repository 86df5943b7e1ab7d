"""
Document Configuration

Settings for the base LaTeX document and its build. A configuration is created
once per run, either in code with a customization callback or from a YAML
project file (see config_loader.py), and then passed to the renderer and
builders:

    config = Configuration.build(customize)

    def customize(c):
        c.document_class = {"book": ["12pt", "a4paper", "twoside"]}
        c.add_package("fontenc", "T1").add_package("natbib")
        c.title = "Dev Null and Nothingness"
        c.author = Author("Jane Doe", "jane@example.org")
        c.table_of_contents = True
        c.main_content = ["introduction", "previous.research", "method", "data"]
        c.appendices = ["data.tables", "consent.forms"]
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from rakedlatex.contexts.scm.scm_stats import ScmRecord
from rakedlatex.contexts.templating.defaults import (
    DEFAULT_BASE_LATEX_FILE,
    get_default_document_class,
)


@dataclass
class Author:
    """Author shown on the title page."""

    name: str
    email: Optional[str] = None


@dataclass
class Configuration:
    """
    Configuration of the base document and its build.

    Attributes:
        document_class: Class name -> options, e.g. {"book": ["12pt", "a4paper"]}
        packages: Ordered (package name, options) pairs; order is preamble order
        title: Document title. No title page is generated when unset
        author: Author of the document (only shown together with a title)
        scm: Stats of the latest change, shown below the author
        preamble_extras: Raw LaTeX appended to the preamble
        abstract: Text of the abstract
        acknowledgments: Text of the acknowledgments
        table_of_contents: Include a table of contents
        list_of_figures: Include a list of figures
        list_of_tables: Include a list of tables
        main_content: Basenames (without .tex) included in the main matter
        appendices: Basenames (without .tex) included as appendices
        bibliography: Bib file basename (without .bib) -> citation style
        source_directory: Where the base file is written and sources live
        build_directory: Where builds run (None builds in the source directory)
        base_latex_file: File name of the generated base document
    """

    document_class: Dict[str, List[str]] = field(default_factory=get_default_document_class)
    packages: List[Tuple[str, List[str]]] = field(default_factory=list)
    title: Optional[str] = None
    author: Optional[Author] = None
    scm: Optional[ScmRecord] = None
    preamble_extras: Optional[str] = None
    abstract: Optional[str] = None
    acknowledgments: Optional[str] = None
    table_of_contents: bool = False
    list_of_figures: bool = False
    list_of_tables: bool = False
    main_content: List[str] = field(default_factory=list)
    appendices: List[str] = field(default_factory=list)
    bibliography: Dict[str, str] = field(default_factory=dict)
    source_directory: Path = field(default_factory=Path.cwd)
    build_directory: Optional[Path] = field(default_factory=Path.cwd)
    base_latex_file: str = DEFAULT_BASE_LATEX_FILE

    @classmethod
    def build(cls, customize: Optional[Callable[["Configuration"], None]] = None) -> "Configuration":
        """
        Create a configuration with defaults, then let the caller customize it.

        Args:
            customize: Callback receiving the default configuration to modify

        Returns:
            The customized configuration
        """
        config = cls()
        if customize is not None:
            customize(config)
        return config

    def add_package(self, name: str, *options: str) -> "Configuration":
        """Append a package (with optional options) to the preamble."""
        self.packages.append((name, list(options)))
        return self

    def collect_source_files(self) -> List[str]:
        """
        List all source files with extension: main content and appendices as
        .tex files followed by bibliographies as .bib files.
        """
        tex_files = [f"{name}.tex" for name in self.main_content + self.appendices]
        bib_files = [f"{name}.bib" for name in self.bibliography]
        return tex_files + bib_files

    @property
    def base_bibtex_file(self) -> Optional[str]:
        """The aux file bibtex reads for the base document."""
        if not self.base_latex_file:
            return None
        return re.sub(r"\.tex$", ".aux", self.base_latex_file)

    @property
    def base_path(self) -> Path:
        """Path of the generated base document."""
        return Path(self.source_directory) / self.base_latex_file

    def values(self) -> Dict[str, Any]:
        """Variable bindings for the base document template."""
        return {
            "document_class": list(self.document_class.items()),
            "packages": list(self.packages),
            "title": self.title,
            "author": self.author,
            "scm": self.scm,
            "preamble_extras": self.preamble_extras,
            "abstract": self.abstract,
            "acknowledgments": self.acknowledgments,
            "table_of_contents": self.table_of_contents,
            "list_of_figures": self.list_of_figures,
            "list_of_tables": self.list_of_tables,
            "main_content": list(self.main_content),
            "appendices": list(self.appendices),
            "bibliography": list(self.bibliography.items()),
        }

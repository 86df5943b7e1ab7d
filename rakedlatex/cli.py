"""
rakedlatex CLI

Generates the base LaTeX document of a project and builds it.

Commands:
    generate - Print the base document to stdout
    create   - Write the base document to the source directory
    latex    - Run latex once on the base document
    bibtex   - Run bibtex once on the base document's aux file
    dvi      - Build a dvi file in the build directory
    pdf      - Build a pdf file in the build directory

Examples:\n

    rakedlatex generate                              # Uses ./rakedlatex.yaml

    rakedlatex create -c thesis/rakedlatex.yaml      # Explicit project file

    rakedlatex dvi --set title="Final Draft"         # Override a setting

    rakedlatex pdf --verbose --log-dir outs/logs     # Debug output and log file
"""

import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from rakedlatex.contexts.rendering.builder import Builder, DviBuilder, PdfBuilder
from rakedlatex.contexts.rendering.logger import setup_rendering_logger
from rakedlatex.contexts.rendering.runner import BibTeXRunner, LaTeXRunner
from rakedlatex.contexts.scm.exceptions import ScmParseError
from rakedlatex.contexts.templating.base_template import BaseTemplate
from rakedlatex.contexts.templating.config_loader import load_configuration
from rakedlatex.contexts.templating.document_config import Configuration
from rakedlatex.contexts.templating.exceptions import (
    InvalidConfigurationError,
    TemplateRenderError,
)

load_dotenv()
RAKEDLATEX_CONFIG = Path(os.getenv("RAKEDLATEX_CONFIG", "rakedlatex.yaml"))
LOGS_PATH = os.getenv("LOGS_PATH")

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="YAML project file (default: RAKEDLATEX_CONFIG or ./rakedlatex.yaml)",
    ),
]
OverridesOption = Annotated[
    Optional[List[str]],
    typer.Option(
        "--set",
        "-s",
        help="Override a project setting, e.g. --set title=Draft (repeatable)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug output"),
]
LogDirOption = Annotated[
    Optional[Path],
    typer.Option("--log-dir", help="Also write a detailed log file to this directory"),
]


app = typer.Typer(
    help="Generate templated LaTeX documents and build them with latex/bibtex",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _prepare(
    config_path: Path,
    overrides: Optional[List[str]],
    verbose: bool,
    log_dir: Optional[Path],
    console: Optional[TextIO] = None,
) -> Configuration:
    """Set up logging and load the project configuration."""
    if log_dir is None and LOGS_PATH:
        log_dir = Path(LOGS_PATH)
    setup_rendering_logger(log_dir, verbose=verbose, console=console)

    try:
        return load_configuration(config_path, overrides)
    except (FileNotFoundError, InvalidConfigurationError, ScmParseError) as e:
        _fail(str(e))


def _generate(config: Configuration) -> str:
    try:
        return BaseTemplate().generate(config)
    except TemplateRenderError as e:
        _fail(str(e))


@app.command("generate")
def generate_command(
    config_path: ConfigOption = RAKEDLATEX_CONFIG,
    overrides: OverridesOption = None,
    verbose: VerboseOption = False,
    log_dir: LogDirOption = None,
):
    """
    Print the base LaTeX document to stdout.

    Examples:\n

        $ rakedlatex generate > preview.tex

    Log lines go to stderr so stdout carries only the document.
    """
    config = _prepare(config_path, overrides, verbose, log_dir, console=sys.stderr)
    typer.echo(_generate(config), nl=False)


@app.command("create")
def create_command(
    config_path: ConfigOption = RAKEDLATEX_CONFIG,
    overrides: OverridesOption = None,
    verbose: VerboseOption = False,
    log_dir: LogDirOption = None,
):
    """
    Write the base LaTeX document to the source directory.

    Examples:\n

        $ rakedlatex create

        $ rakedlatex create --set base_latex_file=thesis.tex
    """
    config = _prepare(config_path, overrides, verbose, log_dir)
    try:
        BaseTemplate().create_file(config)
    except TemplateRenderError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Could not write {config.base_path}: {e}")


@app.command("latex")
def latex_command(
    config_path: ConfigOption = RAKEDLATEX_CONFIG,
    overrides: OverridesOption = None,
    verbose: VerboseOption = False,
    log_dir: LogDirOption = None,
):
    """
    Run latex once on the base document in the source directory.
    """
    config = _prepare(config_path, overrides, verbose, log_dir)
    runner = LaTeXRunner(config.base_latex_file, working_dir=config.source_directory)
    raise typer.Exit(code=0 if runner.run() else 1)


@app.command("bibtex")
def bibtex_command(
    config_path: ConfigOption = RAKEDLATEX_CONFIG,
    overrides: OverridesOption = None,
    verbose: VerboseOption = False,
    log_dir: LogDirOption = None,
):
    """
    Run bibtex once on the base document's aux file in the source directory.
    """
    config = _prepare(config_path, overrides, verbose, log_dir)
    if config.base_bibtex_file is None:
        _fail("No base LaTeX file configured")
    runner = BibTeXRunner(config.base_bibtex_file, working_dir=config.source_directory)
    raise typer.Exit(code=0 if runner.run() else 1)


def _build(builder_class: type, config: Configuration) -> None:
    builder: Builder = builder_class(
        config.source_directory,
        config.build_directory,
        config.collect_source_files(),
    )
    result = builder.build(config.base_latex_file)
    raise typer.Exit(code=0 if result.success else 1)


@app.command("dvi")
def dvi_command(
    config_path: ConfigOption = RAKEDLATEX_CONFIG,
    overrides: OverridesOption = None,
    verbose: VerboseOption = False,
    log_dir: LogDirOption = None,
):
    """
    Build a dvi file, running latex twice only when cross-references need it.

    Examples:\n

        $ rakedlatex create && rakedlatex dvi
    """
    config = _prepare(config_path, overrides, verbose, log_dir)
    _build(DviBuilder, config)


@app.command("pdf")
def pdf_command(
    config_path: ConfigOption = RAKEDLATEX_CONFIG,
    overrides: OverridesOption = None,
    verbose: VerboseOption = False,
    log_dir: LogDirOption = None,
):
    """
    Build a pdf file with pdflatex, running it twice only when cross-references need it.
    """
    config = _prepare(config_path, overrides, verbose, log_dir)
    _build(PdfBuilder, config)


if __name__ == "__main__":
    app()

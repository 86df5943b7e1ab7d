"""Unit tests for the latex/bibtex runners (external tools faked)."""

import subprocess

import pytest

from rakedlatex.contexts.rendering import runner as runner_module
from rakedlatex.contexts.rendering.runner import BibTeXRunner, LaTeXRunner

LATEX_OUTPUT = """\
This is pdfTeX, Version 3.141592653-2.6-1.40.25 (TeX Live 2023) (preloaded format=latex)
(./base.tex
LaTeX2e <2022-11-01> patch level 1
No file base.aux.
No file base.toc.
Overfull \\hbox (12.34pt too wide) in paragraph at lines 10--12
Underfull \\vbox (badness 10000) has occurred while \\output is active
 [1] (./base.aux) )
Output written on base.dvi (1 page, 812 bytes).
Transcript written on base.log.
"""

BIBTEX_OUTPUT = """\
This is BibTeX, Version 0.99d (TeX Live 2023)
The top-level auxiliary file: base.aux
I found no \\citation commands---while reading file base.aux
I couldn't open database file citations.bib
(There were 2 error messages)
"""


@pytest.fixture
def base_file(tmp_path):
    path = tmp_path / "base.tex"
    path.write_text("\\documentclass{book}\n")
    return path


@pytest.mark.unit
def test_latex_warning_filter():
    assert LaTeXRunner.filter_warnings(LATEX_OUTPUT) == [
        "No file base.aux.",
        "No file base.toc.",
        "Overfull \\hbox (12.34pt too wide) in paragraph at lines 10--12",
        "Underfull \\vbox (badness 10000) has occurred while \\output is active",
    ]


@pytest.mark.unit
def test_bibtex_warning_filter():
    assert BibTeXRunner.filter_warnings(BIBTEX_OUTPUT) == [
        "I found no \\citation commands---while reading file base.aux",
        "I couldn't open database file citations.bib",
    ]


@pytest.mark.unit
def test_warning_pattern_only_matches_line_start():
    output = "  Overfull \\hbox indented\nsee No file base.aux.\n"

    assert LaTeXRunner.filter_warnings(output) == []


@pytest.mark.unit
def test_run_invokes_tool_once_in_working_dir(fake_tool, base_file, tmp_path):
    tool = fake_tool(LATEX_OUTPUT)

    runner = LaTeXRunner("base.tex", silent=True, executable="latex", working_dir=tmp_path)

    assert runner.run() is True
    assert len(tool.calls) == 1
    cmd, kwargs = tool.calls[0]
    assert cmd == ["latex", "base.tex"]
    assert kwargs["cwd"] == tmp_path
    assert kwargs["stderr"] == subprocess.STDOUT
    assert len(runner.warnings) == 4
    assert runner.output == LATEX_OUTPUT


@pytest.mark.unit
def test_options_precede_input_file(fake_tool, base_file, tmp_path):
    tool = fake_tool("")

    LaTeXRunner(
        "base.tex",
        executable="latex",
        working_dir=tmp_path,
        options=["-interaction=nonstopmode"],
    ).run()

    assert tool.calls[0][0] == ["latex", "-interaction=nonstopmode", "base.tex"]


@pytest.mark.unit
def test_run_prints_warnings(fake_tool, base_file, tmp_path, console_output):
    fake_tool(BIBTEX_OUTPUT)

    BibTeXRunner(base_file, executable="bibtex").run()

    assert "".join(console_output) == (
        "Warnings from bibtex:\n"
        "  - I found no \\citation commands---while reading file base.aux\n"
        "  - I couldn't open database file citations.bib\n"
    )


@pytest.mark.unit
def test_silent_run_prints_nothing(fake_tool, base_file, console_output):
    fake_tool(LATEX_OUTPUT)

    runner = LaTeXRunner(base_file, silent=True, executable="latex")
    runner.run()

    assert console_output == []

    # Feedback can be requested later
    runner.silent = False
    runner.feedback()
    assert "".join(console_output).startswith("Warnings from latex:\n  - No file base.aux.\n")


@pytest.mark.unit
def test_clean_run_prints_nothing(fake_tool, base_file, console_output):
    fake_tool("Output written on base.dvi (1 page, 812 bytes).\n")

    runner = LaTeXRunner(base_file, executable="latex")
    runner.run()

    assert runner.warnings == []
    assert console_output == []


@pytest.mark.unit
def test_missing_input_file_aborts_without_running(fake_tool, tmp_path, console_output):
    tool = fake_tool(LATEX_OUTPUT)

    runner = LaTeXRunner("base.tex", executable="latex", working_dir=tmp_path)

    assert runner.run() is False
    assert tool.calls == []
    assert runner.warnings == []
    assert "".join(console_output) == (
        "  * Running of latex aborted. Input file: base.tex not found\n"
    )


@pytest.mark.unit
def test_missing_executable_aborts_without_running(
    monkeypatch, base_file, console_output
):
    def fail(*args, **kwargs):
        raise AssertionError("No subprocess may be started")

    monkeypatch.setattr(runner_module.shutil, "which", lambda name: None)
    monkeypatch.setattr(runner_module.subprocess, "run", fail)

    runner = LaTeXRunner(base_file, executable="latex")

    assert runner.run() is False
    assert "".join(console_output) == (
        "  * Running of latex aborted. Executable latex not found\n"
    )


@pytest.mark.unit
def test_warnings_are_rebuilt_on_every_run(fake_tool, base_file):
    fake_tool(LATEX_OUTPUT, "")

    runner = LaTeXRunner(base_file, silent=True, executable="latex")
    runner.run()
    assert runner.warnings

    runner.run()
    assert runner.warnings == []


@pytest.mark.unit
def test_default_executables():
    assert LaTeXRunner("base.tex").executable == runner_module.LATEX_COMPILER
    assert BibTeXRunner("base.aux").executable == runner_module.BIBTEX_COMPILER

"""
Tool Runners

Runs latex and related utilities on a single input file. Reports missing input
files and executables, and filters the tools' console output down to the lines
worth a warning.

Known limitation: there is no timeout. A tool waiting for interactive input
(e.g., latex stopping on an error) blocks until it is killed.
"""

import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from rakedlatex.contexts.rendering.logger import _log_debug, _log_error, log_tool_warnings

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "latex")
PDFLATEX_COMPILER = os.getenv("PDFLATEX_COMPILER", "pdflatex")
BIBTEX_COMPILER = os.getenv("BIBTEX_COMPILER", "bibtex")


class ToolRunner:
    """
    Base for running an external tool on an input file.

    Subclasses set:
    - default_executable: Binary used when none is given
    - warning_pattern: Regex matched against the start of each output line

    Attributes:
        input_file: File passed to the tool (relative to working_dir if set)
        silent: Suppress warning output after a run
        executable: The tool's binary
        working_dir: Directory the tool runs in (None for the current directory)
        options: Extra arguments placed before the input file
        warnings: Output lines matching warning_pattern from the last run
        output: Combined stdout/stderr of the last run
    """

    default_executable: str
    warning_pattern: str

    def __init__(
        self,
        input_file: Path,
        silent: bool = False,
        executable: Optional[str] = None,
        working_dir: Optional[Path] = None,
        options: Sequence[str] = (),
    ):
        self.input_file = Path(input_file)
        self.silent = silent
        self.executable = executable or self.default_executable
        self.working_dir = Path(working_dir) if working_dir is not None else None
        self.options = list(options)
        self.warnings: List[str] = []
        self.output = ""

    @property
    def input_path(self) -> Path:
        """Input file as seen from the current process."""
        if self.working_dir is None or self.input_file.is_absolute():
            return self.input_file
        return self.working_dir / self.input_file

    @classmethod
    def filter_warnings(cls, output: str) -> List[str]:
        """Return output lines that match the tool's warning pattern, in order."""
        pattern = re.compile(cls.warning_pattern)
        return [line for line in output.splitlines() if pattern.match(line)]

    def run(self) -> bool:
        """
        Run the tool once and collect its warnings.

        Returns:
            True if the tool was invoked, False if the run was aborted because
            the input file or the executable is missing
        """
        self.warnings = []
        self.output = ""

        if not self.input_path.exists():
            _log_error(
                f"Running of {self.executable} aborted. Input file: {self.input_file} not found"
            )
            return False

        if shutil.which(self.executable) is None:
            _log_error(
                f"Running of {self.executable} aborted. Executable {self.executable} not found"
            )
            return False

        cmd = [self.executable, *self.options, str(self.input_file)]
        _log_debug(f"Running: {' '.join(cmd)} (in {self.working_dir or Path.cwd()})")

        result = subprocess.run(
            cmd,
            cwd=self.working_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",  # Tool output may contain latin-1 font names
        )

        self.output = result.stdout
        self.warnings = self.filter_warnings(self.output)
        _log_debug(
            f"{self.executable} exited with {result.returncode}, {len(self.warnings)} warnings"
        )

        self.feedback()
        return True

    def feedback(self) -> None:
        """Print warnings from the last run unless silent."""
        if self.warnings and not self.silent:
            log_tool_warnings(self.executable, self.warnings)


class LaTeXRunner(ToolRunner):
    """Runs latex (or a compatible engine such as pdflatex)."""

    default_executable = LATEX_COMPILER
    warning_pattern = r"^(Overfull|Underfull|No file)"


class BibTeXRunner(ToolRunner):
    """Runs bibtex on an aux file."""

    default_executable = BIBTEX_COMPILER
    warning_pattern = r"^I (found no|couldn't open)"

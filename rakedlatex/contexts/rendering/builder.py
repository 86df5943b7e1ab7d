"""
Builders

Builds LaTeX (and BibTeX) sources into binary formats. Table of contents,
references and citations only settle after latex has read the auxiliary files
of a previous run, so the builder runs latex a second time when the first pass
reports a missing .aux or .toc file.

Passes are capped at two; deeply nested cross-references that would need a
third pass are not detected.

Build states:
    NOT_STARTED -> DIRECTORY_PREPARED -> SOURCES_VERIFIED -> FIRST_PASS
        -> (SECOND_PASS) -> REPORTED
    A missing source file ends the build in ABORTED.
"""

import re
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Type

from rakedlatex.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_notice,
    log_pass_start,
)
from rakedlatex.contexts.rendering.runner import (
    LATEX_COMPILER,
    PDFLATEX_COMPILER,
    LaTeXRunner,
    ToolRunner,
)

# Extensions copied from the source directory into the build directory
SOURCE_FILE_EXTENSIONS = ["tex", "bib", "sty"]

# A first pass that could not read these needs a second pass
MISSING_AUX_PATTERN = re.compile(r"No file .+\.(aux|toc)")


class BuildState(Enum):
    """Progress of a single build."""

    NOT_STARTED = "not_started"
    DIRECTORY_PREPARED = "directory_prepared"
    SOURCES_VERIFIED = "sources_verified"
    FIRST_PASS = "first_pass"
    SECOND_PASS = "second_pass"
    ABORTED = "aborted"
    REPORTED = "reported"


@dataclass
class BuildResult:
    """
    Result of a build.

    Attributes:
        success: Whether all declared source files were present
        state: Final build state (ABORTED or REPORTED)
        working_dir: Directory the build ran in
        passes: Number of typesetting passes started
        warnings: Warnings from the final pass
    """

    success: bool
    state: BuildState
    working_dir: Path
    passes: int = 0
    warnings: List[str] = field(default_factory=list)


class Builder:
    """
    Base builder.

    Subclasses set:
    - build_name: Name used in console messages (e.g., "dvi")
    - runner_class: ToolRunner used for typesetting passes
    - default_executable: Typesetting binary

    Attributes:
        source_directory: Where the files to be built are located
        build_directory: Where the build runs; created if missing. None builds
                         in the source directory
        source_files: Files that must be present before any pass runs
        options: Extra arguments for the typesetting tool (e.g., -interaction=nonstopmode)
    """

    build_name: str = "base"
    runner_class: Type[ToolRunner] = LaTeXRunner
    default_executable: str = LATEX_COMPILER

    def __init__(
        self,
        source_directory: Path,
        build_directory: Optional[Path] = None,
        source_files: Sequence[str] = (),
        executable: Optional[str] = None,
        options: Sequence[str] = (),
    ):
        self.source_directory = Path(source_directory)
        self.build_directory = Path(build_directory) if build_directory is not None else None
        self.source_files = list(source_files)
        self.executable = executable or self.default_executable
        self.options = list(options)
        self.state = BuildState.NOT_STARTED

    def prepare_directory(self) -> Path:
        """
        Create the build directory and copy sources into it.

        Returns:
            Directory the build runs in
        """
        if self.build_directory is None:
            working_dir = self.source_directory
        else:
            self.build_directory.mkdir(parents=True, exist_ok=True)
            self.copy_source_files()
            working_dir = self.build_directory

        self.state = BuildState.DIRECTORY_PREPARED
        return working_dir

    def copy_source_files(self) -> List[Path]:
        """
        Copy .tex, .bib and .sty files from the source to the build directory.

        Returns:
            Paths of the copies (empty when both directories are the same)
        """
        if self.build_directory.resolve() == self.source_directory.resolve():
            _log_debug("Build directory is the source directory, nothing to copy")
            return []

        copied = []
        for extension in SOURCE_FILE_EXTENSIONS:
            for source_file in sorted(self.source_directory.glob(f"*.{extension}")):
                copied.append(Path(shutil.copy2(source_file, self.build_directory)))

        _log_debug(f"Copied {len(copied)} source files to {self.build_directory}")
        return copied

    def source_files_present(self, working_dir: Path) -> bool:
        """Check that every declared source file exists in working_dir."""
        for source_file in self.source_files:
            if not (working_dir / source_file).exists():
                _log_error(
                    f"Build of {self.build_name} aborted. Source file: {source_file} not found"
                )
                return False
        return True

    def run_pass(self, base_latex_file: str, working_dir: Path, pass_number: int) -> ToolRunner:
        """Run one silent typesetting pass."""
        log_pass_start(self.build_name, pass_number, working_dir)
        runner = self.runner_class(
            base_latex_file,
            silent=True,
            executable=self.executable,
            working_dir=working_dir,
            options=self.options,
        )
        runner.run()
        return runner

    def build(self, base_latex_file: str) -> BuildResult:
        """
        Build the base LaTeX file.

        Args:
            base_latex_file: File name of the base document in the working directory

        Returns:
            BuildResult; success is False only if a declared source file is missing
        """
        working_dir = self.prepare_directory()

        if not self.source_files_present(working_dir):
            self.state = BuildState.ABORTED
            return BuildResult(success=False, state=self.state, working_dir=working_dir)
        self.state = BuildState.SOURCES_VERIFIED

        self.state = BuildState.FIRST_PASS
        runner = self.run_pass(base_latex_file, working_dir, pass_number=1)
        passes = 1

        if MISSING_AUX_PATTERN.search("\n".join(runner.warnings)):
            self.state = BuildState.SECOND_PASS
            runner = self.run_pass(base_latex_file, working_dir, pass_number=2)
            passes = 2

        runner.silent = False
        runner.feedback()

        self.state = BuildState.REPORTED
        _log_notice(
            f"Build of {self.build_name} completed for: {base_latex_file} in {working_dir}"
        )
        return BuildResult(
            success=True,
            state=self.state,
            working_dir=working_dir,
            passes=passes,
            warnings=list(runner.warnings),
        )


class DviBuilder(Builder):
    """Builds a dvi file with latex."""

    build_name = "dvi"
    default_executable = LATEX_COMPILER


class PdfBuilder(Builder):
    """Builds a pdf file with pdflatex."""

    build_name = "pdf"
    default_executable = PDFLATEX_COMPILER

"""
SCM Stats

Extracts stats about the latest change from source-control clients. The stats
can be shown on the title page of the generated document, which is especially
helpful when circulating draft versions.

Supported clients:
    Mercurial  - `hg tip`   ("changeset: X", "date: Y")
    Subversion - `svn info` ("Revision: N", "Last Changed Date: Y")
"""

import re
import shutil
import subprocess
from abc import ABC
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

from rakedlatex.contexts.scm.exceptions import ScmParseError
from rakedlatex.contexts.scm.logger import _log_debug


@dataclass(frozen=True)
class ScmRecord:
    """
    Stats of the latest change in a checkout.

    Attributes:
        name: Human readable client name (e.g., "Mercurial")
        revision: Revision or changeset identifier (None if unavailable)
        date: Date of the change as printed by the client (None if unavailable)
    """

    name: Optional[str] = None
    revision: Optional[str] = None
    date: Optional[str] = None


class ScmClient(ABC):
    """
    Abstract base for source-control clients.

    Subclasses must set:
    - name: Human readable client name
    - executable: Binary looked up on PATH
    - command: Arguments (after the executable) that show the latest change
    - revision_pattern / date_pattern: Multiline regexes with one capture group
    """

    name: str
    executable: str
    command: List[str]
    revision_pattern: str
    date_pattern: str

    def __init__(self, working_dir: Optional[Path] = None):
        self.working_dir = working_dir
        self.executable_path = shutil.which(self.executable)

    @property
    def available(self) -> bool:
        """Whether the client executable was found on PATH."""
        return self.executable_path is not None

    def _extract(self, field_name: str, pattern: str, raw_output: str) -> str:
        match = re.search(pattern, raw_output, re.MULTILINE)
        if match is None:
            raise ScmParseError(
                f"Could not find {field_name} in output of {self.executable}",
                client_name=self.name,
                field_name=field_name,
                raw_output=raw_output,
            )
        return match.group(1).strip()

    def parse(self, raw_output: str) -> Tuple[str, str]:
        """
        Extract revision and date from the client's output.

        Args:
            raw_output: Captured output of the client's command

        Returns:
            Tuple of (revision, date)

        Raises:
            ScmParseError: If either field is missing from the output
        """
        revision = self._extract("revision", self.revision_pattern, raw_output)
        date = self._extract("date", self.date_pattern, raw_output)
        return revision, date

    def read_output(self) -> str:
        """Run the client's command once and return its combined output."""
        cmd = [self.executable_path, *self.command]
        _log_debug(f"Running: {' '.join(cmd)}")

        result = subprocess.run(
            cmd,
            cwd=self.working_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        return result.stdout

    def collect(self) -> ScmRecord:
        """
        Collect stats about the latest change.

        Returns a record with only the name set if the client is not installed.
        """
        if not self.available:
            _log_debug(f"{self.executable} not found on PATH, skipping {self.name} stats")
            return ScmRecord(name=self.name)

        revision, date = self.parse(self.read_output())
        _log_debug(f"{self.name} revision {revision} ({date})")
        return ScmRecord(name=self.name, revision=revision, date=date)


class Mercurial(ScmClient):
    """Mercurial client, reading the tip changeset."""

    name = "Mercurial"
    executable = "hg"
    command = ["tip"]
    revision_pattern = r"^changeset: +(.+)"
    date_pattern = r"^date: +(.+)"


class Subversion(ScmClient):
    """Subversion client, reading the working copy info."""

    name = "Subversion"
    executable = "svn"
    command = ["info"]
    revision_pattern = r"^Revision: (\d+)"
    date_pattern = r"^Last Changed Date: (.+)"


# Probing order for detect_scm_client()
SCM_CLIENTS: Dict[str, Type[ScmClient]] = {
    "mercurial": Mercurial,
    "subversion": Subversion,
}


def detect_scm_client(working_dir: Optional[Path] = None) -> Optional[ScmClient]:
    """
    Return the first SCM client whose executable is on PATH.

    Args:
        working_dir: Checkout to query (defaults to the current directory)

    Returns:
        An available ScmClient, or None if no client is installed
    """
    for client_class in SCM_CLIENTS.values():
        client = client_class(working_dir)
        if client.available:
            return client
    return None


def collect_scm_stats(kind: str = "auto", working_dir: Optional[Path] = None) -> Optional[ScmRecord]:
    """
    Collect SCM stats for a named client, or for whichever is installed.

    Args:
        kind: "mercurial", "subversion", or "auto"
        working_dir: Checkout to query (defaults to the current directory)

    Returns:
        ScmRecord for the client. With kind="auto" and no client installed,
        returns None.

    Raises:
        ValueError: If kind is not a known client
        ScmParseError: If the client's output cannot be parsed

    Examples:
        >>> collect_scm_stats("mercurial")  # hg not installed
        ScmRecord(name='Mercurial', revision=None, date=None)
    """
    kind = kind.lower()

    if kind == "auto":
        client = detect_scm_client(working_dir)
        if client is None:
            _log_debug("No SCM client found on PATH")
            return None
        return client.collect()

    if kind not in SCM_CLIENTS:
        raise ValueError(f"Unknown SCM client '{kind}'. Available: {list(SCM_CLIENTS)} or 'auto'")

    return SCM_CLIENTS[kind](working_dir).collect()

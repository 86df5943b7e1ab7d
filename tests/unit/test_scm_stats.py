"""Unit tests for SCM stats collection, pinned to captured client output."""

import subprocess

import pytest

from rakedlatex.contexts.scm import scm_stats
from rakedlatex.contexts.scm.exceptions import ScmParseError
from rakedlatex.contexts.scm.scm_stats import (
    Mercurial,
    ScmRecord,
    Subversion,
    collect_scm_stats,
    detect_scm_client,
)

HG_TIP_OUTPUT = """\
changeset:   45:7f3e2a9c1b0d
tag:         tip
user:        Jane Doe <jane@example.org>
date:        Fri Aug 12 14:03:11 2005 +0200
summary:     Add method chapter
"""

SVN_INFO_OUTPUT = """\
Path: .
Working Copy Root Path: /home/jane/thesis
URL: svn://example.org/thesis/trunk
Repository Root: svn://example.org/thesis
Revision: 128
Node Kind: directory
Schedule: normal
Last Changed Author: jane
Last Changed Rev: 127
Last Changed Date: 2005-08-12 14:03:11 +0200 (Fri, 12 Aug 2005)
"""

# Localized svn output that the patterns can't read
SVN_INFO_OUTPUT_FR = """\
Chemin : .
Révision : 128
Date de la dernière modification : 2005-08-12 14:03:11 +0200
"""


@pytest.fixture
def installed(monkeypatch):
    """Pretend the given executables are on PATH."""

    def install(*executables):
        monkeypatch.setattr(
            scm_stats.shutil,
            "which",
            lambda name: f"/usr/bin/{name}" if name in executables else None,
        )

    return install


@pytest.fixture
def client_output(monkeypatch):
    """Make subprocess.run return the given output and record the calls."""
    calls = []

    def install(output):
        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            return subprocess.CompletedProcess(cmd, 0, stdout=output)

        monkeypatch.setattr(scm_stats.subprocess, "run", fake_run)
        return calls

    return install


@pytest.fixture
def no_subprocess(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("No subprocess may be started")

    monkeypatch.setattr(scm_stats.subprocess, "run", fail)


@pytest.mark.unit
def test_parse_mercurial_tip():
    revision, date = Mercurial().parse(HG_TIP_OUTPUT)

    assert revision == "45:7f3e2a9c1b0d"
    assert date == "Fri Aug 12 14:03:11 2005 +0200"


@pytest.mark.unit
def test_parse_subversion_info():
    revision, date = Subversion().parse(SVN_INFO_OUTPUT)

    # "Last Changed Rev" must not be mistaken for the revision
    assert revision == "128"
    assert date == "2005-08-12 14:03:11 +0200 (Fri, 12 Aug 2005)"


@pytest.mark.unit
def test_parse_localized_output_raises_typed_error():
    with pytest.raises(ScmParseError) as exc_info:
        Subversion().parse(SVN_INFO_OUTPUT_FR)

    error = exc_info.value
    assert error.client_name == "Subversion"
    assert error.field_name == "revision"
    assert error.raw_output == SVN_INFO_OUTPUT_FR


@pytest.mark.unit
def test_parse_missing_date_raises():
    output = "changeset:   45:7f3e2a9c1b0d\ntag:         tip\n"

    with pytest.raises(ScmParseError, match="date"):
        Mercurial().parse(output)


@pytest.mark.unit
def test_missing_client_yields_empty_record(installed, no_subprocess):
    installed()

    client = Mercurial()

    assert client.available is False
    assert client.collect() == ScmRecord(name="Mercurial", revision=None, date=None)


@pytest.mark.unit
def test_collect_runs_client_once(installed, client_output, tmp_path):
    installed("hg")
    calls = client_output(HG_TIP_OUTPUT)

    record = Mercurial(working_dir=tmp_path).collect()

    assert record == ScmRecord("Mercurial", "45:7f3e2a9c1b0d", "Fri Aug 12 14:03:11 2005 +0200")
    assert len(calls) == 1
    cmd, kwargs = calls[0]
    assert cmd == ["/usr/bin/hg", "tip"]
    assert kwargs["cwd"] == tmp_path
    assert kwargs["stderr"] == subprocess.STDOUT


@pytest.mark.unit
def test_collect_propagates_parse_errors(installed, client_output):
    installed("svn")
    client_output("svn: E155007: '/home/jane' is not a working copy\n")

    with pytest.raises(ScmParseError):
        Subversion().collect()


@pytest.mark.unit
def test_detect_prefers_mercurial(installed):
    installed("hg", "svn")

    assert isinstance(detect_scm_client(), Mercurial)


@pytest.mark.unit
def test_detect_falls_back_to_subversion(installed):
    installed("svn")

    assert isinstance(detect_scm_client(), Subversion)


@pytest.mark.unit
def test_detect_without_clients(installed):
    installed()

    assert detect_scm_client() is None


@pytest.mark.unit
def test_collect_scm_stats_auto(installed, client_output):
    installed("svn")
    client_output(SVN_INFO_OUTPUT)

    assert collect_scm_stats("auto") == ScmRecord(
        "Subversion", "128", "2005-08-12 14:03:11 +0200 (Fri, 12 Aug 2005)"
    )


@pytest.mark.unit
def test_collect_scm_stats_auto_without_clients(installed, no_subprocess):
    installed()

    assert collect_scm_stats("auto") is None


@pytest.mark.unit
def test_collect_scm_stats_named_client_is_case_insensitive(installed, no_subprocess):
    installed()

    assert collect_scm_stats("Subversion") == ScmRecord("Subversion")


@pytest.mark.unit
def test_collect_scm_stats_unknown_client():
    with pytest.raises(ValueError, match="Unknown SCM client"):
        collect_scm_stats("git")

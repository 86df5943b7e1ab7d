"""Shared fixtures: console capture and fake external tools."""

import subprocess
import sys

import pytest
from loguru import logger

from rakedlatex.contexts.rendering import runner as runner_module
from rakedlatex.utils.logger import console_format


class FakeTool:
    """
    Stand-in for subprocess.run that records calls.

    Returns the queued outputs in order; the last one repeats.
    """

    def __init__(self, outputs):
        self.outputs = list(outputs) or [""]
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        output = self.outputs.pop(0) if len(self.outputs) > 1 else self.outputs[0]
        return subprocess.CompletedProcess(cmd, 0, stdout=output)


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore loguru's default handler after tests that reconfigure it."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def console_output():
    """Capture console-formatted log messages as a list of strings."""
    messages = []
    handler_id = logger.add(messages.append, format=console_format, level="INFO", colorize=False)
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def fake_tool(monkeypatch):
    """
    Replace tool lookup and execution in the runner module.

    Usage:
        tool = fake_tool("first pass output", "second pass output")
        ...
        assert len(tool.calls) == 2
    """

    def install(*outputs):
        tool = FakeTool(outputs)
        monkeypatch.setattr(runner_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(runner_module.subprocess, "run", tool)
        return tool

    return install

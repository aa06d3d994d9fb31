"""Pytest configuration and fixtures."""

import pytest
import structlog

from iterm_mcp.config import ServerConfig
from iterm_mcp.manager import TerminalManager


class FakeHost:
    """
    Stands in for HostScriptRunner.

    Answers scripts and shell commands by the first rule whose needle
    occurs in them. A rule's response may be a string, an exception to
    raise, or a list of those consumed in order (the last one repeats).
    """

    def __init__(self) -> None:
        self.scripts: list[str] = []
        self.commands: list[str] = []
        self.script_rules: list[tuple[str, object]] = []
        self.shell_rules: list[tuple[str, object]] = []

    def on_script(self, needle: str, response) -> None:
        self.script_rules.append((needle, response))

    def on_shell(self, needle: str, response) -> None:
        self.shell_rules.append((needle, response))

    async def run_script(self, script: str) -> str:
        self.scripts.append(script)
        return self._answer(self.script_rules, script)

    async def run_shell(self, command: str) -> str:
        self.commands.append(command)
        return self._answer(self.shell_rules, command)

    def scripts_containing(self, needle: str) -> list[str]:
        return [s for s in self.scripts if needle in s]

    @staticmethod
    def _answer(rules, text: str) -> str:
        for needle, response in rules:
            if needle in text:
                if isinstance(response, list):
                    response = response.pop(0) if len(response) > 1 else response[0]
                if isinstance(response, Exception):
                    raise response
                return response
        return ""


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Keep a test's logging config (bound to its captured stderr) from leaking."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def host():
    """A fake host with no rules."""
    return FakeHost()


@pytest.fixture
def manager(host):
    """A TerminalManager wired to the fake host, polling quickly."""
    config = ServerConfig(poll_interval=0.001, max_wait=0.05)
    return TerminalManager(config, runner=host)

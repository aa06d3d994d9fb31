"""Tests for running commands in a session."""

import pytest

from iterm_mcp.errors import ExecutionError, HostError, SessionNotFoundError
from iterm_mcp.executor import CommandExecutor
from iterm_mcp.target import ActiveSession, SessionById


@pytest.fixture
def executor(host):
    host.on_script("return tty", "/dev/ttys000\n")
    host.on_script("return is processing", "false\n")
    return CommandExecutor(host, poll_interval=0.001, max_wait=0.05)


@pytest.mark.asyncio
async def test_execute_writes_escaped_command(host, executor):
    """Test that the command is written as an escaped literal."""
    completed = await executor.execute('echo "Hello World"', ActiveSession())

    assert completed
    [write] = host.scripts_containing("write text")
    assert 'write text ("echo \\"Hello World\\"")' in write
    assert "tell current session of current tab of front window" in write


@pytest.mark.asyncio
async def test_execute_order(host, executor):
    """Test that the TTY is resolved before writing, and polling follows."""
    await executor.execute("ls", ActiveSession())

    assert "return tty" in host.scripts[0]
    assert "write text" in host.scripts[1]
    assert "is processing" in host.scripts[2]


@pytest.mark.asyncio
async def test_execute_multiline(host, executor):
    """Test that multiline commands are joined with return."""
    await executor.execute("echo one\necho two", ActiveSession())

    [write] = host.scripts_containing("write text")
    assert 'write text ("echo one" & return & "echo two")' in write


@pytest.mark.asyncio
async def test_execute_targets_session(host, executor):
    """Test that every step addresses the requested session."""
    await executor.execute("test", SessionById("session-789"))

    for needle in ("return tty", "write text", "is processing"):
        [script] = host.scripts_containing(needle)
        assert 'if id of s is "session-789"' in script


@pytest.mark.asyncio
async def test_execute_polls_until_idle(host):
    """Test that polling continues while the session is processing."""
    host.on_script("is processing", ["true", "true", "false"])
    executor = CommandExecutor(host, poll_interval=0.001, max_wait=5.0)

    completed = await executor.execute("sleep 1", ActiveSession())

    assert completed
    assert len(host.scripts_containing("is processing")) == 3


@pytest.mark.asyncio
async def test_execute_timeout_is_soft(host):
    """Test that a session that never goes idle returns without raising."""
    host.on_script("is processing", "true")
    executor = CommandExecutor(host, poll_interval=0.001, max_wait=0.02)

    completed = await executor.execute("tail -f log", ActiveSession())

    assert not completed


@pytest.mark.asyncio
async def test_execute_session_not_found(host):
    """Test that an unknown session fails and nothing is written."""
    host.on_script("session-404", SessionNotFoundError("session-404"))
    executor = CommandExecutor(host)

    with pytest.raises(ExecutionError) as info:
        await executor.execute("ls", SessionById("session-404"))

    assert info.value.session_not_found
    assert str(info.value) == "Failed to execute command: Session not found: session-404"
    assert not host.scripts_containing("write text")


@pytest.mark.asyncio
async def test_execute_host_error(host):
    """Test that host failures while writing are wrapped."""
    host.on_script("return tty", "/dev/ttys000")
    host.on_script("write text", HostError("iTerm2 got an error"))
    executor = CommandExecutor(host)

    with pytest.raises(ExecutionError, match="Failed to execute command: iTerm2 got an error"):
        await executor.execute("ls", ActiveSession())

"""Tests for reading terminal buffers."""

import pytest

from iterm_mcp.errors import HostError, ReadError, SessionNotFoundError
from iterm_mcp.reader import BufferReader, tail
from iterm_mcp.target import ActiveSession, SessionById


def test_tail_returns_one_extra_line():
    """Test that asking for n lines returns n + 1."""
    assert tail("line1\nline2\nline3\nline4\nline5", 2) == "line3\nline4\nline5"


def test_tail_short_buffer():
    """Test that a short buffer is returned whole."""
    assert tail("only\ntwo", 10) == "only\ntwo"


@pytest.mark.parametrize("lines", [None, 0])
def test_tail_without_count(lines):
    """Test that no line count returns the whole buffer."""
    assert tail("a\nb\nc", lines) == "a\nb\nc"


@pytest.mark.asyncio
async def test_read_trims_buffer(host):
    """Test that surrounding whitespace is trimmed."""
    host.on_script("return contents", "\n  line1\n\nline2  \n\n")
    reader = BufferReader(host)

    assert await reader.read(ActiveSession()) == "line1\n\nline2"


@pytest.mark.asyncio
async def test_read_targets_session(host):
    """Test that a specific session is searched for."""
    host.on_script("return contents", "output")
    reader = BufferReader(host)

    await reader.read(SessionById("session-123"))

    assert 'if id of s is "session-123"' in host.scripts[0]


@pytest.mark.asyncio
async def test_tail_reads_buffer(host):
    """Test tail through the reader."""
    host.on_script("return contents", "line1\nline2\nline3\nline4\nline5\n")
    reader = BufferReader(host)

    assert await reader.tail(2, ActiveSession()) == "line3\nline4\nline5"


@pytest.mark.asyncio
async def test_read_session_not_found(host):
    """Test that an unknown session is reported, not redirected."""
    host.on_script("return contents", SessionNotFoundError("nope"))
    reader = BufferReader(host)

    with pytest.raises(ReadError) as info:
        await reader.read(SessionById("nope"))

    assert info.value.session_not_found
    assert isinstance(info.value.__cause__, SessionNotFoundError)


@pytest.mark.asyncio
async def test_read_host_error(host):
    """Test that host failures are wrapped with a readable prefix."""
    host.on_script("return contents", HostError("AppleScript error"))
    reader = BufferReader(host)

    with pytest.raises(ReadError, match="Failed to read terminal output: AppleScript error"):
        await reader.read(ActiveSession())

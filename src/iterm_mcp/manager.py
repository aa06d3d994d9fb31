"""The operations exposed as MCP tools."""

from dataclasses import dataclass
from typing import Optional

from .config import ServerConfig
from .control import ControlCharacterSender
from .executor import CommandExecutor
from .host import HostScriptRunner
from .interpreter import search
from .log import get_logger
from .reader import BufferReader
from .target import resolve
from .terminals import TerminalInfo, TerminalLister, create_terminal

logger = get_logger(__name__)


@dataclass
class WriteResult:
    """Outcome of writing a command to a terminal."""

    output_line_delta: int
    completed: bool


def _line_count(buffer: str) -> int:
    return len(buffer.split("\n"))


class TerminalManager:
    """Drives iTerm2 sessions through a single host runner."""

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        runner: Optional[HostScriptRunner] = None,
    ) -> None:
        self.config = config or ServerConfig()
        self.runner = runner or HostScriptRunner(self.config.osascript)
        self.reader = BufferReader(self.runner)
        self.executor = CommandExecutor(
            self.runner,
            poll_interval=self.config.poll_interval,
            max_wait=self.config.max_wait,
        )
        self.sender = ControlCharacterSender(self.runner)
        self.lister = TerminalLister(self.runner, self.reader)

    async def list_terminals(self) -> list[TerminalInfo]:
        """List all open sessions."""
        return await self.lister.list()

    async def create_terminal(self) -> str:
        """Create a new session and return its ID."""
        return await create_terminal(self.runner)

    async def write_to_terminal(
        self, command: str, session_id: Optional[str] = None
    ) -> WriteResult:
        """
        Run a command and report how many lines the buffer grew by.

        The buffer is read before and after so the caller knows how much
        output to look at.
        """
        target = resolve(session_id)
        before = await self.reader.read(target)
        completed = await self.executor.execute(command, target)
        after = await self.reader.read(target)

        delta = _line_count(after) - _line_count(before)
        logger.info("command_written", target=str(target), line_delta=delta, completed=completed)
        return WriteResult(output_line_delta=delta, completed=completed)

    async def read_terminal_output(
        self, lines_of_output: Optional[int] = None, session_id: Optional[str] = None
    ) -> str:
        """Read the last ``lines_of_output + 1`` lines of a session."""
        return await self.reader.tail(lines_of_output, resolve(session_id))

    async def send_control_character(
        self, letter: str, session_id: Optional[str] = None
    ) -> int:
        """Send a control character, returning the code that was sent."""
        return await self.sender.send(letter, resolve(session_id))

    async def search_terminal_output(
        self,
        query: str,
        session_id: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> list[str]:
        """Search a session's buffer for lines containing ``query``."""
        if max_results is None:
            max_results = self.config.default_max_results
        buffer = await self.reader.read(resolve(session_id))
        return search(buffer, query, max_results)

"""Reading a session's scrollback buffer."""

from typing import Optional

from .errors import HostError, ReadError
from .host import HostScriptRunner
from .log import get_logger
from .target import SessionTarget

logger = get_logger(__name__)


def tail(buffer: str, lines: Optional[int]) -> str:
    """
    Return the last ``lines + 1`` lines of a buffer.

    The extra line is the bottom row, usually the prompt currently being
    edited, which callers want to see in addition to the completed output.
    A missing or zero count returns the whole buffer.
    """
    if not lines:
        return buffer
    return "\n".join(buffer.split("\n")[-lines - 1:])


class BufferReader:
    """Fetches the full text contents of a session."""

    def __init__(self, runner: HostScriptRunner) -> None:
        self.runner = runner

    async def read(self, target: SessionTarget) -> str:
        """Read the whole buffer, trimmed of surrounding whitespace."""
        try:
            contents = await self.runner.run_script(target.tell("return contents"))
        except HostError as e:
            raise ReadError(e) from e
        logger.debug("buffer_read", target=str(target), chars=len(contents))
        return contents.strip()

    async def tail(self, lines: Optional[int], target: SessionTarget) -> str:
        """Read the buffer and keep its last ``lines + 1`` lines."""
        return tail(await self.read(target), lines)

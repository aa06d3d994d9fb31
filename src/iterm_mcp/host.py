"""Host interaction: AppleScript and shell calls through a subprocess."""

import asyncio
import re

from .errors import HostError, SessionNotFoundError
from .log import get_logger

logger = get_logger(__name__)

# osascript reports script errors as e.g.
# "execution error: Session not found: w0t0p0:ABC (-2700)"
SESSION_NOT_FOUND_PATTERN = re.compile(r"Session not found: (.+?)(?:\s+\(-?\d+\))?\s*$", re.M)


class HostScriptRunner:
    """
    Runs automation scripts against the terminal application.

    Scripts are passed to osascript wrapped in single quotes on a shell
    command line, so any user text inside them must already be escaped
    with :func:`iterm_mcp.escape.escape`.
    """

    def __init__(self, osascript: str = "osascript") -> None:
        self.osascript = osascript

    async def run_script(self, script: str) -> str:
        """Run an AppleScript and return its stdout."""
        return await self._exec(f"{self.osascript} -e '{script}'")

    async def run_shell(self, command: str) -> str:
        """Run a shell command line and return its stdout."""
        return await self._exec(command)

    async def _exec(self, command: str) -> str:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            raise

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            if not message:
                message = f"exit status {process.returncode}"
            logger.debug("host_call_failed", returncode=process.returncode, error=message)

            match = SESSION_NOT_FOUND_PATTERN.search(message)
            if match:
                raise SessionNotFoundError(match.group(1), message)
            raise HostError(message)

        return stdout.decode("utf-8", errors="replace")

"""Listing and creating terminal sessions."""

import asyncio
from dataclasses import dataclass

from .errors import CreateError, HostError, ListError
from .host import HostScriptRunner
from .interpreter import probe_last_command, probe_working_directory
from .log import get_logger
from .reader import BufferReader
from .target import SessionById, application_script

logger = get_logger(__name__)

LIST_SCRIPT = application_script(
    'set output to ""\n'
    "repeat with w in windows\n"
    "  repeat with t in tabs of w\n"
    "    repeat with s in sessions of t\n"
    "      set output to output & (id of s) & tab & (tty of s) & tab & (name of s) & linefeed\n"
    "    end repeat\n"
    "  end repeat\n"
    "end repeat\n"
    "return output"
)

CREATE_SCRIPT = application_script(
    "if (count of windows) is 0 then\n"
    "  set newWindow to (create window with default profile)\n"
    "  return id of current session of newWindow\n"
    "end if\n"
    "tell front window\n"
    "  set newTab to (create tab with default profile)\n"
    "  return id of current session of newTab\n"
    "end tell"
)


@dataclass
class TerminalInfo:
    """A snapshot of one open session."""

    session_id: str
    name: str
    tty: str
    cwd: str
    last_command: str


def parse_session_lines(output: str) -> list[tuple[str, str, str]]:
    """
    Parse ``id<TAB>tty<TAB>name`` lines into (id, tty, name) tuples.

    A session name containing a linefeed spills onto lines without tabs;
    those are folded back into the previous name.
    """
    sessions: list[tuple[str, str, str]] = []
    for line in output.strip().split("\n"):
        if not line:
            continue
        if "\t" not in line:
            if sessions:
                session_id, tty, name = sessions[-1]
                sessions[-1] = (session_id, tty, f"{name} {line}")
            continue
        session_id, tty, *name_parts = line.split("\t")
        sessions.append((session_id, tty, "\t".join(name_parts)))
    return sessions


class TerminalLister:
    """Enumerates open sessions and enriches them with derived fields."""

    def __init__(self, runner: HostScriptRunner, reader: BufferReader) -> None:
        self.runner = runner
        self.reader = reader

    async def list(self) -> list[TerminalInfo]:
        try:
            output = await self.runner.run_script(LIST_SCRIPT)
        except HostError as e:
            raise ListError(e) from e

        sessions = parse_session_lines(output)
        logger.debug("sessions_listed", count=len(sessions))
        return list(
            await asyncio.gather(
                *(self._describe(session_id, tty, name) for session_id, tty, name in sessions)
            )
        )

    async def _describe(self, session_id: str, tty: str, name: str) -> TerminalInfo:
        cwd, last_command = await asyncio.gather(
            probe_working_directory(self.runner, tty),
            probe_last_command(self.reader, SessionById(session_id)),
        )
        return TerminalInfo(
            session_id=session_id,
            name=name,
            tty=tty,
            cwd=str(cwd),
            last_command=str(last_command),
        )


async def create_terminal(runner: HostScriptRunner) -> str:
    """Open a new tab (or window, if none is open) and return its session ID."""
    try:
        session_id = (await runner.run_script(CREATE_SCRIPT)).strip()
    except HostError as e:
        raise CreateError(e) from e
    logger.info("terminal_created", session_id=session_id)
    return session_id

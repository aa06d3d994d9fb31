"""Facts derived from raw terminal text."""

from dataclasses import dataclass
import re
import shlex
from typing import Optional

from .errors import HostError, ReadError
from .host import HostScriptRunner
from .log import get_logger
from .reader import BufferReader
from .target import SessionTarget

logger = get_logger(__name__)

UNKNOWN = "(unknown)"
WAITING_FOR_INPUT = "(waiting for input)"
ERROR_READING = "(error reading)"

SEPARATOR_PATTERN = re.compile(r"^[-─═]+$")
BARE_PROMPT_PATTERN = re.compile(r"[$%]\s*$")
# Greedy, so the rightmost prompt terminator wins.
PROMPT_COMMAND_PATTERN = re.compile(r"^.*[$%]\s+(.+)$")


@dataclass(frozen=True)
class BestEffort:
    """A derived value that falls back to a sentinel instead of raising."""

    value: Optional[str]
    sentinel: str = UNKNOWN

    @property
    def ok(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return self.value if self.value is not None else self.sentinel


def is_blank(line: str) -> bool:
    return not line


def is_separator(line: str) -> bool:
    return bool(SEPARATOR_PATTERN.match(line))


def is_bare_prompt(line: str) -> bool:
    """True when the line ends in a prompt terminator with nothing typed."""
    return bool(BARE_PROMPT_PATTERN.search(line))


def extract_command(line: str) -> Optional[str]:
    """Return the text after the last prompt terminator, if any."""
    match = PROMPT_COMMAND_PATTERN.match(line)
    if not match:
        return None
    command = match.group(1).strip()
    if not command or BARE_PROMPT_PATTERN.fullmatch(command):
        return None
    return command


def last_command(buffer: str) -> str:
    """
    Guess the most recent command from buffer text.

    Lines are scanned bottom-up. Blank and separator lines are skipped;
    a line sitting at an empty prompt means the shell is waiting for
    input. Otherwise the first line with text after a ``$`` or ``%``
    prompt wins.
    """
    for raw in reversed(buffer.split("\n")):
        line = raw.strip()
        if is_blank(line) or is_separator(line):
            continue
        if is_bare_prompt(line):
            return WAITING_FOR_INPUT
        command = extract_command(line)
        if command:
            return command
    return UNKNOWN


def search(buffer: str, query: str, max_results: int = 50) -> list[str]:
    """
    Find lines containing ``query``, case-insensitively.

    The query is matched as a plain substring. Results are formatted as
    ``"<line number>: <line>"`` with 1-based line numbers, at most
    ``max_results`` of them.
    """
    needle = query.lower()
    matches: list[str] = []
    for number, line in enumerate(buffer.split("\n"), start=1):
        if len(matches) >= max_results:
            break
        if needle in line.lower():
            matches.append(f"{number}: {line}")
    return matches


async def probe_last_command(reader: BufferReader, target: SessionTarget) -> BestEffort:
    """Read a session and derive its last command, never raising."""
    try:
        buffer = await reader.read(target)
    except ReadError as e:
        logger.info("last_command_unreadable", target=str(target), error=str(e))
        return BestEffort(None, ERROR_READING)
    return BestEffort(last_command(buffer))


async def probe_working_directory(runner: HostScriptRunner, tty: str) -> BestEffort:
    """
    Look up the working directory of the process holding ``tty``.

    Any failure along the way yields the ``(unknown)`` sentinel.
    """
    try:
        pid = (
            await runner.run_shell(f"lsof -t {shlex.quote(tty)} 2>/dev/null | head -1")
        ).strip()
        if not pid:
            return BestEffort(None)

        cwd = (
            await runner.run_shell(
                f"lsof -a -d cwd -p {shlex.quote(pid)} 2>/dev/null"
                " | tail -1 | awk '{print $NF}'"
            )
        ).strip()
    except HostError as e:
        logger.info("cwd_lookup_failed", tty=tty, error=str(e))
        return BestEffort(None)

    return BestEffort(cwd or None)

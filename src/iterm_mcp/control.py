"""Sending control characters to a session."""

from .errors import ControlSendError, HostError, InvalidControlCharacterError
from .host import HostScriptRunner
from .log import get_logger
from .target import SessionTarget

logger = get_logger(__name__)

TELNET_ESCAPE = 29
ESCAPE = 27


def control_code(letter: str) -> int:
    """
    Map a control character name to its ASCII code.

    ``]`` is the telnet escape (29), ``ESC``/``ESCAPE`` is 27, and a
    single letter maps to its Control-letter code (``C`` -> 3).

    Raises:
        InvalidControlCharacterError: For any other name
    """
    name = letter.upper()
    if name == "]":
        return TELNET_ESCAPE
    if name in ("ESC", "ESCAPE"):
        return ESCAPE
    if len(name) == 1 and "A" <= name <= "Z":
        return ord(name) - ord("A") + 1
    raise InvalidControlCharacterError(letter)


class ControlCharacterSender:
    """Injects control codes into a session."""

    def __init__(self, runner: HostScriptRunner) -> None:
        self.runner = runner

    async def send(self, letter: str, target: SessionTarget) -> int:
        """Send the named control character and return its code."""
        code = control_code(letter)
        try:
            await self.runner.run_script(
                target.tell(f"write text (ASCII character {code})")
            )
        except HostError as e:
            raise ControlSendError(e) from e
        logger.debug("control_sent", target=str(target), code=code)
        return code

"""Resolution of session identifiers into script targets."""

from dataclasses import dataclass
import textwrap
from typing import Optional, Union

from .escape import escape_line

ACTIVE = "active"


def application_script(body: str) -> str:
    """Wrap statements in a tell block addressed to iTerm2."""
    return 'tell application "iTerm2"\n' + textwrap.indent(body, "  ") + "\nend tell"


@dataclass(frozen=True)
class ActiveSession:
    """The current session of the current tab of the front window."""

    def tell(self, body: str) -> str:
        """Wrap script statements so they run against this session."""
        return application_script(
            "tell current session of current tab of front window\n"
            + textwrap.indent(body, "  ")
            + "\nend tell"
        )

    def __str__(self) -> str:
        return ACTIVE


@dataclass(frozen=True)
class SessionById:
    """
    A session found by searching every window, tab and session.

    The generated script raises "Session not found: <id>" when nothing
    matches; it never falls back to the active session.
    """

    session_id: str

    def tell(self, body: str) -> str:
        """Wrap script statements so they run against the matching session."""
        session_id = escape_line(self.session_id)
        search = (
            "repeat with w in windows\n"
            "  repeat with t in tabs of w\n"
            "    repeat with s in sessions of t\n"
            f'      if id of s is "{session_id}" then\n'
            "        tell s\n"
            + textwrap.indent(body, " " * 10)
            + "\n        end tell\n"
            '        return ""\n'
            "      end if\n"
            "    end repeat\n"
            "  end repeat\n"
            "end repeat\n"
            f'error "Session not found: {session_id}"'
        )
        return application_script(search)

    def __str__(self) -> str:
        return self.session_id


SessionTarget = Union[ActiveSession, SessionById]


def resolve(session_id: Optional[str] = None) -> SessionTarget:
    """Resolve an optional session identifier into a target.

    Args:
        session_id: Session identifier, ``"active"`` or None

    Returns:
        ActiveSession when no identifier (or "active") was given,
        otherwise a SessionById for that identifier
    """
    if not session_id or session_id == ACTIVE:
        return ActiveSession()
    return SessionById(session_id)

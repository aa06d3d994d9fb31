"""Exceptions raised by iTerm-MCP operations."""

from typing import Optional


class ITermError(Exception):
    """Base exception for all iTerm-MCP errors."""


class HostError(ITermError):
    """A host script or shell call failed."""


class SessionNotFoundError(HostError):
    """Raised when no open session matches the requested identifier."""

    def __init__(self, session_id: str, message: Optional[str] = None) -> None:
        self.session_id = session_id
        super().__init__(message or f"Session not found: {session_id}")


class InvalidControlCharacterError(ITermError, ValueError):
    """Raised when a control character name cannot be mapped to a code."""

    def __init__(self, letter: str) -> None:
        self.letter = letter
        super().__init__(f"Invalid control character letter: {letter!r}")


class OperationError(ITermError):
    """
    A core operation failed because of an underlying host error.

    The message is the operation prefix followed by the cause text, and
    the cause is kept for callers that need to tell failures apart.
    """

    prefix = "Operation failed"

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"{self.prefix}: {cause}")

    @property
    def session_not_found(self) -> bool:
        return isinstance(self.cause, SessionNotFoundError)


class ExecutionError(OperationError):
    prefix = "Failed to execute command"


class ReadError(OperationError):
    prefix = "Failed to read terminal output"


class ControlSendError(OperationError):
    prefix = "Failed to send control character"


class ListError(OperationError):
    prefix = "Failed to list terminals"


class CreateError(OperationError):
    prefix = "Failed to create terminal"

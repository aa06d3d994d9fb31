"""iTerm-MCP: MCP server exposing iTerm2 sessions for AI agents."""

from .config import ServerConfig
from .errors import (
    ControlSendError,
    CreateError,
    ExecutionError,
    HostError,
    InvalidControlCharacterError,
    ITermError,
    ListError,
    ReadError,
    SessionNotFoundError,
)
from .manager import TerminalManager
from .server import main, run_server

__version__ = "0.1.0"

__all__ = [
    "ServerConfig",
    "TerminalManager",
    "ITermError",
    "HostError",
    "SessionNotFoundError",
    "InvalidControlCharacterError",
    "ExecutionError",
    "ReadError",
    "ControlSendError",
    "ListError",
    "CreateError",
    "main",
    "run_server",
]

"""Configuration for iTerm-MCP server."""

from dataclasses import dataclass, field
import os


@dataclass
class ServerConfig:
    """Configuration for the MCP server and its host interaction."""

    osascript: str = field(
        default_factory=lambda: os.environ.get("ITERM_MCP_OSASCRIPT", "osascript")
    )
    poll_interval: float = 0.1  # seconds between "is processing" checks
    max_wait: float = 10.0  # give up waiting for a command after this long
    default_read_lines: int = 25
    default_max_results: int = 50
    log_level: str = field(
        default_factory=lambda: os.environ.get("ITERM_MCP_LOG_LEVEL", "WARNING")
    )

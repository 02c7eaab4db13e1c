"""
dwgraph Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


class Config:
    """Library configuration loaded from environment variables."""

    # Logging
    # Print every structural change (node/edge add, update, removal)
    VERBOSE: bool = _env_flag("DWGRAPH_VERBOSE", False)
    # Print rejected operations (self-loops, negative weights, missing nodes)
    LOG_REJECTED: bool = _env_flag("DWGRAPH_LOG_REJECTED", True)
    # Colours: DWGRAPH_NO_COLOR is read only by logging_utils.colored(), on every call

    # Edge defaults
    DEFAULT_EDGE_INFO: str = os.getenv("DWGRAPH_DEFAULT_EDGE_INFO", "")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors on malformed values."""
        for name in ("DWGRAPH_VERBOSE", "DWGRAPH_LOG_REJECTED"):
            raw = os.getenv(name)
            if raw is None:
                continue
            if raw.strip().lower() not in _TRUE_VALUES | _FALSE_VALUES:
                raise ValueError(
                    f"{name} must be a boolean flag (true/false, 1/0, yes/no, on/off), "
                    f"got {raw!r}"
                )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "dwgraph Configuration:",
            f"  Verbose: {cls.VERBOSE}",
            f"  Log Rejected: {cls.LOG_REJECTED}",
            f"  Default Edge Info: {cls.DEFAULT_EDGE_INFO!r}",
        ]
        return "\n".join(lines)

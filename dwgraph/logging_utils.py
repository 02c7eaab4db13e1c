"""Logging utilities for dwgraph.

Provides color-coded output to distinguish structural changes from rejected
operations.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Structural changes
    RED = "\033[91m"       # Rejected operations
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if DWGRAPH_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("DWGRAPH_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


# Markers for operation types (color-blind accessible)
LOG_TAG_MUTATION = "[•]"   # Structural change
LOG_TAG_REJECTED = "[!]"   # Rejected operation
LOG_TAG_SUCCESS = "[✓]"    # Success
LOG_TAG_INFO = "[i]"       # Information


def log_mutation(message: str) -> None:
    """Log a structural change (blue)."""
    print(colored(f"{LOG_TAG_MUTATION} {message}", Color.BLUE))


def log_rejected(message: str) -> None:
    """Log a rejected operation (red)."""
    print(colored(f"{LOG_TAG_REJECTED} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))

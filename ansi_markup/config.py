"""
Configuration from environment variables.

Values can also come from a .env file in the working directory.

Provides:
- Default render capabilities (MARKUP_ANSI, MARKUP_XTERM, MARKUP_MXP)
- Log level (MARKUP_LOG_LEVEL)
"""

import os
from typing import Dict

from dotenv import load_dotenv

load_dotenv()

TRUE_VALUES = {"1", "true", "yes", "on"}


def get_flag(name: str, default: bool = False) -> bool:
    """
    Read a boolean flag from the environment.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        bool: True for 1/true/yes/on (any case)
    """
    value = os.environ.get(name)
    if not value:
        return default
    return value.strip().lower() in TRUE_VALUES


def get_default_capabilities() -> Dict[str, bool]:
    """Render capabilities used when the caller does not choose them."""
    return {
        "ansi": get_flag("MARKUP_ANSI", True),
        "xterm": get_flag("MARKUP_XTERM", False),
        "mxp": get_flag("MARKUP_MXP", False),
    }


def get_log_level() -> str:
    return os.environ.get("MARKUP_LOG_LEVEL", "WARNING").upper()

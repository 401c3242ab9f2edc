"""Configuration management for acoust."""

import os
import sys
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

DEFAULT_RESPONSE_FORMAT = "json"
DEFAULT_TIMEOUT = 15


def eprint(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)


def _parse_timeout(value: Optional[str]) -> float:
    """Parse a timeout value, falling back to the default."""
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        eprint(f"Warning: invalid ACOUSTID_TIMEOUT '{value}' - using {DEFAULT_TIMEOUT}s.")
        return DEFAULT_TIMEOUT
    if timeout <= 0:
        eprint(f"Warning: ACOUSTID_TIMEOUT must be positive - using {DEFAULT_TIMEOUT}s.")
        return DEFAULT_TIMEOUT
    return timeout


def load_config(env_file: Optional[str] = None) -> dict:
    """
    Load configuration from .env file.

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Dictionary of configuration values.
    """
    if env_file is None:
        env_file = ".env"

    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        eprint(f"Loaded environment from {env_path.resolve()}")
    else:
        eprint(
            f"Warning: .env file not found at {env_path.resolve()} "
            "- falling back to process env."
        )

    return {
        # AcoustID credentials
        "acoustid_api_key": os.getenv("ACOUSTID_API_KEY"),
        "response_format": os.getenv("ACOUSTID_RESPONSE_FORMAT") or DEFAULT_RESPONSE_FORMAT,
        "timeout": _parse_timeout(os.getenv("ACOUSTID_TIMEOUT")),
        # Chromaprint
        "fpcalc_path": os.getenv("FPCALC_PATH"),
    }


def validate_config(config: dict, skip_lookup: bool = False) -> List[str]:
    """
    Validate configuration and return list of missing credentials.

    Args:
        config: Configuration dictionary from load_config()
        skip_lookup: If True, don't require AcoustID credentials

    Returns:
        List of missing credential names (empty if all present).
    """
    missing = []

    if not skip_lookup and not config.get("acoustid_api_key"):
        missing.append("ACOUSTID_API_KEY")

    return missing


def get_acoustid_instructions() -> str:
    """Return instructions for obtaining an AcoustID API key."""
    return """
To get an AcoustID application API key:
1. Sign in at https://acoustid.org/login
2. Register an application at https://acoustid.org/new-application
3. Copy the API key and add to your .env file:
   ACOUSTID_API_KEY=your_api_key
"""


def get_fpcalc_instructions() -> str:
    """Return instructions for installing the fpcalc binary."""
    return """
acoust needs the fpcalc binary from Chromaprint:
- macOS: brew install chromaprint
- Debian/Ubuntu: apt-get install libchromaprint-tools
- Others: download from https://acoustid.org/chromaprint
If fpcalc is not on PATH, point to it in your .env file:
   FPCALC_PATH=/path/to/fpcalc
"""

#!/usr/bin/env python3
"""
acoust - identify audio files with Chromaprint and AcoustID.

Usage:
    python -m acoust /path/to/song.mp3 [options]
"""

import argparse
import sys
from typing import List, Optional

from acoust.config import (
    load_config, validate_config, eprint,
    get_acoustid_instructions, get_fpcalc_instructions
)
from acoust.errors import AcoustError, ToolError
from acoust.identifier import AudioIdentifier
from acoust.models import ResponseFormat


class LookupRunner:
    """Runs a single identification from parsed CLI arguments."""

    def __init__(self, config: dict, args: argparse.Namespace):
        """
        Initialize runner.

        Args:
            config: Configuration dictionary
            args: CLI arguments
        """
        self.config = config
        self.args = args

        self.identifier = AudioIdentifier(
            credential=args.api_key or config.get("acoustid_api_key"),
            response_format=args.format or config.get("response_format") or "json",
            fpcalc_path=args.fpcalc or config.get("fpcalc_path"),
            timeout=args.timeout or config.get("timeout") or 15,
        )

    def run(self, path: str) -> str:
        """
        Identify a file and return what should be printed.

        Args:
            path: Path to the audio file
        """
        self.identifier.set_file(path)

        if self.args.fingerprint_only:
            details = self.identifier.compute_song_details()
            return "\n".join([
                f"FILE={path}",
                f"DURATION={details.duration}",
                f"FINGERPRINT={details.fingerprint}",
            ])

        return self.identifier.query()


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        description="Identify an audio file: fingerprint it with Chromaprint "
                    "and look it up on AcoustID.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look up a song (API key read from .env)
  python -m acoust /path/to/song.mp3

  # Ask for an XML response
  python -m acoust /path/to/song.mp3 --format xml

  # Only print the fingerprint and duration
  python -m acoust /path/to/song.mp3 --fingerprint-only

  # Use a specific fpcalc binary
  python -m acoust /path/to/song.mp3 --fpcalc /opt/chromaprint/fpcalc
"""
    )

    # Required arguments
    parser.add_argument(
        "path",
        help="Path to the audio file to identify"
    )

    # Lookup options
    parser.add_argument(
        "--api-key", "-k",
        help="AcoustID application API key (overrides ACOUSTID_API_KEY)"
    )

    parser.add_argument(
        "--format", "-f",
        type=str.lower,
        choices=ResponseFormat.values(),
        help="Response format requested from AcoustID (default: json)"
    )

    parser.add_argument(
        "--timeout", "-t",
        type=float,
        help="Seconds to wait for fpcalc and for AcoustID (default: 15)"
    )

    parser.add_argument(
        "--fingerprint-only",
        action="store_true",
        help="Print the fingerprint and duration without querying AcoustID"
    )

    # Configuration
    parser.add_argument(
        "--fpcalc",
        help="Path to the fpcalc binary (overrides FPCALC_PATH)"
    )

    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: ./.env)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be a positive number of seconds")

    # Load configuration
    config = load_config(args.env_file)
    if args.api_key:
        config["acoustid_api_key"] = args.api_key
    missing = validate_config(config, skip_lookup=args.fingerprint_only)

    if missing:
        eprint(f"\nMissing required credentials: {', '.join(missing)}")
        eprint(get_acoustid_instructions())
        eprint("Use --fingerprint-only to skip the lookup.\n")
        return 1

    try:
        runner = LookupRunner(config, args)
        print(runner.run(args.path))
    except ToolError as e:
        eprint(f"{e.kind} error: {e.message}")
        eprint(get_fpcalc_instructions())
        return 1
    except AcoustError as e:
        eprint(f"{e.kind} error: {e.message}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

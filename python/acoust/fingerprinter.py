"""Chromaprint (fpcalc) fingerprinting."""

import json
import os
import shutil
import subprocess
from typing import Optional

from acoust.errors import ToolError
from acoust.models import SongDetails

FPCALC_ENV_VAR = "FPCALC_PATH"
FPCALC_BINARY = "fpcalc"


def resolve_fpcalc_path(fpcalc_path: Optional[str] = None) -> Optional[str]:
    """
    Work out where the fpcalc binary lives.

    Lookup order: explicit argument, FPCALC_PATH environment variable,
    then fpcalc on PATH.

    Args:
        fpcalc_path: Explicit path to the binary

    Returns:
        Absolute path to the binary, or None if it cannot be located
    """
    candidate = fpcalc_path or os.getenv(FPCALC_ENV_VAR) or shutil.which(FPCALC_BINARY)
    if not candidate:
        return None
    return os.path.abspath(os.path.expanduser(candidate))


class Fingerprinter:
    """Runs fpcalc against audio files and parses its JSON output."""

    def __init__(self, fpcalc_path: Optional[str] = None, timeout: float = 15):
        """
        Initialize fingerprinter.

        Args:
            fpcalc_path: Path to the fpcalc binary (resolved lazily if omitted)
            timeout: Seconds to wait for fpcalc before giving up
        """
        self.fpcalc_path = fpcalc_path
        self.timeout = timeout

    def _run_fpcalc(self, audio_path: str) -> str:
        """
        Invoke fpcalc and return its stdout.

        Args:
            audio_path: Path to an already validated audio file

        Returns:
            Raw stdout of fpcalc
        """
        binary = resolve_fpcalc_path(self.fpcalc_path)
        if binary is None:
            raise ToolError(
                "Fingerprinting failed: fpcalc was not found. Install chromaprint "
                f"or set {FPCALC_ENV_VAR} to the location of the fpcalc binary"
            )

        try:
            result = subprocess.run(
                [binary, "-json", os.path.abspath(audio_path)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ToolError(f"Fingerprinting failed: fpcalc not found at {binary}") from e
        except subprocess.TimeoutExpired as e:
            raise ToolError(
                f"Fingerprinting failed: fpcalc timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise ToolError(f"Fingerprinting failed: could not run {binary}: {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit code {result.returncode}"
            raise ToolError(f"Fingerprinting failed: {detail}")

        return result.stdout

    def _parse_output(self, output: str) -> SongDetails:
        """
        Parse fpcalc JSON output into SongDetails.

        Args:
            output: Raw stdout of ``fpcalc -json``

        Returns:
            SongDetails with a non-negative integer duration
        """
        if not output or not output.strip():
            raise ToolError("Fingerprinting failed: fpcalc produced no output")

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise ToolError(f"Fingerprinting failed: unreadable fpcalc output ({e})") from e

        if not isinstance(data, dict):
            raise ToolError("Fingerprinting failed: unexpected fpcalc output")

        fingerprint = data.get("fingerprint")
        if not fingerprint or not isinstance(fingerprint, str):
            raise ToolError("Fingerprinting failed: fpcalc did not return a fingerprint")

        try:
            duration = max(0, int(float(data.get("duration"))))
        except (TypeError, ValueError, OverflowError) as e:
            raise ToolError("Fingerprinting failed: fpcalc did not return a duration") from e

        return SongDetails(duration=duration, fingerprint=fingerprint)

    def compute(self, audio_path: str) -> SongDetails:
        """
        Compute fingerprint and duration for an audio file.

        The file is expected to be validated by the caller.

        Args:
            audio_path: Path to audio file

        Returns:
            SongDetails for the file

        Raises:
            ToolError: If fpcalc is missing, fails or returns unusable output
        """
        return self._parse_output(self._run_fpcalc(audio_path))

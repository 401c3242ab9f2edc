"""Shared test fixtures for acoust tests."""

import subprocess
import sys
import wave
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add the python/ directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from acoust.identifier import AudioIdentifier


FAKE_FPCALC = "/opt/chromaprint/fpcalc"


@pytest.fixture
def wav_file(tmp_path):
    """A short silent WAV file with real RIFF/WAVE content."""
    path = tmp_path / "song.wav"
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(8000)
        w.writeframes(b"\x00\x00" * 800)
    return path


@pytest.fixture
def text_as_mp3(tmp_path):
    """A plain text file disguised with an .mp3 extension."""
    path = tmp_path / "not_really.mp3"
    path.write_text("This is just some text, not audio at all.\n" * 20)
    return path


@pytest.fixture
def fpcalc_output():
    """Factory for fake fpcalc results."""
    def _make(stdout='{"duration": 245, "fingerprint": "AQAD..."}',
              returncode=0, stderr=""):
        return subprocess.CompletedProcess(
            args=[FAKE_FPCALC, "-json"],
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
    return _make


@pytest.fixture
def http_response():
    """Factory for fake requests responses."""
    def _make(text, status_code=200):
        resp = Mock()
        resp.text = text
        resp.status_code = status_code
        return resp
    return _make


@pytest.fixture
def identifier(wav_file):
    """An AudioIdentifier configured with a valid file and API key."""
    return AudioIdentifier(str(wav_file), "test_key", fpcalc_path=FAKE_FPCALC)

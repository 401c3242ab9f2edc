"""
acoust - Audio identification with Chromaprint and AcoustID.

This package provides tools to:
- Validate that an audio file can be fingerprinted
- Compute its fingerprint and duration with fpcalc
- Look the recording up on AcoustID and check the response for errors
"""

from acoust.errors import (
    AcoustError, ValidationError, NotFoundError, FilePermissionError,
    ToolError, NetworkError, ServiceError
)
from acoust.identifier import AudioIdentifier
from acoust.models import ResponseFormat, SongDetails

__version__ = "1.0.0"

__all__ = [
    "AudioIdentifier",
    "ResponseFormat",
    "SongDetails",
    "AcoustError",
    "ValidationError",
    "NotFoundError",
    "FilePermissionError",
    "ToolError",
    "NetworkError",
    "ServiceError",
]

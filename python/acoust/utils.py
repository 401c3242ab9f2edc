"""Utility functions for acoust."""

import magic

# Content types fpcalc can decode. Detected from file content, never the extension.
ALLOWED_MIME_TYPES = frozenset({
    # MP3
    "audio/mpeg",
    "audio/mp3",
    "audio/x-mp3",
    "audio/mpeg3",
    "audio/x-mpeg",
    "audio/x-mpeg3",
    "audio/x-mpeg-3",
    "audio/mpg",
    "audio/x-mpegaudio",
    # M4A / AAC in an MP4 container
    "audio/mp4",
    "audio/x-m4a",
    "audio/m4a",
    "audio/aac",
    # WAV
    "audio/wav",
    "audio/x-wav",
    "audio/wave",
    "audio/vnd.wave",
    # Unrecognized binary data, left for fpcalc to decide
    "application/octet-stream",
})

FORMAT_NAMES = ("mp3", "m4a", "wav")


def detect_mime_type(file_path: str) -> str:
    """Detect a file's MIME type from its content using libmagic."""
    return magic.from_file(file_path, mime=True)


def is_allowed_mime_type(mime_type: str) -> bool:
    """Check if a MIME type is in the audio allow-list."""
    return (mime_type or "").lower() in ALLOWED_MIME_TYPES


def describe_allowed_formats() -> str:
    """Return a human-readable list of accepted audio formats."""
    return ", ".join(FORMAT_NAMES)

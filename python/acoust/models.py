"""Data models for acoust."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from acoust.errors import ValidationError


class ResponseFormat(Enum):
    """Body formats the identification service can respond with."""
    JSON = "json"
    XML = "xml"

    @classmethod
    def values(cls) -> list:
        """Return the accepted format names."""
        return [f.value for f in cls]

    @classmethod
    def parse(cls, value) -> "ResponseFormat":
        """
        Convert a user supplied format name into a ResponseFormat.

        Args:
            value: Format name (case-insensitive) or a ResponseFormat

        Returns:
            The matching ResponseFormat

        Raises:
            ValidationError: If the value is empty or not a known format
        """
        if isinstance(value, cls):
            return value
        if not value:
            raise ValidationError(
                "No response format set. Use one of: "
                f"{', '.join(cls.values())}"
            )
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(
                f"Invalid response format '{normalized}'. Only "
                f"{' and '.join(repr(v) for v in cls.values())} are valid response formats"
            ) from None


@dataclass
class SongDetails:
    """Fingerprint and duration produced by the fingerprinting tool."""
    duration: int
    fingerprint: str


@dataclass
class IdentificationRequest:
    """Configuration for a single lookup."""
    file_path: Optional[str] = None
    credential: Optional[str] = None
    response_format: ResponseFormat = ResponseFormat.JSON

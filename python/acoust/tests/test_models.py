"""Tests for models.py and errors.py."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from acoust.errors import (
    AcoustError, FilePermissionError, NetworkError, NotFoundError,
    ServiceError, ToolError, ValidationError
)
from acoust.models import IdentificationRequest, ResponseFormat, SongDetails


class TestResponseFormat:
    """Tests for ResponseFormat."""

    def test_values(self):
        """Should list json and xml."""
        assert ResponseFormat.values() == ["json", "xml"]

    def test_parse_strips_and_lowercases(self):
        """Should normalize user input."""
        assert ResponseFormat.parse(" JSON ") is ResponseFormat.JSON
        assert ResponseFormat.parse("xml") is ResponseFormat.XML

    def test_parse_passes_through_enum(self):
        """Should return enum members unchanged."""
        assert ResponseFormat.parse(ResponseFormat.XML) is ResponseFormat.XML

    @pytest.mark.parametrize("value", [None, ""])
    def test_parse_empty(self, value):
        """Should reject missing formats."""
        with pytest.raises(ValidationError, match="No response format"):
            ResponseFormat.parse(value)

    def test_parse_unknown_names_value(self):
        """Should echo the rejected value back."""
        with pytest.raises(ValidationError, match="'yaml'"):
            ResponseFormat.parse("YAML")


class TestIdentificationRequest:
    """Tests for IdentificationRequest defaults."""

    def test_defaults(self):
        """Should default to no file, no key and json."""
        request = IdentificationRequest()
        assert request.file_path is None
        assert request.credential is None
        assert request.response_format is ResponseFormat.JSON


class TestSongDetails:
    """Tests for SongDetails."""

    def test_equality(self):
        """Should compare by value."""
        assert SongDetails(245, "AQAD") == SongDetails(duration=245, fingerprint="AQAD")


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize("cls, kind", [
        (ValidationError, "validation"),
        (NotFoundError, "not_found"),
        (FilePermissionError, "permission"),
        (ToolError, "tool"),
        (NetworkError, "network"),
        (ServiceError, "service"),
    ])
    def test_kind_and_message(self, cls, kind):
        """Should expose kind and plain message."""
        err = cls("something went wrong")
        assert isinstance(err, AcoustError)
        assert err.kind == kind
        assert err.message == "something went wrong"
        assert str(err) == "something went wrong"

    def test_service_error_keeps_service_message(self):
        """Should carry the service's own message."""
        err = ServiceError("Identification service responded with this error: bad key",
                           service_message="bad key")
        assert err.service_message == "bad key"

    def test_not_builtin_permission_error(self):
        """Should not shadow or subclass the builtin PermissionError."""
        assert not issubclass(FilePermissionError, PermissionError)

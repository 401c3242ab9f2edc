"""AcoustID lookup client."""

import json
import os
import xml.etree.ElementTree as ET
from typing import Optional
from urllib.parse import quote

import requests

from acoust.errors import (
    FilePermissionError, NetworkError, NotFoundError, ServiceError, ValidationError
)
from acoust.fingerprinter import Fingerprinter
from acoust.models import IdentificationRequest, ResponseFormat, SongDetails
from acoust.utils import describe_allowed_formats, detect_mime_type, is_allowed_mime_type

LOOKUP_URL = "https://api.acoustid.org/v2/lookup"
LOOKUP_META = "recordings+compress"


class AudioIdentifier:
    """Identifies an audio file by fingerprint through the AcoustID service.

    Example:
        >>> identifier = AudioIdentifier("/music/track.mp3", "my-api-key")
        >>> body = identifier.query()

    An instance holds mutable configuration and is not safe to share
    between threads; use one instance per concurrent lookup.
    """

    def __init__(self, file_path: Optional[str] = None,
                 credential: Optional[str] = None,
                 response_format: str = "json",
                 *,
                 fpcalc_path: Optional[str] = None,
                 timeout: float = 15,
                 lookup_url: str = LOOKUP_URL):
        """
        Initialize identifier.

        The file and credential are validated when they are used. The
        response format is validated right away.

        Args:
            file_path: Path to the audio file to identify
            credential: AcoustID application API key
            response_format: 'json' (default) or 'xml'
            fpcalc_path: Location of the fpcalc binary
            timeout: Seconds to wait for fpcalc and for the HTTP response
            lookup_url: Lookup endpoint of the identification service
        """
        self.request = IdentificationRequest(
            file_path=file_path,
            credential=credential,
            response_format=ResponseFormat.parse(response_format),
        )
        self.timeout = timeout
        self.lookup_url = lookup_url
        self.fingerprinter = Fingerprinter(fpcalc_path, timeout=timeout)

    @property
    def file_path(self) -> Optional[str]:
        return self.request.file_path

    @property
    def response_format(self) -> str:
        return self.request.response_format.value

    # Configuration

    def set_file(self, file_path: str) -> "AudioIdentifier":
        """
        Set the audio file to identify.

        The file is validated before it replaces the current one, so a
        rejected path leaves the previous file in place.

        Raises:
            ValidationError, NotFoundError, FilePermissionError
        """
        self.validate_file(file_path)
        self.request.file_path = file_path
        return self

    def set_credential(self, credential: str) -> "AudioIdentifier":
        """Set the AcoustID API key. Checked only when a lookup is made."""
        self.request.credential = credential
        return self

    def set_response_format(self, response_format: str) -> "AudioIdentifier":
        """
        Set the format the service should respond in ('json' or 'xml').

        Raises:
            ValidationError: If the format is not recognized (current format is kept)
        """
        self.request.response_format = ResponseFormat.parse(response_format)
        return self

    def get_credential(self) -> str:
        """Return the API key, raising ValidationError if none was set."""
        if self.request.credential is None:
            raise ValidationError("No API key has been set")
        return self.request.credential

    # Validation

    def validate_file(self, file_path: Optional[str] = None) -> bool:
        """
        Check that a file can be fingerprinted.

        Checks run in order and stop at the first failure: path given,
        path exists, path readable, path is a regular file, content type
        is an accepted audio type.

        Args:
            file_path: Path to check (defaults to the configured file)

        Returns:
            True if the file is usable
        """
        path = self.request.file_path if file_path is None else file_path

        if not path:
            raise ValidationError(
                "No file provided. Pass it to the constructor or call set_file()"
            )
        if not os.path.exists(path):
            raise NotFoundError(f"Could not find the file: {path}")
        if not os.access(path, os.R_OK):
            raise FilePermissionError(f"No read permission on the file: {path}")
        if not os.path.isfile(path):
            raise ValidationError(
                f"Not a file: {path} appears to be a directory, provide a path to an audio file"
            )

        mime_type = detect_mime_type(path)
        if not is_allowed_mime_type(mime_type):
            raise ValidationError(
                f"Unsupported format: detected '{mime_type}'. Accepted formats are "
                f"{describe_allowed_formats()}, judged by file content, not extension"
            )

        return True

    def validate_credential(self) -> bool:
        """Ensure an API key has been set."""
        if not self.request.credential:
            raise ValidationError(
                "No AcoustID API key provided. Pass it to the constructor or call "
                "set_credential(). Keys are available from https://acoustid.org"
            )
        return True

    def validate_response_format(self, response_format=None) -> bool:
        """Ensure the response format is 'json' or 'xml'."""
        value = self.request.response_format if response_format is None else response_format
        ResponseFormat.parse(value)
        return True

    # Fingerprinting

    def compute_song_details(self) -> SongDetails:
        """
        Validate the configured file and compute its fingerprint and duration.

        Nothing is cached; every call runs fpcalc again.

        Raises:
            ValidationError, NotFoundError, FilePermissionError, ToolError
        """
        self.validate_file()
        return self.fingerprinter.compute(self.request.file_path)

    def get_fingerprint(self, file_path: Optional[str] = None) -> str:
        """Return the fingerprint of the given (or configured) file."""
        if file_path is not None:
            self.set_file(file_path)
        return self.compute_song_details().fingerprint

    def get_duration(self, file_path: Optional[str] = None) -> int:
        """Return the duration in seconds of the given (or configured) file."""
        if file_path is not None:
            self.set_file(file_path)
        return self.compute_song_details().duration

    # Lookup

    def build_lookup_url(self, details: SongDetails) -> str:
        """
        Build the lookup URL for a fingerprinted song.

        Only the fingerprint is percent-encoded; the other values are sent as is.
        """
        return (
            f"{self.lookup_url}"
            f"?client={self.request.credential}"
            f"&duration={details.duration}"
            f"&fingerprint={quote(details.fingerprint, safe='')}"
            f"&meta={LOOKUP_META}"
            f"&format={self.response_format}"
        )

    def query(self) -> str:
        """
        Look up the configured file on the identification service.

        Returns:
            The raw response body, in the configured format

        Raises:
            ValidationError: Missing API key or bad response format (checked in that order)
            NotFoundError, FilePermissionError: File problems
            ToolError: fpcalc failed
            NetworkError: The service could not be reached
            ServiceError: The service responded with an error status
        """
        self.validate_credential()
        self.validate_response_format()

        details = self.compute_song_details()
        url = self.build_lookup_url(details)

        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Could not reach identification service: {e}") from e

        body = resp.text
        if not body:
            raise NetworkError(
                "Could not reach identification service: empty response "
                f"(HTTP {resp.status_code})"
            )

        return self._parse_response(body)

    def _parse_response(self, body: str) -> str:
        """
        Check a response body for an error status.

        Args:
            body: Raw response body

        Returns:
            The body unchanged if the service did not report an error
        """
        if self.request.response_format is ResponseFormat.XML:
            status, message = self._read_xml_status(body)
        else:
            status, message = self._read_json_status(body)

        if (status or "").strip().lower() == "error":
            message = message or "unknown error"
            raise ServiceError(
                f"Identification service responded with this error: {message}",
                service_message=message,
            )

        return body

    def _read_json_status(self, body: str):
        """Return (status, error message) from a JSON body."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ServiceError(
                f"Identification service returned an unreadable JSON response: {e}"
            ) from e

        if not isinstance(data, dict):
            return None, None

        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
        else:
            message = error
        status = data.get("status")
        return (str(status) if status is not None else None,
                str(message) if message is not None else None)

    def _read_xml_status(self, body: str):
        """Return (status, error message) from an XML body."""
        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            raise ServiceError(
                f"Identification service returned an unreadable XML response: {e}"
            ) from e

        return root.findtext("status"), root.findtext("error/message")

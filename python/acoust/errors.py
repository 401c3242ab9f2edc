"""Error types raised by acoust."""


class AcoustError(Exception):
    """Base class for all acoust errors.

    Every error carries a short ``kind`` identifier and a plain-text
    ``message`` so callers can decide how to present it.
    """
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AcoustError):
    """Missing or invalid configuration (file, credential, response format)."""
    kind = "validation"


class NotFoundError(AcoustError):
    """The audio file does not exist."""
    kind = "not_found"


class FilePermissionError(AcoustError):
    """The audio file exists but cannot be read."""
    kind = "permission"


class ToolError(AcoustError):
    """The fingerprinting tool could not produce a fingerprint."""
    kind = "tool"


class NetworkError(AcoustError):
    """The identification service could not be reached."""
    kind = "network"


class ServiceError(AcoustError):
    """The identification service reported an error or sent an unusable body."""
    kind = "service"

    def __init__(self, message: str, service_message: str = None):
        super().__init__(message)
        self.service_message = service_message

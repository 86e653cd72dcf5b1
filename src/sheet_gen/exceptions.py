"""Custom exceptions for the sheet-gen client."""


class ValidationError(Exception):
    """Raised when a submission is rejected before any network activity."""

    EMPTY_URL = "empty_url"
    FILE_TOO_LARGE = "file_too_large"

    _MESSAGES = {
        EMPTY_URL: "Please enter a video link",
        FILE_TOO_LARGE: "File is larger than the 100 MB upload limit",
    }

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self._MESSAGES.get(reason, f"Invalid submission: {reason}"))


class TransportError(Exception):
    """Base class for classified failures of a remote call."""

    kind = "network"

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class TranscriptionTimeoutError(TransportError):
    """Raised when a call exceeds its ceiling timeout."""

    kind = "timeout"

    def __init__(self, timeout_seconds: float, cause: Exception | None = None):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Transcription timed out after {timeout_seconds:g} seconds", cause
        )


class NetworkError(TransportError):
    """Raised when the service cannot be reached or answers unintelligibly."""

    kind = "network"

    def __init__(self, cause: Exception | None = None):
        super().__init__(
            "Failed to generate sheet music. Ensure backend is running.", cause
        )


class ServerError(TransportError):
    """Raised when the service rejects a call with a structured message."""

    kind = "server"

    def __init__(
        self, detail: str, status_code: int | None = None, cause: Exception | None = None
    ):
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"Server error: {detail}", cause)


class EmptyResultError(Exception):
    """Raised when a call succeeded but carried no usable notation document."""

    kind = "empty_result"

    def __init__(self, cause: Exception | None = None):
        self.cause = cause
        super().__init__("No sheet music generated")


class RenderError(Exception):
    """Raised when the isolated renderer cannot draw a document."""

    LOAD = "load"
    LAYOUT = "layout"
    UNKNOWN = "unknown"
    TIMEOUT = "timeout"

    def __init__(self, stage: str, message: str, cause: Exception | None = None):
        self.stage = stage
        self.cause = cause
        super().__init__(message)


class MediaSourceError(Exception):
    """Raised when a local media selection cannot be turned into a descriptor."""

    def __init__(self, selection: str, cause: Exception | None = None):
        self.selection = selection
        self.cause = cause
        super().__init__(f"Cannot read media source '{selection}'")

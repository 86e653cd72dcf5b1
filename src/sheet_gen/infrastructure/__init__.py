"""Infrastructure layer exports."""

from .http_transport import HttpTranscriptionTransport
from .media_sources import LinkSourceProvider, LocalFileSourceProvider

__all__ = ["HttpTranscriptionTransport", "LinkSourceProvider", "LocalFileSourceProvider"]

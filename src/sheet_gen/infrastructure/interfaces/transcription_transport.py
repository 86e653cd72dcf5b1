"""Abstract interface for the remote transcription service."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from sheet_gen.domain.models import MediaDescriptor, TranscriptionResponse

ProgressCallback = Callable[[int], None]


class TranscriptionTransport(ABC):
    """Abstract base class for transcription service clients."""

    @abstractmethod
    def transcribe_link(self, url: str) -> TranscriptionResponse:
        """
        Requests a transcription of a hosted video.

        Args:
            url: Link to the hosted video.

        Returns:
            The parsed service response.

        Raises:
            TranscriptionTimeoutError: If the ceiling timeout is exceeded.
            ServerError: If the service answered with a structured error.
            NetworkError: For any other failure.
        """

    @abstractmethod
    def transcribe_upload(
        self, descriptor: MediaDescriptor, on_progress: ProgressCallback
    ) -> TranscriptionResponse:
        """
        Uploads a local file and requests its transcription.

        Args:
            descriptor: Descriptor of the local file.
            on_progress: Receives non-decreasing upload percentages ending at 100.

        Returns:
            The parsed service response.

        Raises:
            TranscriptionTimeoutError: If the ceiling timeout is exceeded.
            ServerError: If the service answered with a structured error.
            NetworkError: For any other failure.
        """

    @abstractmethod
    def health_check(self) -> bool:
        """Returns True when the service answers with any 2xx status."""

"""Abstract interface for acquiring user-selected media."""

from abc import ABC, abstractmethod

from sheet_gen.domain.models import MediaDescriptor


class MediaSourceProvider(ABC):
    """Abstract base class for turning a user selection into a media descriptor."""

    @abstractmethod
    def acquire(self, selection: str) -> MediaDescriptor:
        """
        Normalizes a user selection into a descriptor.

        Args:
            selection: The link text or file location chosen by the user.

        Returns:
            An immutable media descriptor.

        Raises:
            MediaSourceError: If the selection cannot be read.
        """

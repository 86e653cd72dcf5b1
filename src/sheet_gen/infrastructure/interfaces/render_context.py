"""Abstract interface for an isolated rendering context."""

from abc import ABC, abstractmethod


class RenderContext(ABC):
    """Abstract base class for a one-way message channel to a renderer."""

    @abstractmethod
    def start(self) -> None:
        """Starts the isolated context if it is not already running."""

    @abstractmethod
    def send(self, message: str) -> None:
        """
        Posts a command to the renderer without waiting for it.

        Args:
            message: JSON-encoded command.
        """

    @abstractmethod
    def receive(self, timeout: float) -> str | None:
        """
        Waits for the next event from the renderer.

        Args:
            timeout: Seconds to wait.

        Returns:
            JSON-encoded event, or None when nothing arrived in time.
        """

    @abstractmethod
    def close(self) -> None:
        """Stops the isolated context."""

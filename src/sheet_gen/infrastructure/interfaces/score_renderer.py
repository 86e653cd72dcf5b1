"""Abstract interface for notation rendering libraries."""

from abc import ABC, abstractmethod


class ScoreRenderer(ABC):
    """Abstract base class for a renderer bound to one drawing surface."""

    @abstractmethod
    def load(self, document: str) -> None:
        """
        Parses a notation document.

        Raises:
            Exception: Any parser failure, reported as a load error.
        """

    @abstractmethod
    def render(self) -> str:
        """
        Lays out and draws the loaded document onto the surface.

        Returns:
            Location of the drawn surface.

        Raises:
            Exception: Any layout failure, reported as a layout error.
        """

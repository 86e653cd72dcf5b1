"""music21 implementation of the ScoreRenderer interface."""

from pathlib import Path

from music21 import converter

from .interfaces import ScoreRenderer


class Music21ScoreRenderer(ScoreRenderer):
    """
    Parses MusicXML with music21 and writes the laid-out score to a surface file.

    The output format is any music21 writer format; "musicxml" needs no external
    tools, while "musicxml.png" or "lily.pdf" use a configured MuseScore or
    LilyPond installation.
    """

    def __init__(self, surface: str, output_format: str = "musicxml"):
        self._surface = Path(surface)
        self._output_format = output_format
        self._score = None

    def load(self, document: str) -> None:
        self._score = converter.parseData(document, format="musicxml")

    def render(self) -> str:
        if self._score is None:
            raise RuntimeError("No score loaded")
        self._surface.parent.mkdir(parents=True, exist_ok=True)
        written = self._score.write(self._output_format, fp=self._surface)
        return str(written)

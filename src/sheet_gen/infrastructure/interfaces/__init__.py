"""Infrastructure interface exports."""

from .media_source import MediaSourceProvider
from .render_context import RenderContext
from .score_renderer import ScoreRenderer
from .transcription_transport import ProgressCallback, TranscriptionTransport

__all__ = [
    "MediaSourceProvider",
    "RenderContext",
    "ScoreRenderer",
    "TranscriptionTransport",
    "ProgressCallback",
]

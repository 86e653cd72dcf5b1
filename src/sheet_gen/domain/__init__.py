"""Domain layer exports."""

from .exporter import MUSICXML_MIME_TYPE, ResultExporter
from .models import (
    ErrorInfo,
    ExportArtifact,
    JobStatus,
    MediaDescriptor,
    RenderOutcome,
    RenderStatus,
    SongMetadata,
    SourceKind,
    TranscriptionJob,
    TranscriptionResponse,
)
from .phases import LINK_PHASES, UPLOAD_PHASES, phase_for, phase_index

__all__ = [
    "ErrorInfo",
    "ExportArtifact",
    "JobStatus",
    "MediaDescriptor",
    "RenderOutcome",
    "RenderStatus",
    "SongMetadata",
    "SourceKind",
    "TranscriptionJob",
    "TranscriptionResponse",
    "ResultExporter",
    "MUSICXML_MIME_TYPE",
    "LINK_PHASES",
    "UPLOAD_PHASES",
    "phase_for",
    "phase_index",
]

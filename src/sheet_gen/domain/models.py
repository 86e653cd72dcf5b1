"""Domain models for the sheet-gen client."""

from enum import Enum

from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    URL = "url"
    LOCAL_FILE = "local_file"


class JobStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({JobStatus.DONE, JobStatus.FAILED})


class MediaDescriptor(BaseModel, frozen=True):
    """Source-agnostic handle to a link or file pending submission."""

    source_kind: SourceKind
    uri: str
    name: str
    size: int = Field(default=0, ge=0)
    mime_type: str = "application/octet-stream"


class SongMetadata(BaseModel, frozen=True):
    """Song recognized by the service alongside the transcription."""

    title: str | None = None
    artist: str | None = None


class TranscriptionResponse(BaseModel, frozen=True):
    """Body returned by both transcription endpoints."""

    musicxml: str | None = None
    recognized: bool = False
    metadata: SongMetadata | None = None


class ErrorInfo(BaseModel, frozen=True):
    """Classified failure stored on a job."""

    kind: str
    message: str
    detail: str | None = None


class TranscriptionJob(BaseModel):
    """The single live transcription job, mutated only by the orchestrator."""

    job_id: str = ""
    source_kind: SourceKind | None = None
    status: JobStatus = JobStatus.IDLE
    progress: int = Field(default=0, ge=0, le=100)
    phase_message: str = ""
    result: str | None = None
    error: ErrorInfo | None = None
    recognized_metadata: SongMetadata | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class RenderStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class RenderOutcome(BaseModel, frozen=True):
    """Single outcome of one render attempt."""

    status: RenderStatus
    message: str | None = None
    stage: str | None = None


class ExportArtifact(BaseModel, frozen=True):
    """Downloadable notation file."""

    filename: str
    mime_type: str
    content: bytes

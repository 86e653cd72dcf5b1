"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel

MAX_UPLOAD_BYTES = 100 * 1024 * 1024


class ApiConfig(BaseModel, frozen=True):
    """Remote transcription service connection configuration."""

    base_url: str = "http://localhost:8000"
    request_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0
    transcription_timeout_seconds: float = 300.0
    link_path: str = "/transcribe/youtube"
    upload_path: str = "/transcribe/upload"
    health_path: str = "/health"
    browse_path: str = "/browse/violin"
    search_path: str = "/search/imslp"
    upload_field_name: str = "file"


class JobConfig(BaseModel, frozen=True):
    """Transcription job lifecycle configuration."""

    max_upload_bytes: int = MAX_UPLOAD_BYTES
    phase_tick_seconds: float = 1.0
    worker_threads: int = 2


class RenderConfig(BaseModel, frozen=True):
    """Isolated renderer configuration."""

    render_timeout_seconds: float = 30.0
    output_format: str = "musicxml"
    surface_dir: str | None = None


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    api: ApiConfig = ApiConfig()
    job: JobConfig = JobConfig()
    render: RenderConfig = RenderConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        api=ApiConfig(
            base_url=os.getenv("SHEET_GEN_API_URL", "http://localhost:8000"),
            request_timeout_seconds=float(
                os.getenv("SHEET_GEN_REQUEST_TIMEOUT", "30")
            ),
            transcription_timeout_seconds=float(
                os.getenv("SHEET_GEN_TRANSCRIPTION_TIMEOUT", "300")
            ),
        ),
        job=JobConfig(
            phase_tick_seconds=float(os.getenv("SHEET_GEN_PHASE_TICK", "1")),
        ),
        render=RenderConfig(
            render_timeout_seconds=float(os.getenv("SHEET_GEN_RENDER_TIMEOUT", "30")),
            output_format=os.getenv("SHEET_GEN_RENDER_FORMAT", "musicxml"),
            surface_dir=os.getenv("SHEET_GEN_SURFACE_DIR") or None,
        ),
    )

from sheet_gen.config import ApiConfig, AppConfig, JobConfig, RenderConfig, load_config
from sheet_gen.exceptions import (
    EmptyResultError,
    MediaSourceError,
    NetworkError,
    RenderError,
    ServerError,
    TranscriptionTimeoutError,
    TransportError,
    ValidationError,
)
from sheet_gen.logging import setup_logging

__all__ = [
    "setup_logging",
    "load_config",
    "AppConfig",
    "ApiConfig",
    "JobConfig",
    "RenderConfig",
    "ValidationError",
    "TransportError",
    "TranscriptionTimeoutError",
    "NetworkError",
    "ServerError",
    "EmptyResultError",
    "RenderError",
    "MediaSourceError",
]

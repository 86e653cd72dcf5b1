"""Dependency injection configuration for the sheet-gen client."""

import tempfile
from functools import partial
from pathlib import Path

import requests

from sheet_gen.bridge import ProcessRenderContext, RenderingBridge
from sheet_gen.config import load_config
from sheet_gen.domain import ResultExporter, SourceKind
from sheet_gen.handlers import TranscriptionOrchestrator
from sheet_gen.infrastructure import (
    HttpTranscriptionTransport,
    LinkSourceProvider,
    LocalFileSourceProvider,
)
from sheet_gen.infrastructure.interfaces import MediaSourceProvider
from sheet_gen.infrastructure.music21_renderer import Music21ScoreRenderer
from sheet_gen.logging import setup_logging

logger = setup_logging()

_config = load_config()

# HTTP setup
_session = requests.Session()
_session.headers.update({"Accept": "application/json"})
_transport = HttpTranscriptionTransport(_session, _config.api)

# Media source variants
_providers: dict[SourceKind, MediaSourceProvider] = {
    SourceKind.URL: LinkSourceProvider(),
    SourceKind.LOCAL_FILE: LocalFileSourceProvider(),
}


def get_transport() -> HttpTranscriptionTransport:
    """Returns the configured transcription transport."""
    return _transport


def get_media_source_provider(kind: SourceKind) -> MediaSourceProvider:
    """Returns the media source provider for a kind of selection."""
    return _providers[kind]


def get_orchestrator() -> TranscriptionOrchestrator:
    """Returns a new orchestrator bound to the configured transport."""
    return TranscriptionOrchestrator(_transport, _config.job)


def get_exporter() -> ResultExporter:
    """Returns the result exporter."""
    return ResultExporter()


def get_rendering_bridge() -> RenderingBridge:
    """Returns a rendering bridge backed by an isolated music21 renderer process."""
    surface_dir = Path(_config.render.surface_dir or tempfile.mkdtemp(prefix="sheet-gen-"))
    extension = _config.render.output_format.split(".")[-1]
    renderer_factory = partial(
        Music21ScoreRenderer,
        surface=str(surface_dir / f"score.{extension}"),
        output_format=_config.render.output_format,
    )
    logger.info("Render surface configured", extra={"surface_dir": str(surface_dir)})
    return RenderingBridge(ProcessRenderContext(renderer_factory), _config.render)

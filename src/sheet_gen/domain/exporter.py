"""Builds downloadable artifacts from a notation document."""

from datetime import datetime
from pathlib import Path

from .models import ExportArtifact

MUSICXML_MIME_TYPE = "application/vnd.recordare.musicxml+xml"


class ResultExporter:
    """Turns a notation document into a timestamped MusicXML file."""

    def __init__(self, prefix: str = "sheet_music"):
        self._prefix = prefix

    def export_artifact(
        self, doc: str | None, created_at: datetime | None = None
    ) -> ExportArtifact | None:
        """
        Packages a notation document for download.

        Args:
            doc: The MusicXML text.
            created_at: Creation time used in the file name, defaults to now.

        Returns:
            The artifact, or None when there is nothing to export.
        """
        if not doc:
            return None

        stamp = (created_at or datetime.now()).strftime("%Y%m%d-%H%M%S")
        return ExportArtifact(
            filename=f"{self._prefix}_{stamp}.musicxml",
            mime_type=MUSICXML_MIME_TYPE,
            content=doc.encode("utf-8"),
        )

    def write_artifact(self, artifact: ExportArtifact, directory: Path) -> Path:
        """Writes an artifact into a directory and returns its path."""
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / artifact.filename
        target.write_bytes(artifact.content)
        return target

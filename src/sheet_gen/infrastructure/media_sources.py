"""Media source providers for links and local files."""

import mimetypes
from pathlib import Path

from sheet_gen.domain.models import MediaDescriptor, SourceKind
from sheet_gen.exceptions import MediaSourceError
from sheet_gen.logging import setup_logging

from .interfaces import MediaSourceProvider

logger = setup_logging()


class LinkSourceProvider(MediaSourceProvider):
    """Wraps a pasted video link."""

    def acquire(self, selection: str) -> MediaDescriptor:
        link = selection.strip()
        return MediaDescriptor(
            source_kind=SourceKind.URL,
            uri=link,
            name=link,
            size=0,
            mime_type="text/uri-list",
        )


class LocalFileSourceProvider(MediaSourceProvider):
    """Describes an audio or video file picked from the local filesystem."""

    def acquire(self, selection: str) -> MediaDescriptor:
        path = Path(selection).expanduser()
        try:
            stat = path.stat()
        except OSError as e:
            logger.exception("Local media selection unreadable", extra={"path": selection})
            raise MediaSourceError(selection, e) from e

        if not path.is_file():
            raise MediaSourceError(selection)

        mime_type, _ = mimetypes.guess_type(path.name)
        descriptor = MediaDescriptor(
            source_kind=SourceKind.LOCAL_FILE,
            uri=str(path.resolve()),
            name=path.name,
            size=stat.st_size,
            mime_type=mime_type or "application/octet-stream",
        )
        logger.info(
            "Local media selected",
            extra={"file_name": descriptor.name, "size": descriptor.size},
        )
        return descriptor

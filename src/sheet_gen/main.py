"""
Sheet Gen client.

Command line entry point: turns a video link or a local audio/video file into
sheet music through the remote transcription service.
"""

import argparse
import json
import sys
from pathlib import Path

from ddtrace import patch

from sheet_gen.bridge import build_viewer_page
from sheet_gen.dependencies import (
    get_exporter,
    get_media_source_provider,
    get_orchestrator,
    get_rendering_bridge,
    get_transport,
)
from sheet_gen.domain import JobStatus, SourceKind, TranscriptionJob
from sheet_gen.domain.models import RenderStatus
from sheet_gen.exceptions import MediaSourceError, TransportError, ValidationError
from sheet_gen.logging import setup_logging

patch(requests=True)

logger = setup_logging()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sheet-gen", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("link", "Transcribe a hosted video link"),
        ("file", "Upload and transcribe a local audio/video file"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("source")
        command.add_argument("--out", type=Path, default=Path("."), help="Download directory")
        command.add_argument("--render", action="store_true", help="Render the score after download")
        command.add_argument("--html", type=Path, help="Also write a browser viewer page here")

    commands.add_parser("health", help="Check that the service is reachable")
    commands.add_parser("browse", help="List the service's catalog")
    search = commands.add_parser("search", help="Search the service's score catalog")
    search.add_argument("keyword")
    return parser.parse_args(argv)


def _report(job: TranscriptionJob) -> None:
    if job.status is JobStatus.UPLOADING:
        logger.info("Uploading", extra={"job_id": job.job_id, "progress": job.progress})
    else:
        logger.info(job.phase_message, extra={"job_id": job.job_id, "status": job.status.value})


def _transcribe(args: argparse.Namespace) -> int:
    kind = SourceKind.URL if args.command == "link" else SourceKind.LOCAL_FILE
    try:
        descriptor = get_media_source_provider(kind).acquire(args.source)
    except MediaSourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    orchestrator = get_orchestrator()
    orchestrator.add_listener(_report)
    try:
        job = orchestrator.submit(descriptor).result()
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    finally:
        orchestrator.shutdown()

    if job.status is not JobStatus.DONE:
        print(f"Error: {job.error.message if job.error else 'Failed'}", file=sys.stderr)
        return 1

    if job.recognized_metadata is not None:
        print(f"Recognized: {job.recognized_metadata.title} - {job.recognized_metadata.artist}")

    exporter = get_exporter()
    artifact = exporter.export_artifact(job.result)
    path = exporter.write_artifact(artifact, args.out)
    print(f"Saved {path}")

    if args.html:
        args.html.write_text(build_viewer_page(job.result), encoding="utf-8")
        print(f"Viewer page {args.html}")

    if args.render:
        bridge = get_rendering_bridge()
        try:
            bridge.present(job.result)
            outcome = bridge.wait_for_outcome()
        finally:
            bridge.close()
        if outcome.status is RenderStatus.ERROR:
            print(f"Render error ({outcome.stage}): {outcome.message}", file=sys.stderr)
            return 1
        print(f"Rendered {bridge.view.surface}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Runs the command line client."""
    args = _parse_args(argv)

    if args.command == "health":
        reachable = get_transport().health_check()
        print("reachable" if reachable else "unreachable")
        return 0 if reachable else 1

    if args.command in ("browse", "search"):
        try:
            if args.command == "browse":
                listing = get_transport().browse_catalog()
            else:
                listing = get_transport().search(args.keyword)
        except TransportError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(json.dumps(listing, indent=2))
        return 0

    return _transcribe(args)


if __name__ == "__main__":
    sys.exit(main())

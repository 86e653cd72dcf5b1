"""Phase narration tables for the opaque remote transcription step."""

from collections.abc import Sequence

Phase = tuple[float, str]

_SHARED_PHASES: tuple[Phase, ...] = (
    (10.0, "Transcribing to MIDI... (this takes ~30s)"),
    (30.0, "Converting to Sheet Music..."),
    (60.0, "Still working, longer pieces take a few minutes..."),
    (120.0, "Almost there, finalizing the score..."),
)

LINK_PHASES: tuple[Phase, ...] = ((0.0, "Downloading audio..."),) + _SHARED_PHASES
UPLOAD_PHASES: tuple[Phase, ...] = ((0.0, "Analyzing uploaded audio..."),) + _SHARED_PHASES

UPLOADING_MESSAGE = "Uploading file..."
DONE_MESSAGE = "Done!"
FAILED_MESSAGE = "Failed"


def phase_index(elapsed_seconds: float, phases: Sequence[Phase]) -> int:
    """
    Returns the index of the largest threshold not exceeding the elapsed time.

    Args:
        elapsed_seconds: Seconds since narration started.
        phases: Table of (threshold_seconds, text) pairs in ascending order.

    Returns:
        The matching index, or 0 before any threshold.
    """
    if not phases:
        raise ValueError("phase table must not be empty")

    selected = 0
    for index, (threshold, _) in enumerate(phases):
        if threshold > elapsed_seconds:
            break
        selected = index
    return selected


def phase_for(elapsed_seconds: float, phases: Sequence[Phase]) -> str:
    """Returns the phase text shown after elapsed_seconds."""
    return phases[phase_index(elapsed_seconds, phases)][1]

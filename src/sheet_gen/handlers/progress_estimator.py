"""Timer-driven phase narration for the remote transcription step."""

import threading
from collections.abc import Callable, Sequence

from sheet_gen.domain.phases import Phase, phase_index
from sheet_gen.logging import setup_logging

logger = setup_logging()


class ProgressEstimator:
    """
    Narrates an opaque remote computation with phase text picked by elapsed time.

    One estimator owns one repeating timer thread. It is started once and
    stopped once; a stopped estimator never reports another phase.
    """

    def __init__(
        self,
        phases: Sequence[Phase],
        on_phase: Callable[[str], None],
        tick_seconds: float = 1.0,
    ):
        if not phases:
            raise ValueError("phase table must not be empty")
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")

        self._phases = tuple(phases)
        self._on_phase = on_phase
        self._tick_seconds = tick_seconds
        self._elapsed = 0.0
        self._index = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed

    @property
    def phase_message(self) -> str:
        return self._phases[self._index][1]

    @property
    def is_active(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        """Reports the first phase and starts the repeating timer."""
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("ProgressEstimator can only be started once")
            self._thread = threading.Thread(
                target=self._run, name="progress-estimator", daemon=True
            )
            self._thread.start()
        self._on_phase(self.phase_message)

    def stop(self) -> None:
        """Cancels the timer; safe to call more than once."""
        self._stop_event.set()

    def tick(self) -> str:
        """
        Advances the elapsed counter by one interval.

        Returns:
            The current phase text, which only changes when a threshold is reached.
        """
        with self._lock:
            if self._stop_event.is_set():
                return self.phase_message
            self._elapsed += self._tick_seconds
            next_index = max(self._index, phase_index(self._elapsed, self._phases))
            changed = next_index != self._index
            self._index = next_index
            message = self.phase_message

        if changed:
            logger.info(
                "Transcription phase advanced",
                extra={"phase": message, "elapsed_seconds": self._elapsed},
            )
            self._on_phase(message)
        return message

    def _run(self) -> None:
        while not self._stop_event.wait(self._tick_seconds):
            self.tick()

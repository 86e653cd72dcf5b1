"""Process-isolated rendering context."""

import multiprocessing
import queue
from collections.abc import Callable

from sheet_gen.infrastructure.interfaces import RenderContext, ScoreRenderer
from sheet_gen.logging import setup_logging

from .actor import SHUTDOWN, run_renderer_actor

logger = setup_logging()


class ProcessRenderContext(RenderContext):
    """Runs the renderer actor in its own process, talking over queues."""

    def __init__(
        self,
        renderer_factory: Callable[[], ScoreRenderer],
        start_method: str = "spawn",
        shutdown_timeout_seconds: float = 5.0,
    ):
        self._renderer_factory = renderer_factory
        self._mp = multiprocessing.get_context(start_method)
        self._shutdown_timeout_seconds = shutdown_timeout_seconds
        self._process = None
        self._inbox = None
        self._outbox = None

    @property
    def is_alive(self) -> bool:
        return self._process is not None and self._process.is_alive()

    def start(self) -> None:
        if self.is_alive:
            return
        self._inbox = self._mp.Queue()
        self._outbox = self._mp.Queue()
        self._process = self._mp.Process(
            target=run_renderer_actor,
            args=(self._inbox, self._outbox, self._renderer_factory),
            name="score-renderer",
            daemon=True,
        )
        self._process.start()
        logger.info("Renderer process started", extra={"pid": self._process.pid})

    def send(self, message: str) -> None:
        self.start()
        self._inbox.put(message)

    def receive(self, timeout: float) -> str | None:
        if self._outbox is None:
            return None
        try:
            return self._outbox.get(timeout=max(0.0, timeout))
        except queue.Empty:
            return None

    def close(self) -> None:
        if self._process is None:
            return
        if self._process.is_alive():
            self._inbox.put(SHUTDOWN)
            self._process.join(self._shutdown_timeout_seconds)
        if self._process.is_alive():
            logger.warning("Renderer process did not stop, terminating")
            self._process.terminate()
            self._process.join()
        self._process = None

"""Host side of the rendering bridge."""

import threading
import time
from enum import Enum

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from sheet_gen.config import RenderConfig
from sheet_gen.domain.models import RenderOutcome, RenderStatus
from sheet_gen.exceptions import RenderError
from sheet_gen.infrastructure.interfaces import RenderContext
from sheet_gen.logging import setup_logging

from .codec import encode_payload
from .messages import LoadCommand, RenderEvent

logger = setup_logging()


class RenderState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"
    ERRORED = "errored"


class RenderView(BaseModel, frozen=True):
    """What the presentation layer shows for the latest attempt."""

    state: RenderState = RenderState.IDLE
    attempt_id: int = 0
    surface: str | None = None
    error_message: str | None = None
    error_stage: str | None = None

    @property
    def shows_score(self) -> bool:
        return self.state is RenderState.RENDERED


class RenderingBridge:
    """
    Moves notation documents into an isolated renderer and applies its outcomes.

    Each present() call is a new attempt: idle -> loading -> rendered | errored.
    Outcome events are applied idempotently: duplicates, events for older
    attempts and events arriving after the attempt settled are ignored. A
    renderer that stays silent past the render timeout errors the attempt.
    """

    def __init__(self, context: RenderContext, config: RenderConfig):
        self._context = context
        self._config = config
        self._lock = threading.Lock()
        self._view = RenderView()
        self._outcome: RenderOutcome | None = None

    @property
    def view(self) -> RenderView:
        return self._view

    @property
    def outcome(self) -> RenderOutcome | None:
        return self._outcome

    def present(self, document: str) -> int:
        """
        Sends a document to the renderer.

        Args:
            document: Non-empty MusicXML text.

        Returns:
            The id of the new render attempt.

        Raises:
            Exception: Whatever the render context raised while sending; the
                attempt is errored before it propagates.
        """
        if not document or not document.strip():
            raise ValueError("document must be a non-empty string")

        with self._lock:
            attempt_id = self._view.attempt_id + 1
            self._view = RenderView(state=RenderState.LOADING, attempt_id=attempt_id)
            self._outcome = None

        command = LoadCommand(attempt_id=attempt_id, payload=encode_payload(document))
        try:
            self._context.send(command.model_dump_json())
        except Exception as e:
            logger.exception("Sending render command failed", extra={"attempt_id": attempt_id})
            self._settle_error(attempt_id, str(e) or type(e).__name__, RenderError.UNKNOWN)
            raise
        logger.info(
            "Render attempt started",
            extra={"attempt_id": attempt_id, "document_length": len(document)},
        )
        return attempt_id

    def apply_event(self, raw: str) -> RenderView:
        """
        Applies one renderer event.

        Args:
            raw: JSON-encoded RenderEvent.

        Returns:
            The view after applying the event.
        """
        try:
            event = RenderEvent.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Malformed render event ignored", extra={"event": raw[:200]})
            return self._view

        with self._lock:
            current = self._view
            if event.attempt_id != current.attempt_id or current.state is not RenderState.LOADING:
                logger.info(
                    "Render event ignored",
                    extra={
                        "event_attempt_id": event.attempt_id,
                        "attempt_id": current.attempt_id,
                        "state": current.state.value,
                    },
                )
                return current

            if event.type == "success":
                self._view = RenderView(
                    state=RenderState.RENDERED,
                    attempt_id=current.attempt_id,
                    surface=event.surface,
                )
            else:
                self._view = RenderView(
                    state=RenderState.ERRORED,
                    attempt_id=current.attempt_id,
                    error_message=event.message or "Unknown render error",
                    error_stage=event.stage or RenderError.UNKNOWN,
                )
            self._outcome = event.to_outcome()
            view = self._view

        logger.info(
            "Render outcome applied",
            extra={"attempt_id": view.attempt_id, "state": view.state.value},
        )
        return view

    def wait_for_outcome(self, timeout: float | None = None) -> RenderOutcome:
        """
        Pumps renderer events until the current attempt settles.

        Args:
            timeout: Seconds to wait, defaults to the configured render timeout.

        Returns:
            The outcome of the current attempt; a timeout outcome if the
            renderer stayed silent.
        """
        if self._view.state is RenderState.IDLE:
            raise RuntimeError("No document has been presented")

        limit = self._config.render_timeout_seconds if timeout is None else timeout
        deadline = time.monotonic() + limit
        while True:
            if self._view.state is not RenderState.LOADING:
                return self._outcome

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._expire(self._view.attempt_id, limit)
                continue

            raw = self._context.receive(remaining)
            if raw is not None:
                self.apply_event(raw)

    def close(self) -> None:
        self._context.close()

    def _expire(self, attempt_id: int, limit: float) -> None:
        message = f"Renderer did not respond within {limit:g} seconds"
        if self._settle_error(attempt_id, message, RenderError.TIMEOUT):
            logger.error("Render attempt timed out", extra={"attempt_id": attempt_id})

    def _settle_error(self, attempt_id: int, message: str, stage: str) -> bool:
        with self._lock:
            current = self._view
            if current.attempt_id != attempt_id or current.state is not RenderState.LOADING:
                return False
            self._view = RenderView(
                state=RenderState.ERRORED,
                attempt_id=attempt_id,
                error_message=message,
                error_stage=stage,
            )
            self._outcome = RenderOutcome(
                status=RenderStatus.ERROR, message=message, stage=stage
            )
        return True

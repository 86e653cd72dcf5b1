"""Renderer actor running on the far side of the rendering boundary."""

import json
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sheet_gen.exceptions import RenderError
from sheet_gen.infrastructure.interfaces import ScoreRenderer
from sheet_gen.logging import setup_logging

from .codec import decode_payload
from .messages import LoadCommand, RenderEvent

logger = setup_logging()

SHUTDOWN = None


class RendererActor:
    """Owns the rendering library; answers each load command with one event."""

    def __init__(
        self,
        renderer_factory: Callable[[], ScoreRenderer],
        emit: Callable[[str], None],
    ):
        self._renderer_factory = renderer_factory
        self._emit = emit

    def handle(self, raw: str) -> None:
        """
        Processes one load command and emits exactly one outcome event.

        Args:
            raw: JSON-encoded LoadCommand.
        """
        try:
            command = LoadCommand.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.exception("Malformed render command")
            self._emit(
                RenderEvent(
                    type="error",
                    attempt_id=_salvage_attempt_id(raw),
                    stage=RenderError.UNKNOWN,
                    message=str(e),
                ).model_dump_json()
            )
            return

        try:
            surface = self._render(command.payload)
        except RenderError as e:
            logger.error(
                "Render attempt failed",
                extra={"attempt_id": command.attempt_id, "stage": e.stage, "error": str(e)},
            )
            event = RenderEvent(
                type="error", attempt_id=command.attempt_id, stage=e.stage, message=str(e)
            )
        else:
            logger.info(
                "Render attempt succeeded",
                extra={"attempt_id": command.attempt_id, "surface": surface},
            )
            event = RenderEvent(
                type="success", attempt_id=command.attempt_id, surface=surface
            )
        self._emit(event.model_dump_json())

    def _render(self, payload: str) -> str:
        try:
            document = decode_payload(payload)
            renderer = self._renderer_factory()
        except Exception as e:
            raise RenderError(RenderError.UNKNOWN, _describe(e), e) from e

        try:
            renderer.load(document)
        except Exception as e:
            raise RenderError(RenderError.LOAD, _describe(e), e) from e

        try:
            return renderer.render()
        except Exception as e:
            raise RenderError(RenderError.LAYOUT, _describe(e), e) from e


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


def _salvage_attempt_id(raw: Any) -> int | None:
    """Reads attempt_id from a command that failed validation, if it has one."""
    try:
        body = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(body, dict):
        return None
    attempt_id = body.get("attempt_id")
    if isinstance(attempt_id, int) and not isinstance(attempt_id, bool):
        return attempt_id
    return None


def run_renderer_actor(
    inbox: Any, outbox: Any, renderer_factory: Callable[[], ScoreRenderer]
) -> None:
    """Process entry point: serves load commands until the shutdown sentinel."""
    actor = RendererActor(renderer_factory, outbox.put)
    logger.info("Renderer actor started")
    while True:
        raw = inbox.get()
        if raw is SHUTDOWN:
            break
        actor.handle(raw)
    logger.info("Renderer actor stopped")

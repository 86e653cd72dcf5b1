"""Command and event messages exchanged with the isolated renderer."""

from typing import Literal

from pydantic import BaseModel

from sheet_gen.domain.models import RenderOutcome, RenderStatus


class LoadCommand(BaseModel, frozen=True):
    """Host to renderer: draw this encoded document."""

    type: Literal["load"] = "load"
    attempt_id: int
    payload: str


class RenderEvent(BaseModel, frozen=True):
    """Renderer to host: outcome of one attempt."""

    type: Literal["success", "error"]
    attempt_id: int | None = None
    message: str | None = None
    stage: str | None = None
    surface: str | None = None

    def to_outcome(self) -> RenderOutcome:
        return RenderOutcome(
            status=RenderStatus.SUCCESS if self.type == "success" else RenderStatus.ERROR,
            message=self.message,
            stage=self.stage,
        )

"""Rendering bridge exports."""

from .codec import decode_payload, encode_payload
from .context import ProcessRenderContext
from .host import RenderingBridge, RenderState, RenderView
from .viewer_page import build_viewer_page

__all__ = [
    "encode_payload",
    "decode_payload",
    "ProcessRenderContext",
    "RenderingBridge",
    "RenderState",
    "RenderView",
    "build_viewer_page",
]

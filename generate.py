from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from debug_tools import DebugRecorder
from deck_compiler import compile_deck
from errors import LyricSlidesError, RendererFailure
from renderers import Renderer
from slide_style import DEFAULT_STYLE, SlideStyle

DEFAULT_TITLE = "My Lyrics Presentation"


@dataclass(frozen=True)
class GenerateResult:
    presentation_url: str
    slide_count: int
    deck_id: str = ""

    def to_dict(self) -> dict:
        return {"presentationUrl": self.presentation_url, "slideCount": self.slide_count}


def _renderer_call(stage: str, fn, *args):
    try:
        return fn(*args)
    except RendererFailure:
        raise
    except Exception as e:
        raise RendererFailure(stage, str(e) or type(e).__name__) from e


def generate_presentation(
    lyrics: str,
    style_override: Optional[Union[SlideStyle, Mapping[str, Any]]],
    renderer: Renderer,
    *,
    title: str = DEFAULT_TITLE,
    default_style: SlideStyle = DEFAULT_STYLE,
    dbg: DebugRecorder | None = None,
) -> GenerateResult:
    """
    Create a deck, compile the lyrics into it, share it, and return its URL.

    The whole batch is compiled before the renderer is touched, so blank
    lyrics or a bad color never leave an empty deck behind. Renderer errors
    are not retried.
    """
    plan = compile_deck(lyrics, style_override, default_style, dbg=dbg)

    handle = _renderer_call("create_deck", renderer.create_deck, title)
    if dbg and dbg.settings.enabled:
        dbg.log(f"[DECK] id={handle.deck_id} placeholder={handle.placeholder_slide_id}")

    plan = plan.with_placeholder_delete(handle.placeholder_slide_id)

    _renderer_call("apply_batch", renderer.apply_batch, handle.deck_id, plan.batch)
    _renderer_call("make_shareable", renderer.make_shareable, handle.deck_id)
    url = _renderer_call("deck_url", renderer.deck_url, handle.deck_id)

    if dbg and dbg.settings.enabled:
        dbg.log(f"[DECK] {plan.slide_count} slides, {len(plan.batch)} operations -> {url}")
    return GenerateResult(presentation_url=url, slide_count=plan.slide_count, deck_id=handle.deck_id)


def error_payload(exc: Exception) -> dict:
    """Error body for callers: {"error": ..., "code": ...}."""
    if isinstance(exc, LyricSlidesError):
        return exc.to_payload()
    return {"error": "Failed to generate presentation", "code": str(exc) or "UNKNOWN_ERROR"}

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from debug_tools import DebugRecorder
from errors import InvalidInput
from lyrics_segmenter import segment
from slide_builder import build_batch
from slide_ops import DeleteObject, SlideOperation, to_requests
from slide_style import DEFAULT_STYLE, SlideStyle, resolve_style


@dataclass
class DeckPlan:
    batch: List[SlideOperation] = field(default_factory=list)
    slide_count: int = 0

    def as_requests(self) -> List[dict]:
        return to_requests(self.batch)

    def with_placeholder_delete(self, placeholder_slide_id: Optional[str]) -> "DeckPlan":
        """Same plan, ending with the delete of a renderer's blank slide."""
        if not placeholder_slide_id:
            return self
        batch = self.batch + [DeleteObject(object_id=placeholder_slide_id)]
        return DeckPlan(batch=batch, slide_count=self.slide_count)


def compile_deck(
    raw_text: str,
    style_override: Optional[Union[SlideStyle, Mapping[str, Any]]] = None,
    default_style: SlideStyle = DEFAULT_STYLE,
    placeholder_slide_id: Optional[str] = None,
    *,
    dbg: DebugRecorder | None = None,
) -> DeckPlan:
    """
    Compile lyrics + style into the full operation batch for one deck.

    placeholder_slide_id is the blank slide the renderer created with the
    deck, if any; it is deleted by the last operation. No I/O happens here.
    """
    if not isinstance(raw_text, str) or not raw_text:
        raise InvalidInput("lyrics required")

    blocks = segment(raw_text)
    if not blocks:
        raise InvalidInput("no content sections")

    style = resolve_style(default_style, style_override)
    if dbg and dbg.settings.enabled:
        dbg.log(f"[COMPILE] {len(blocks)} sections, style={style.to_dict()}")

    batch = build_batch(blocks, style, placeholder_slide_id, dbg=dbg)
    return DeckPlan(batch=batch, slide_count=len(blocks))

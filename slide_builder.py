from __future__ import annotations

from typing import List, Optional, Sequence

from color_utils import hex_to_rgb
from debug_tools import DebugRecorder
from font_sizing import resolve_font_size
from slide_ops import (
    CreateSlide,
    CreateTextBox,
    DeleteObject,
    InsertText,
    SetBackground,
    SetParagraphAlignment,
    SetTextStyle,
    SlideOperation,
)
from slide_style import SlideStyle

# Lyric text box: ~93% of slide width, ~90% of height, margin on every side.
TEXT_BOX_WIDTH_EMU = 8500000
TEXT_BOX_HEIGHT_EMU = 6200000
TEXT_BOX_LEFT_EMU = 320000
TEXT_BOX_TOP_EMU = 330000


def slide_id(index: int) -> str:
    return f"slide_{index}"


def text_box_id(index: int) -> str:
    return f"text_box_{index}"


def _text_style_op(box_id: str, text: str, style: SlideStyle, *, dbg: DebugRecorder | None = None) -> SetTextStyle:
    size = resolve_font_size(text, style.font_size, style.is_auto_fit, dbg=dbg)
    return SetTextStyle(
        object_id=box_id,
        font_size=size,
        font_family=style.font_family or None,
        foreground_color=hex_to_rgb(style.font_color) if style.font_color else None,
        bold=bool(style.is_bold),
        italic=bool(style.is_italic),
    )


def build_slide_ops(index: int, text: str, style: SlideStyle, *, dbg: DebugRecorder | None = None) -> List[SlideOperation]:
    """
    Operations for one lyric section, in the order the renderer must apply them:
    slide, background, text box, text, text style, alignment.
    """
    sid = slide_id(index)
    bid = text_box_id(index)

    ops: List[SlideOperation] = [CreateSlide(object_id=sid)]

    if style.background_color:
        ops.append(SetBackground(object_id=sid, color=hex_to_rgb(style.background_color)))

    ops.append(CreateTextBox(
        object_id=bid,
        page_object_id=sid,
        width=TEXT_BOX_WIDTH_EMU,
        height=TEXT_BOX_HEIGHT_EMU,
        left=TEXT_BOX_LEFT_EMU,
        top=TEXT_BOX_TOP_EMU,
    ))
    ops.append(InsertText(object_id=bid, text=text))
    ops.append(_text_style_op(bid, text, style, dbg=dbg))

    if style.is_centered:
        ops.append(SetParagraphAlignment(object_id=bid))

    return ops


def build_batch(
    blocks: Sequence[str],
    style: SlideStyle,
    placeholder_slide_id: Optional[str] = None,
    *,
    dbg: DebugRecorder | None = None,
) -> List[SlideOperation]:
    """
    Flatten every section's operations into one batch.

    The renderer's auto-created blank slide (if any) is deleted last, after
    the new slides exist, so their positions are unaffected.
    """
    batch: List[SlideOperation] = []
    for i, text in enumerate(blocks):
        slide_ops = build_slide_ops(i, text, style, dbg=dbg)
        batch.extend(slide_ops)

        if dbg and dbg.settings.enabled:
            style_op = next(op for op in slide_ops if isinstance(op, SetTextStyle))
            dbg.record_slide({
                "slide": slide_id(i),
                "chars": len(text),
                "lines": text.count("\n") + 1,
                "font_size": style_op.font_size,
                "ops": [op.kind for op in slide_ops],
            })

    if placeholder_slide_id:
        batch.append(DeleteObject(object_id=placeholder_slide_id))
    return batch

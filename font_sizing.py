from __future__ import annotations

import math

from debug_tools import DebugRecorder

DEFAULT_FONT_SIZE = 24
MIN_FONT_SIZE = 8          # floor for any requested size
MIN_AUTO_FIT_SIZE = 10     # auto-fit never shrinks below this

# Empirical capacity of the lyric text box at the base font size.
# Tuning knobs, not measured glyph metrics.
MAX_CHARS_PER_SLIDE = 600
MAX_LINES_PER_SLIDE = 10


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def base_font_size(preferred: float | None) -> float:
    return max(MIN_FONT_SIZE, DEFAULT_FONT_SIZE if preferred is None else preferred)


def resolve_font_size(
    text: str,
    preferred: float | None = None,
    is_auto_fit: bool = True,
    *,
    dbg: DebugRecorder | None = None,
) -> float:
    """
    Point size for one slide's text.

    Without auto-fit the caller's size is honored (floored at 8pt).
    With auto-fit the size shrinks linearly with whichever of character
    count or line count is tighter, clamped to [10, base].
    """
    base = base_font_size(preferred)
    if not is_auto_fit:
        return base

    chars = max(1, len(text))
    lines = max(1, text.count("\n") + 1)

    char_scale = min(1.0, MAX_CHARS_PER_SLIDE / chars)
    line_scale = min(1.0, MAX_LINES_PER_SLIDE / lines)
    scale = min(char_scale, line_scale)

    size = max(MIN_AUTO_FIT_SIZE, min(base, _round_half_up(base * scale)))

    if dbg and dbg.settings.enabled:
        dbg.log(f"[FIT] {chars} chars, {lines} lines -> {size}pt (scale: {scale:.2f})")
    return size

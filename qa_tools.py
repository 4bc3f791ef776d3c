from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from matplotlib.font_manager import FontProperties, findfont
from pptx import Presentation
from PIL import ImageFont

from font_sizing import MAX_CHARS_PER_SLIDE, MAX_LINES_PER_SLIDE

EMU_PER_PT = 12700
MEASURE_DPI = 96  # Pillow measures in pixels; use a consistent DPI conversion
PX_PER_PT = MEASURE_DPI / 72
LINE_SPACING = 1.2  # single spacing in PowerPoint is ~1.2 em

# python-pptx default text frame insets
INSET_X_PT = 7.2
INSET_Y_PT = 3.6

TINY_TEXT_PT = 14

_FONT_DIRS = (
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    "/System/Library/Fonts",
    "/System/Library/Fonts/Supplemental",
    "/Library/Fonts",
    os.path.expanduser("~/Library/Fonts"),
    os.path.expanduser("~/.fonts"),
    "C:\\Windows\\Fonts",
)
_FALLBACK_FONTS = ("DejaVuSans.ttf", "Arial.ttf", "Helvetica.ttc", "LiberationSans-Regular.ttf")


@lru_cache(maxsize=None)
def _find_font_file(name: str) -> Optional[str]:
    """
    Resolve a font family name (or a generic one like "serif") to a font file.

    matplotlib's font manager does the real lookup; a filename scan of the
    usual font folders only covers the case where it comes back empty.
    """
    family = (name or "").strip()
    fp = FontProperties(family=[family]) if family else FontProperties()
    try:
        path = findfont(fp, fallback_to_default=True)
    except ValueError:
        path = None
    if path and os.path.exists(path):
        return path
    return _scan_font_dirs(family)


def _scan_font_dirs(family: str, dirs=_FONT_DIRS) -> Optional[str]:
    """Shortest font filename starting with the family name, e.g. Arial.ttf over Arial Bold.ttf."""
    needle = family.lower().replace(" ", "")
    if not needle:
        return None
    matches = []
    for d in dirs:
        if not os.path.isdir(d):
            continue
        for root, _dirs, files in os.walk(d):
            for fn in files:
                key = fn.lower().replace(" ", "")
                if key.endswith((".ttf", ".otf", ".ttc")) and key.startswith(needle):
                    matches.append((len(key), key, os.path.join(root, fn)))
    return min(matches)[2] if matches else None


@lru_cache(maxsize=None)
def _load_font(family: str, size_px: int):
    candidates: List[str] = []
    found = _find_font_file(family)
    if found:
        candidates.append(found)
    candidates.extend(_FALLBACK_FONTS)

    for c in candidates:
        try:
            return ImageFont.truetype(c, size_px)
        except OSError:
            continue
    return ImageFont.load_default(size=size_px)


def _wrapped_line_count(text: str, font, max_width_px: float) -> int:
    """Greedy word wrap by measured width; each paragraph takes at least one line."""
    total = 0
    for para in text.split("\n"):
        words = para.split()
        if not words:
            total += 1
            continue
        cur = words[0]
        lines = 1
        for w in words[1:]:
            candidate = cur + " " + w
            if font.getlength(candidate) <= max_width_px:
                cur = candidate
            else:
                lines += 1
                cur = w
        total += lines
    return total


def measure_overflow(text: str, font_size_pt: float, family: str, width_emu: int, height_emu: int) -> bool:
    """True when the text, wrapped at the box width, is taller than the box."""
    size_px = max(1, int(round(font_size_pt * PX_PER_PT)))
    font = _load_font(family or "", size_px)

    width_px = (width_emu / EMU_PER_PT - 2 * INSET_X_PT) * PX_PER_PT
    height_px = (height_emu / EMU_PER_PT - 2 * INSET_Y_PT) * PX_PER_PT

    try:
        ascent, descent = font.getmetrics()
    except AttributeError:
        ascent, descent = int(size_px * 0.8), int(size_px * 0.2)
    line_h = (ascent + descent) * LINE_SPACING

    lines = _wrapped_line_count(text, font, width_px)
    return lines * line_h > height_px


def _iter_text_shapes(slide):
    for sh in slide.shapes:
        if getattr(sh, "has_text_frame", False):
            yield sh


def _first_run_font(shape):
    for p in shape.text_frame.paragraphs:
        for r in p.runs:
            return r.font
    return None


def analyze_pptx(pptx_path: Path) -> dict:
    """Lightweight QA heuristics for spotting slides that will read badly.

    Flags (1-based slide numbers):
      - EMPTY: no text at all
      - CROWDED: more text than a slide comfortably holds
      - TINY_TEXT: auto-fit shrank the text below a comfortable size
      - OVERFLOW: measured text is taller than its text box
    """
    prs = Presentation(str(pptx_path))
    empty, crowded, tiny, overflow = [], [], [], []
    slide_stats = []

    for idx, slide in enumerate(prs.slides, start=1):
        texts = []
        min_font_pt = None
        overflows = False

        for sh in _iter_text_shapes(slide):
            t = (sh.text_frame.text or "").strip()
            if not t:
                continue
            texts.append(t)

            font = _first_run_font(sh)
            if font is None or font.size is None:
                continue
            pt = float(font.size.pt)
            min_font_pt = pt if min_font_pt is None else min(min_font_pt, pt)
            if measure_overflow(t, pt, font.name or "", int(sh.width), int(sh.height)):
                overflows = True

        full = "\n".join(texts).strip()
        chars = len(full)
        lines = sum(1 for ln in full.splitlines() if ln.strip())
        slide_stats.append({"slide": idx, "chars": chars, "lines": lines, "min_font_pt": min_font_pt})

        if not full:
            empty.append(idx)
        if chars > MAX_CHARS_PER_SLIDE or lines > MAX_LINES_PER_SLIDE:
            crowded.append(idx)
        if min_font_pt is not None and min_font_pt < TINY_TEXT_PT:
            tiny.append(idx)
        if overflows:
            overflow.append(idx)

    return {
        "pptx": str(pptx_path),
        "slide_count": len(prs.slides),
        "flags": {"EMPTY": empty, "CROWDED": crowded, "TINY_TEXT": tiny, "OVERFLOW": overflow},
        "slides": slide_stats,
    }

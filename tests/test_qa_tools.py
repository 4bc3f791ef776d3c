"""
Tests for the deck QA report
"""

import os

from deck_compiler import compile_deck
from qa_tools import _find_font_file, _scan_font_dirs, analyze_pptx, measure_overflow
from slide_ops import CreateSlide
from slide_style import DEFAULT_STYLE, resolve_style

from conftest import AMAZING_GRACE


def _build(renderer, lyrics, override=None, extra=()):
    handle = renderer.create_deck("QA")
    plan = compile_deck(lyrics, override, DEFAULT_STYLE, handle.placeholder_slide_id)
    renderer.apply_batch(handle.deck_id, plan.batch + list(extra))
    return renderer.deck_path(handle.deck_id)


class TestAnalyzePptx:
    """Tests for analyze_pptx()."""

    def test_clean_deck(self, pptx_renderer):
        """Ordinary verses raise no flags."""
        report = analyze_pptx(_build(pptx_renderer, AMAZING_GRACE))
        assert report["slide_count"] == 3
        assert all(not v for v in report["flags"].values())
        assert report["slides"][0]["min_font_pt"] == 24

    def test_crowded_and_tiny(self, pptx_renderer):
        """A very long verse is crowded and shrunk."""
        report = analyze_pptx(_build(pptx_renderer, "word " * 400))
        assert report["flags"]["CROWDED"] == [1]
        assert report["flags"]["TINY_TEXT"] == [1]

    def test_empty_slide(self, pptx_renderer):
        """A slide without text is flagged."""
        path = _build(pptx_renderer, "Hello", extra=[CreateSlide(object_id="blank")])
        report = analyze_pptx(path)
        assert report["flags"]["EMPTY"] == [2]

    def test_fixed_size_overflow(self, pptx_renderer):
        """A large fixed size on a long verse overflows the box."""
        override = {"isAutoFit": False, "fontSize": 60}
        lyrics = "\n".join(f"this is lyric line number {n}" for n in range(12))
        report = analyze_pptx(_build(pptx_renderer, lyrics, override))
        assert report["flags"]["OVERFLOW"] == [1]


class TestMeasureOverflow:
    """Tests for measure_overflow()."""

    def test_short_text_fits(self):
        """One short line fits a full-size box."""
        assert not measure_overflow("Amazing grace", 24, "Arial", 8500000, 6200000)

    def test_tall_text_overflows(self):
        """Forty lines at 40pt do not fit."""
        text = "\n".join(["la la la"] * 40)
        assert measure_overflow(text, 40, "Arial", 8500000, 6200000)


class TestFontLookup:
    """Tests for resolving font family names to files."""

    def test_exact_family(self):
        """A named family resolves to its regular face, not a sibling."""
        path = _find_font_file("DejaVu Sans")
        assert os.path.basename(path) == "DejaVuSans.ttf"

    def test_generic_families(self):
        """Generic names resolve through the font manager."""
        for family in ("serif", "sans-serif"):
            path = _find_font_file(family)
            assert path and os.path.exists(path)

    def test_unknown_family_falls_back(self):
        """Unknown families still give a usable file."""
        path = _find_font_file("No Such Family 123")
        assert path and os.path.exists(path)

    def test_scan_prefers_shortest_name(self, tmp_path):
        """The folder scan picks the regular face over bold or mono variants."""
        for fn in ("DejaVuSansMono-Bold.ttf", "DejaVuSans-Bold.ttf", "DejaVuSans.ttf", "notes.txt"):
            (tmp_path / fn).write_bytes(b"")
        found = _scan_font_dirs("DejaVu Sans", dirs=(str(tmp_path),))
        assert found == str(tmp_path / "DejaVuSans.ttf")

    def test_scan_no_match(self, tmp_path):
        """Nothing matching, nothing returned."""
        (tmp_path / "Arial.ttf").write_bytes(b"")
        assert _scan_font_dirs("Georgia", dirs=(str(tmp_path),)) is None
        assert _scan_font_dirs("", dirs=(str(tmp_path),)) is None

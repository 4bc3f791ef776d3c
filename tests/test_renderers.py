"""
Tests for the python-pptx renderer
"""

import os
import stat

import pytest
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN
from pptx.util import Pt

from deck_compiler import compile_deck
from errors import RendererFailure
from renderers import PLACEHOLDER_SLIDE_ID, PptxRenderer
from slide_ops import CreateSlide, DeleteObject, InsertText
from slide_style import HYMNAL_STYLE, resolve_style

from conftest import AMAZING_GRACE, TWO_VERSES


def _render(renderer, lyrics, override=None, default=HYMNAL_STYLE, title="Test Song"):
    handle = renderer.create_deck(title)
    plan = compile_deck(lyrics, override, default, handle.placeholder_slide_id)
    renderer.apply_batch(handle.deck_id, plan.batch)
    return handle, Presentation(str(renderer.deck_path(handle.deck_id)))


def _slide_text(slide):
    return "\n".join(sh.text_frame.text for sh in slide.shapes if sh.has_text_frame)


class TestCreateDeck:
    """Tests for create_deck()."""

    def test_placeholder_reported(self, pptx_renderer):
        """New decks start with one blank slide the caller must remove."""
        handle = pptx_renderer.create_deck("Amazing Grace")
        assert handle.deck_id == "amazing_grace"
        assert handle.placeholder_slide_id == PLACEHOLDER_SLIDE_ID

    def test_deck_ids_unique(self, pptx_renderer):
        """The same title twice gets two decks."""
        a = pptx_renderer.create_deck("Song")
        b = pptx_renderer.create_deck("Song")
        assert a.deck_id != b.deck_id

    def test_missing_template(self, tmp_path):
        """A bad template path is a create_deck failure."""
        renderer = PptxRenderer(tmp_path, template_path=tmp_path / "missing.pptx")
        with pytest.raises(RendererFailure) as exc:
            renderer.create_deck("Song")
        assert exc.value.stage == "create_deck"


class TestApplyBatch:
    """Tests for apply_batch()."""

    def test_one_slide_per_verse(self, pptx_renderer):
        """Placeholder removed, verses in order."""
        _, prs = _render(pptx_renderer, AMAZING_GRACE)
        assert len(prs.slides) == 3
        assert _slide_text(prs.slides[0]).startswith("Amazing grace")
        assert _slide_text(prs.slides[2]).endswith("I have already come")

    def test_text_box_named_and_placed(self, pptx_renderer):
        """The text box keeps its id as the shape name and its geometry."""
        _, prs = _render(pptx_renderer, TWO_VERSES)
        box = prs.slides[1].shapes[0]
        assert box.name == "text_box_1"
        assert (box.left, box.top, box.width, box.height) == (320000, 330000, 8500000, 6200000)

    def test_lines_become_paragraphs(self, pptx_renderer):
        """Each lyric line is its own paragraph."""
        _, prs = _render(pptx_renderer, TWO_VERSES)
        paras = prs.slides[0].shapes[0].text_frame.paragraphs
        assert [p.text for p in paras] == ["Verse one line A", "line B"]

    def test_styles_applied(self, pptx_renderer):
        """Font, size, color, bold, alignment and background reach the file."""
        override = {"fontColor": "#ff0000", "backgroundColor": "#000080", "isItalic": True}
        _, prs = _render(pptx_renderer, TWO_VERSES, override)
        slide = prs.slides[0]
        p = slide.shapes[0].text_frame.paragraphs[0]
        run = p.runs[0]
        assert run.font.size == Pt(24)
        assert run.font.name == "Times New Roman"
        assert run.font.bold is True
        assert run.font.italic is True
        assert run.font.color.rgb == RGBColor(0xFF, 0x00, 0x00)
        assert p.alignment == PP_ALIGN.CENTER
        assert slide.background.fill.fore_color.rgb == RGBColor(0x00, 0x00, 0x80)

    def test_plain_style(self, pptx_renderer):
        """Unset bold/italic/centering are left alone."""
        plain = resolve_style(HYMNAL_STYLE, {"isBold": False, "isCentered": False})
        _, prs = _render(pptx_renderer, "Hello", default=plain)
        p = prs.slides[0].shapes[0].text_frame.paragraphs[0]
        assert p.runs[0].font.bold is None
        assert p.alignment is None

    def test_auto_fit_size_written(self, pptx_renderer):
        """Long verses are written at the shrunk size."""
        _, prs = _render(pptx_renderer, "word " * 240)
        assert prs.slides[0].shapes[0].text_frame.paragraphs[0].runs[0].font.size == Pt(12)

    def test_unknown_object_fails(self, pptx_renderer):
        """Styling an object that does not exist fails the whole call."""
        handle = pptx_renderer.create_deck("Song")
        with pytest.raises(RendererFailure) as exc:
            pptx_renderer.apply_batch(handle.deck_id, [InsertText(object_id="nope", text="x")])
        assert exc.value.stage == "apply_batch"
        assert not pptx_renderer.deck_path(handle.deck_id).exists()

    def test_duplicate_id_fails(self, pptx_renderer):
        """Object ids must be unique within a deck."""
        handle = pptx_renderer.create_deck("Song")
        batch = [CreateSlide(object_id="slide_0"), CreateSlide(object_id="slide_0")]
        with pytest.raises(RendererFailure):
            pptx_renderer.apply_batch(handle.deck_id, batch)

    def test_unknown_deck(self, pptx_renderer):
        """Decks this renderer did not create are rejected."""
        with pytest.raises(RendererFailure):
            pptx_renderer.apply_batch("other", [])

    def test_delete_text_box(self, pptx_renderer):
        """delete_object also removes shapes."""
        handle = pptx_renderer.create_deck("Song")
        plan = compile_deck("Hello", None, HYMNAL_STYLE, handle.placeholder_slide_id)
        pptx_renderer.apply_batch(handle.deck_id, plan.batch + [DeleteObject(object_id="text_box_0")])
        prs = Presentation(str(pptx_renderer.deck_path(handle.deck_id)))
        assert len(prs.slides) == 1
        assert len(prs.slides[0].shapes) == 0


class TestShare:
    """Tests for make_shareable() and deck_url()."""

    def test_make_shareable(self, pptx_renderer):
        """Saved deck is readable and writable by everyone."""
        handle, _ = _render(pptx_renderer, TWO_VERSES)
        pptx_renderer.make_shareable(handle.deck_id)
        mode = stat.S_IMODE(os.stat(pptx_renderer.deck_path(handle.deck_id)).st_mode)
        assert mode & 0o666 == 0o666

    def test_share_before_save_fails(self, pptx_renderer):
        """Nothing to share until a batch has been applied."""
        handle = pptx_renderer.create_deck("Song")
        with pytest.raises(RendererFailure) as exc:
            pptx_renderer.make_shareable(handle.deck_id)
        assert exc.value.stage == "make_shareable"

    def test_deck_url(self, pptx_renderer):
        """URL points at the saved file."""
        handle, _ = _render(pptx_renderer, TWO_VERSES)
        url = pptx_renderer.deck_url(handle.deck_id)
        assert url.startswith("file://")
        assert url.endswith("/test_song.pptx")

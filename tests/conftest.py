"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Modules live flat at the project root
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from debug_tools import DebugRecorder, DebugSettings  # noqa: E402
from renderers import DeckHandle, PptxRenderer  # noqa: E402
from slide_style import DEFAULT_STYLE  # noqa: E402


TWO_VERSES = "Verse one line A\nline B\n\nVerse two"

AMAZING_GRACE = """Amazing grace, how sweet the sound
That saved a wretch like me
I once was lost, but now am found
Was blind, but now I see


'Twas grace that taught my heart to fear
And grace my fears relieved
How precious did that grace appear
The hour I first believed

Through many dangers, toils and snares
I have already come
"""


@pytest.fixture
def default_style():
    return DEFAULT_STYLE


@pytest.fixture
def pptx_renderer(tmp_path: Path) -> PptxRenderer:
    return PptxRenderer(tmp_path / "out")


@pytest.fixture
def debug_recorder(tmp_path: Path) -> DebugRecorder:
    settings = DebugSettings(enabled=True, print_console=False)
    dbg = DebugRecorder(settings)
    dbg.start_deck("test deck", str(tmp_path / "test_deck.pptx"))
    return dbg


class FakeRenderer:
    """Records renderer calls; optionally fails at one stage."""

    def __init__(self, placeholder="p0", fail_at=None, error=None):
        self.placeholder = placeholder
        self.fail_at = fail_at
        self.error = error or ConnectionError("backend unavailable")
        self.calls = []
        self.batches = {}

    def _maybe_fail(self, stage):
        if self.fail_at == stage:
            raise self.error

    def create_deck(self, title):
        self.calls.append(("create_deck", title))
        self._maybe_fail("create_deck")
        return DeckHandle(deck_id="deck-1", placeholder_slide_id=self.placeholder)

    def apply_batch(self, deck_id, batch):
        self.calls.append(("apply_batch", deck_id))
        self._maybe_fail("apply_batch")
        self.batches[deck_id] = list(batch)

    def make_shareable(self, deck_id):
        self.calls.append(("make_shareable", deck_id))
        self._maybe_fail("make_shareable")

    def deck_url(self, deck_id):
        return f"https://slides.example/d/{deck_id}/edit"


@pytest.fixture
def fake_renderer():
    return FakeRenderer()

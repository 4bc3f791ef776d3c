"""
Renderer collaborators: whatever turns an operation batch into a real deck.

A renderer exposes create_deck / apply_batch / make_shareable / deck_url.
PptxRenderer is the local implementation; it writes one .pptx per deck into
an output folder. A hosted presentation service would implement the same
four calls and forward ``op.to_request()`` payloads unchanged.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from pptx.slide import Slide

from errors import RendererFailure
from pptx_utils import (
    add_blank_slide,
    add_text_box,
    align_paragraphs,
    insert_text,
    load_template,
    remove_shape,
    remove_slide,
    set_background,
    style_text,
)
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

PLACEHOLDER_SLIDE_ID = "placeholder_slide"


@dataclass(frozen=True)
class DeckHandle:
    deck_id: str
    placeholder_slide_id: Optional[str] = None


class Renderer(Protocol):
    def create_deck(self, title: str) -> DeckHandle: ...

    def apply_batch(self, deck_id: str, batch: List[SlideOperation]) -> None: ...

    def make_shareable(self, deck_id: str) -> None: ...

    def deck_url(self, deck_id: str) -> str: ...


@dataclass
class _Deck:
    prs: Any
    path: Path
    # object id -> python-pptx slide or shape
    objects: Dict[str, Any] = field(default_factory=dict)


def _deck_stem(title: str) -> str:
    stem = re.sub(r"[^a-z0-9]+", "_", (title or "").lower()).strip("_")
    return stem or "lyrics"


class PptxRenderer:
    def __init__(self, output_dir, template_path=None):
        """
        output_dir:    folder for the generated .pptx files (created on demand)
        template_path: optional .pptx whose masters/theme new decks start from;
                       slides already in the template are kept ahead of new ones.
        """
        self.output_dir = Path(output_dir)
        self.template_path = Path(template_path) if template_path else None
        self._decks: Dict[str, _Deck] = {}

    # -------------------------
    # Renderer calls
    # -------------------------

    def create_deck(self, title: str) -> DeckHandle:
        try:
            prs = load_template(self.template_path)
            prs.core_properties.title = title
            # Hosted renderers start every deck with one blank slide; do the same.
            placeholder = add_blank_slide(prs)
        except Exception as e:
            raise RendererFailure("create_deck", str(e)) from e

        deck_id = self._unique_deck_id(_deck_stem(title))
        deck = _Deck(prs=prs, path=self.output_dir / f"{deck_id}.pptx")
        deck.objects[PLACEHOLDER_SLIDE_ID] = placeholder
        self._decks[deck_id] = deck
        return DeckHandle(deck_id=deck_id, placeholder_slide_id=PLACEHOLDER_SLIDE_ID)

    def apply_batch(self, deck_id: str, batch: List[SlideOperation]) -> None:
        """Apply operations in order; any failure fails the call and nothing is saved."""
        deck = self._get_deck(deck_id, "apply_batch")
        for n, op in enumerate(batch):
            try:
                self._apply(deck, op)
            except RendererFailure:
                raise
            except Exception as e:
                raise RendererFailure("apply_batch", f"operation {n} ({op.kind}) failed: {e}") from e

        try:
            deck.path.parent.mkdir(parents=True, exist_ok=True)
            deck.prs.save(str(deck.path))
        except OSError as e:
            raise RendererFailure("apply_batch", f"could not save {deck.path}: {e}") from e

    def make_shareable(self, deck_id: str) -> None:
        deck = self._get_deck(deck_id, "make_shareable")
        try:
            os.chmod(deck.path, 0o666)
        except OSError as e:
            raise RendererFailure("make_shareable", f"could not share {deck.path}: {e}") from e

    def deck_url(self, deck_id: str) -> str:
        return self._get_deck(deck_id, "deck_url").path.resolve().as_uri()

    def deck_path(self, deck_id: str) -> Path:
        return self._get_deck(deck_id, "deck_path").path

    # -------------------------
    # Helpers
    # -------------------------

    def _unique_deck_id(self, stem: str) -> str:
        deck_id = stem
        n = 2
        while deck_id in self._decks or (self.output_dir / f"{deck_id}.pptx").exists():
            deck_id = f"{stem}_{n}"
            n += 1
        return deck_id

    def _get_deck(self, deck_id: str, stage: str) -> _Deck:
        deck = self._decks.get(deck_id)
        if deck is None:
            raise RendererFailure(stage, f"unknown deck {deck_id!r}")
        return deck

    def _lookup(self, deck: _Deck, object_id: str):
        obj = deck.objects.get(object_id)
        if obj is None:
            raise RendererFailure("apply_batch", f"unknown object id {object_id!r}")
        return obj

    def _register(self, deck: _Deck, object_id: str, obj) -> None:
        if object_id in deck.objects:
            raise RendererFailure("apply_batch", f"duplicate object id {object_id!r}")
        deck.objects[object_id] = obj

    def _apply(self, deck: _Deck, op: SlideOperation) -> None:
        if isinstance(op, CreateSlide):
            self._register(deck, op.object_id, add_blank_slide(deck.prs))

        elif isinstance(op, SetBackground):
            set_background(self._lookup(deck, op.object_id), op.color)

        elif isinstance(op, CreateTextBox):
            slide = self._lookup(deck, op.page_object_id)
            box = add_text_box(slide, op.left, op.top, op.width, op.height)
            box.name = op.object_id
            self._register(deck, op.object_id, box)

        elif isinstance(op, InsertText):
            insert_text(self._lookup(deck, op.object_id), op.text)

        elif isinstance(op, SetTextStyle):
            style_text(
                self._lookup(deck, op.object_id),
                op.font_size,
                font_family=op.font_family,
                color=op.foreground_color,
                bold=op.bold,
                italic=op.italic,
            )

        elif isinstance(op, SetParagraphAlignment):
            align_paragraphs(self._lookup(deck, op.object_id), op.alignment)

        elif isinstance(op, DeleteObject):
            obj = self._lookup(deck, op.object_id)
            if isinstance(obj, Slide):
                remove_slide(deck.prs, obj)
            else:
                remove_shape(obj)
            del deck.objects[op.object_id]

        else:
            raise RendererFailure("apply_batch", f"unsupported operation {op!r}")

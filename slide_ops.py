"""
Slide operations: the contract between the deck compiler and a renderer.

Each operation is a small frozen dataclass with a ``kind`` tag. ``to_request()``
returns the wire form, shaped like a Google Slides ``batchUpdate`` request, so
a hosted renderer can forward it verbatim while the local python-pptx renderer
dispatches on the dataclass type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Optional, Union

from color_utils import RgbColor

# Standard 4:3 slide, 10in x 7.5in
EMU_PER_INCH = 914400
SLIDE_WIDTH_EMU = 9144000
SLIDE_HEIGHT_EMU = 6858000

ALIGN_CENTER = "CENTER"
LAYOUT_BLANK = "BLANK"


@dataclass(frozen=True)
class CreateSlide:
    kind: ClassVar[str] = "create_slide"
    object_id: str
    layout: str = LAYOUT_BLANK

    def to_request(self) -> dict:
        return {
            "createSlide": {
                "objectId": self.object_id,
                "slideLayoutReference": {"predefinedLayout": self.layout},
            }
        }


@dataclass(frozen=True)
class SetBackground:
    kind: ClassVar[str] = "set_background"
    object_id: str
    color: RgbColor

    def to_request(self) -> dict:
        return {
            "updatePageProperties": {
                "objectId": self.object_id,
                "pageProperties": {
                    "pageBackgroundFill": {
                        "solidFill": {"color": {"rgbColor": self.color.to_dict()}}
                    }
                },
                "fields": "pageBackgroundFill",
            }
        }


@dataclass(frozen=True)
class CreateTextBox:
    kind: ClassVar[str] = "create_text_box"
    object_id: str
    page_object_id: str
    width: int
    height: int
    left: int
    top: int

    def to_request(self) -> dict:
        return {
            "createShape": {
                "objectId": self.object_id,
                "shapeType": "TEXT_BOX",
                "elementProperties": {
                    "pageObjectId": self.page_object_id,
                    "size": {
                        "width": {"magnitude": self.width, "unit": "EMU"},
                        "height": {"magnitude": self.height, "unit": "EMU"},
                    },
                    "transform": {
                        "scaleX": 1,
                        "scaleY": 1,
                        "translateX": self.left,
                        "translateY": self.top,
                        "unit": "EMU",
                    },
                },
            }
        }


@dataclass(frozen=True)
class InsertText:
    kind: ClassVar[str] = "insert_text"
    object_id: str
    text: str

    def to_request(self) -> dict:
        return {"insertText": {"objectId": self.object_id, "text": self.text}}


@dataclass(frozen=True)
class SetTextStyle:
    """Style applied to all text in a box. Optional fields are omitted when unset."""
    kind: ClassVar[str] = "set_text_style"
    object_id: str
    font_size: float
    font_family: Optional[str] = None
    foreground_color: Optional[RgbColor] = None
    bold: bool = False
    italic: bool = False

    def field_names(self) -> List[str]:
        names = ["fontSize"]
        if self.font_family:
            names.append("fontFamily")
        if self.foreground_color is not None:
            names.append("foregroundColor")
        if self.bold:
            names.append("bold")
        if self.italic:
            names.append("italic")
        return names

    def to_request(self) -> dict:
        style: dict = {"fontSize": {"magnitude": self.font_size, "unit": "PT"}}
        if self.font_family:
            style["fontFamily"] = self.font_family
        if self.foreground_color is not None:
            style["foregroundColor"] = {"opaqueColor": {"rgbColor": self.foreground_color.to_dict()}}
        if self.bold:
            style["bold"] = True
        if self.italic:
            style["italic"] = True
        return {
            "updateTextStyle": {
                "objectId": self.object_id,
                "style": style,
                "textRange": {"type": "ALL"},
                "fields": ",".join(self.field_names()),
            }
        }


@dataclass(frozen=True)
class SetParagraphAlignment:
    kind: ClassVar[str] = "set_paragraph_alignment"
    object_id: str
    alignment: str = ALIGN_CENTER

    def to_request(self) -> dict:
        return {
            "updateParagraphStyle": {
                "objectId": self.object_id,
                "style": {"alignment": self.alignment},
                "textRange": {"type": "ALL"},
                "fields": "alignment",
            }
        }


@dataclass(frozen=True)
class DeleteObject:
    kind: ClassVar[str] = "delete_object"
    object_id: str

    def to_request(self) -> dict:
        return {"deleteObject": {"objectId": self.object_id}}


SlideOperation = Union[
    CreateSlide,
    SetBackground,
    CreateTextBox,
    InsertText,
    SetTextStyle,
    SetParagraphAlignment,
    DeleteObject,
]


def to_requests(batch: List[SlideOperation]) -> List[dict]:
    return [op.to_request() for op in batch]

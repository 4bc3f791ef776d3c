from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Union

# camelCase names used by JSON payloads -> dataclass field names
_WIRE_NAMES = {
    "fontFamily": "font_family",
    "fontSize": "font_size",
    "backgroundColor": "background_color",
    "fontColor": "font_color",
    "isAutoFit": "is_auto_fit",
    "isBold": "is_bold",
    "isItalic": "is_italic",
    "isCentered": "is_centered",
}
_FIELD_TO_WIRE = {v: k for k, v in _WIRE_NAMES.items()}


@dataclass(frozen=True)
class SlideStyle:
    font_family: str = "Arial"
    font_size: float = 24
    background_color: str = "#ffffff"
    font_color: str = "#000000"
    is_auto_fit: bool = True
    is_bold: bool = False
    is_italic: bool = False
    is_centered: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SlideStyle":
        """Build a full style from a (possibly partial) payload, defaults elsewhere."""
        return resolve_style(cls(), data)

    def to_dict(self) -> dict:
        return {_FIELD_TO_WIRE[f.name]: getattr(self, f.name) for f in fields(self)}


DEFAULT_STYLE = SlideStyle()

# The browser client's starting profile: a hymnal look.
HYMNAL_STYLE = SlideStyle(
    font_family="Times New Roman",
    is_bold=True,
    is_centered=True,
)


def _override_items(override: Union[SlideStyle, Mapping[str, Any]]):
    if isinstance(override, SlideStyle):
        for f in fields(override):
            yield f.name, getattr(override, f.name)
        return

    known = {f.name for f in fields(SlideStyle)}
    for key, value in override.items():
        name = _WIRE_NAMES.get(key, key)
        if name in known:
            yield name, value


def resolve_style(
    base: SlideStyle,
    override: Optional[Union[SlideStyle, Mapping[str, Any]]] = None,
) -> SlideStyle:
    """
    Shallow field-by-field merge: an override value wins unless it is None.

    Unknown keys are ignored. Values are not validated here; colors are
    checked where they are converted.
    """
    if not override:
        return base
    changes = {name: value for name, value in _override_items(override) if value is not None}
    return replace(base, **changes)

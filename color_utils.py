import re
from typing import NamedTuple

from errors import InvalidColor

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6})")


class RgbColor(NamedTuple):
    red: float
    green: float
    blue: float

    def to_dict(self) -> dict:
        return {"red": self.red, "green": self.green, "blue": self.blue}


def _hex_digits(hex_color) -> str:
    if not isinstance(hex_color, str):
        raise InvalidColor(f"Color must be a hex string, got {hex_color!r}")
    m = _HEX_RE.fullmatch(hex_color.strip())
    if not m:
        raise InvalidColor(f"Invalid hex color: {hex_color!r}")
    return m.group(1).lower()


def normalize_hex(hex_color: str) -> str:
    """'FFAA00' / '#ffaa00' -> '#ffaa00'."""
    return "#" + _hex_digits(hex_color)


def hex_to_rgb(hex_color: str) -> RgbColor:
    """Convert #rrggbb (or rrggbb) to channels in the 0-1 range."""
    digits = _hex_digits(hex_color)
    r, g, b = (int(digits[i:i + 2], 16) / 255 for i in (0, 2, 4))
    return RgbColor(r, g, b)


def rgb_to_hex(rgb) -> str:
    """Inverse of hex_to_rgb, rounding each channel to the nearest 1/255."""
    parts = []
    for channel in rgb:
        value = int(round(max(0.0, min(1.0, float(channel))) * 255))
        parts.append(f"{value:02x}")
    return "#" + "".join(parts)

import re

from errors import InvalidInput

# A line break, any whitespace-only lines, then another line break.
# \s* is greedy, so three or more blank lines collapse into one split.
_BLANK_LINES_RE = re.compile(r"\r?\n\s*\r?\n")


def segment(raw_text: str) -> list[str]:
    """
    Split lyrics into slide-sized sections (verses, choruses, ...).

    Sections are separated by one or more blank lines. Each section is
    trimmed; empty sections are dropped. Order is preserved.
    """
    if not isinstance(raw_text, str):
        raise InvalidInput("lyrics required")

    blocks = []
    for part in _BLANK_LINES_RE.split(raw_text):
        part = part.strip()
        if part:
            blocks.append(part)
    return blocks

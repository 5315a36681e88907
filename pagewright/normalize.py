"""
Text normalization for the output fonts.

The standard PDF fonts cover Latin text only, so emoji, pictographs and the
joiners/selectors that compose them are removed before measuring and drawing.
"""

import re
from typing import Optional

# Code point ranges the output fonts cannot render.
UNRENDERABLE_RANGES = (
    ("\U0001F600", "\U0001F64F"),  # Emoticons
    ("\U0001F300", "\U0001F5FF"),  # Misc Symbols and Pictographs
    ("\U0001F680", "\U0001F6FF"),  # Transport and Map
    ("\U0001F1E0", "\U0001F1FF"),  # Regional indicator symbols
    ("\u2600", "\u26FF"),  # Misc symbols
    ("\u2700", "\u27BF"),  # Dingbats
    ("\U0001F900", "\U0001F9FF"),  # Supplemental Symbols and Pictographs
    ("\U0001FA70", "\U0001FAFF"),  # Symbols and Pictographs Extended-A
    ("\uFE00", "\uFE0F"),  # Variation Selectors
    ("\u200D", "\u200D"),  # Zero Width Joiner
)

_UNRENDERABLE_RE = re.compile(
    "[" + "".join(f"{start}-{end}" for start, end in UNRENDERABLE_RANGES) + "]"
)
_WHITESPACE_RE = re.compile(r"\s+")


def strip_unrenderable(text: str) -> str:
    """Remove code points from :data:`UNRENDERABLE_RANGES` without touching whitespace."""
    return _UNRENDERABLE_RE.sub("", text)


def normalize(text: Optional[str]) -> str:
    """
    Normalize text for measurement and drawing.

    Removes unrenderable code points, collapses whitespace runs (including the
    gaps left by removal) to a single space and trims both ends.

    Args:
        text: Input text; ``None`` is treated as empty

    Returns:
        Normalized text, possibly empty
    """
    if not text:
        return ""
    cleaned = strip_unrenderable(str(text))
    return _WHITESPACE_RE.sub(" ", cleaned).strip()

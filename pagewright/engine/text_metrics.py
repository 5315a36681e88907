"""

Text metrics - measuring text width for line breaking and alignment.

Uses ReportLab's AFM metrics for the standard PDF fonts and converts the
result from points to millimetres, the layout unit.

"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Tuple

from reportlab.pdfbase import pdfmetrics

from ..utils.units import PT_TO_MM

logger = logging.getLogger(__name__)

# (family, weight) -> standard PDF font name
FONT_VARIANTS: Dict[Tuple[str, str], str] = {
    ("helvetica", "normal"): "Helvetica",
    ("helvetica", "bold"): "Helvetica-Bold",
    ("helvetica", "italic"): "Helvetica-Oblique",
    ("courier", "normal"): "Courier",
    ("courier", "bold"): "Courier-Bold",
    ("courier", "italic"): "Courier-Oblique",
}

# Average glyph advance as a fraction of the font size
ESTIMATED_CHAR_WIDTH = 0.6

WIDTH_CACHE_SIZE = 4096


def resolve_font_variant(family: str, weight: str = "normal") -> str:
    """
    Map a font family and weight to a standard PDF font name.

    Unknown families fall back to Helvetica, unknown weights to the regular face.
    """
    family = (family or "helvetica").lower()
    weight = (weight or "normal").lower()
    if (family, weight) in FONT_VARIANTS:
        return FONT_VARIANTS[(family, weight)]
    return FONT_VARIANTS.get((family, "normal"), "Helvetica")


@lru_cache(maxsize=WIDTH_CACHE_SIZE)
def _measure(text: str, font_name: str, size: float) -> float:
    return pdfmetrics.stringWidth(text, font_name, size) * PT_TO_MM


class TextMetricsEngine:
    """
    Proportional text measurement backed by ReportLab font metrics.

    All widths are returned in millimetres; font sizes are in points.
    """

    def string_width(self, text: str, family: str, size: float, weight: str = "normal") -> float:
        """
        Measure the advance width of ``text``.

        Args:
            text: Text to measure (single line)
            family: Font family (``helvetica`` or ``courier``)
            size: Font size in points
            weight: ``normal``, ``bold`` or ``italic``

        Returns:
            Width in millimetres
        """
        if not text:
            return 0.0
        font_name = resolve_font_variant(family, weight)
        return _measure(text, font_name, float(size))


class MonospaceMetrics:
    """Fixed-advance width estimate: every character is ``0.6 × size`` wide."""

    def __init__(self, char_width: float = ESTIMATED_CHAR_WIDTH) -> None:
        self.char_width = char_width

    def string_width(self, text: str, family: str, size: float, weight: str = "normal") -> float:
        return len(text or "") * size * self.char_width * PT_TO_MM

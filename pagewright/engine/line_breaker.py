"""Greedy word wrapping against the content-box width."""

from __future__ import annotations

import logging
from typing import List, Protocol

logger = logging.getLogger(__name__)


class TextMeasurer(Protocol):
    """Text-measurement collaborator: width of a single line in layout units."""

    def string_width(self, text: str, family: str, size: float, weight: str = "normal") -> float:
        ...


class LineBreaker:
    """

    Simple greedy line breaker.

    Words are appended while the candidate line fits ``max_width``. A word that
    is wider than a whole line on its own is split between characters so that
    no wrapped line exceeds the width.

    """

    def __init__(self, measurer: TextMeasurer, family: str, size: float, weight: str = "normal") -> None:
        self.measurer = measurer
        self.family = family
        self.size = size
        self.weight = weight

    def width(self, text: str) -> float:
        return self.measurer.string_width(text, self.family, self.size, self.weight)

    def break_text(self, text: str, max_width: float) -> List[str]:
        """
        Wrap ``text`` into lines no wider than ``max_width``.

        Returns:
            Ordered list of lines; an empty or blank text yields no lines
        """
        words = text.split()
        if not words:
            return []

        lines: List[str] = []
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if self.width(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)
                current = ""

            if self.width(word) <= max_width:
                current = word
                continue

            pieces = self._split_word(word, max_width)
            lines.extend(pieces[:-1])
            current = pieces[-1]

        if current:
            lines.append(current)
        return lines

    def _split_word(self, word: str, max_width: float) -> List[str]:
        logger.debug(f"Splitting overlong word of {len(word)} characters at width {max_width:.2f}")
        pieces: List[str] = []
        piece = ""
        for char in word:
            if piece and self.width(piece + char) > max_width:
                pieces.append(piece)
                piece = char
            else:
                piece += char
        pieces.append(piece)
        return pieces

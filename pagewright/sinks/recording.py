"""In-memory sink that records draw commands per page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..exceptions import LayoutError
from .base import RGB, DocumentSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextCommand:
    x: float
    y: float
    text: str
    font: str
    size: float
    weight: str = "normal"


@dataclass(frozen=True, slots=True)
class RectCommand:
    x: float
    y: float
    w: float
    h: float
    fill_color: RGB


@dataclass(frozen=True, slots=True)
class ImageCommand:
    x: float
    y: float
    w: float
    h: float
    data: bytes = field(repr=False)


DrawCommand = Union[TextCommand, RectCommand, ImageCommand]


@dataclass
class RecordedDocument:
    """Pages of recorded draw commands, in emission order."""

    pages: List[List[DrawCommand]] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def texts(self, page_index: Optional[int] = None) -> List[str]:
        """Text of every text command, on one page (0-based) or the whole document."""
        pages = self.pages if page_index is None else [self.pages[page_index]]
        return [cmd.text for page in pages for cmd in page if isinstance(cmd, TextCommand)]

    def commands(self) -> List[DrawCommand]:
        return [cmd for page in self.pages for cmd in page]


class RecordingSink(DocumentSink):
    """Sink collecting commands instead of serializing them."""

    def __init__(self) -> None:
        self.document = RecordedDocument()
        self.finalized = False

    def _current(self) -> List[DrawCommand]:
        if not self.document.pages:
            raise LayoutError("Draw command issued before the first page was started")
        return self.document.pages[-1]

    def start_page(self) -> None:
        self.document.pages.append([])
        logger.debug(f"Recording page {len(self.document.pages)}")

    def draw_text(self, x: float, y: float, text: str, font: str, size: float, weight: str = "normal") -> None:
        self._current().append(TextCommand(x, y, text, font, size, weight))

    def draw_rect(self, x: float, y: float, w: float, h: float, fill_color: RGB) -> None:
        self._current().append(RectCommand(x, y, w, h, tuple(fill_color)))

    def draw_image(self, x: float, y: float, w: float, h: float, data: bytes) -> None:
        self._current().append(ImageCommand(x, y, w, h, data))

    def finalize(self) -> RecordedDocument:
        self.finalized = True
        return self.document

"""

Flow engine - sequential vertical layout with page-break decisions.

Walks the content blocks in order, wraps their text against the content box,
places each line (or atomic unit) below the previous one and starts a new page
whenever the next unit would cross the bottom of the content area. Page breaks
close the old page with its footer before the new page gets its header.

"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional

from ..exceptions import DrawFailure, ExportCancelled, LayoutError
from ..models.blocks import (
    CodeBlock,
    ContentBlock,
    Emphasis,
    Heading,
    ListBlock,
    MediaBlock,
    Paragraph,
    TableBlock,
)
from ..normalize import normalize
from ..sinks.base import DocumentSink
from ..utils.units import pixels_to_mm
from .header_footer import HeaderFooterRenderer
from .layout_context import LayoutContext
from .line_breaker import LineBreaker, TextMeasurer
from .text_metrics import TextMetricsEngine

if TYPE_CHECKING:
    from ..config import ExportOptions

logger = logging.getLogger(__name__)

BODY_FONT = "helvetica"
CODE_FONT = "courier"
CODE_BACKGROUND = (245, 245, 245)
CODE_PADDING = 6.0
LIST_INDENT = 5.0
HEADING_LINE_FACTOR = 1.2
CODE_LINE_FACTOR = 1.2
TABLE_LINE_FACTOR = 1.3
IMAGE_MAX_HEIGHT_RATIO = 0.6

_EMPHASIS_WEIGHTS = {
    Emphasis.NORMAL: "normal",
    Emphasis.BOLD: "bold",
    Emphasis.ITALIC: "italic",
}


class FlowState(str, Enum):
    AWAITING_HEADER = "awaiting_header"
    FLOWING = "flowing"
    PAGE_BREAK = "page_break"
    DONE = "done"


class CancellationToken:
    """Cooperative cancellation flag checked by the engine at block boundaries."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(slots=True)
class Placement:
    """Vertical extent of one placed unit (a line, a code block or an image)."""

    block_index: int
    page: int
    top: float
    bottom: float
    kind: str


@dataclass
class LayoutSummary:
    pages: int = 0
    blocks_placed: int = 0
    fallbacks: int = 0
    final_cursor_y: float = 0.0
    placements: List[Placement] = field(default_factory=list)


class FlowEngine:
    """

    Lay out content blocks onto pages of a document sink.

    An engine instance renders exactly one document: ``render`` moves it from
    ``AWAITING_HEADER`` through ``FLOWING``/``PAGE_BREAK`` to ``DONE``.

    Units that are taller than a whole page (large code blocks, headings with
    huge fonts) are placed once at the top of a fresh page and allowed to
    overflow; they are never split.

    """

    def __init__(
        self,
        sink: DocumentSink,
        options: "ExportOptions",
        *,
        title: str = "",
        export_date: Optional[date] = None,
        measurer: Optional[TextMeasurer] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> None:
        self.sink = sink
        self.options = options
        self.geometry = options.geometry
        self.context = LayoutContext(self.geometry, options)
        self.measurer = measurer or TextMetricsEngine()
        self.cancel_token = cancel_token
        self.header_footer = HeaderFooterRenderer(
            sink,
            self.measurer,
            self.geometry,
            title=title,
            export_date=export_date,
            attribution=options.attribution,
        )
        self.state = FlowState.AWAITING_HEADER
        self.summary = LayoutSummary()
        self._block_index = -1
        self._renderers: Dict[type, Callable[[ContentBlock], None]] = {
            Heading: self._render_heading,
            Paragraph: self._render_paragraph,
            CodeBlock: self._render_code,
            ListBlock: self._render_list,
            TableBlock: self._render_table,
            MediaBlock: self._render_media,
        }

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def render(self, blocks: Iterable[ContentBlock]) -> LayoutSummary:
        """
        Lay out all blocks and close the document's last page.

        Raises:
            LayoutError: If the engine was already used or a block has an unknown type
            ExportCancelled: If the cancellation token fires between blocks
        """
        if self.state is not FlowState.AWAITING_HEADER:
            raise LayoutError("Flow engine already rendered a document", details=self.state.value)

        blocks = list(blocks)
        for index, block in enumerate(blocks):
            if type(block) not in self._renderers:
                raise LayoutError("Unsupported content block", details=f"{type(block).__name__} at index {index}")

        self._begin_document()
        for index, block in enumerate(blocks):
            if self.cancel_token is not None and self.cancel_token.cancelled:
                logger.info(f"Export cancelled before block {index}")
                raise ExportCancelled("Export cancelled", details=f"stopped before block {index}")
            self._block_index = index
            self._renderers[type(block)](block)
            self.summary.blocks_placed += 1
        self._finish_document()

        logger.info(
            f"Layout finished: {self.summary.pages} page(s), {self.summary.blocks_placed} block(s), "
            f"{self.summary.fallbacks} fallback(s)"
        )
        return self.summary

    def _begin_document(self) -> None:
        self.sink.start_page()
        if self.options.include_header:
            self.header_footer.draw_header(self.context.current_page)
            self.context.advance(self.context.header_band)
        self.state = FlowState.FLOWING

    def _finish_document(self) -> None:
        if self.options.include_footer:
            self.header_footer.draw_footer(self.context.current_page)
        self.summary.pages = self.context.current_page
        self.summary.final_cursor_y = self.context.cursor_y
        self.state = FlowState.DONE

    def _page_break(self) -> None:
        self.state = FlowState.PAGE_BREAK
        finished_page = self.context.current_page
        if self.options.include_footer:
            self.header_footer.draw_footer(finished_page)

        self.sink.start_page()
        self.context.next_page()
        if self.options.include_header:
            self.header_footer.draw_header(self.context.current_page)
            self.context.advance(self.context.header_band)

        logger.debug(f"Page break after page {finished_page} (block {self._block_index})")
        self.state = FlowState.FLOWING

    def _ensure_room(self, height: float, may_break: bool = True) -> None:
        """Break the page unless ``height`` fits; oversized units stay on a fresh page."""
        if self.context.fits(height):
            return
        if not may_break or self.context.at_page_top:
            logger.warning(
                f"Unit of height {height:.1f} exceeds usable page height "
                f"{self.context.usable_height:.1f}; placing without split"
            )
            return
        self._page_break()
        if not self.context.fits(height):
            logger.warning(
                f"Unit of height {height:.1f} exceeds usable page height "
                f"{self.context.usable_height:.1f}; placing without split"
            )

    def _place(self, height: float, kind: str, may_break: bool = True) -> float:
        """Reserve ``height`` at the cursor (breaking first if needed) and return its top."""
        self._ensure_room(height, may_break)
        return self._commit(height, kind)

    def _commit(self, height: float, kind: str) -> float:
        """Advance past ``height`` at the cursor without any page-break check."""
        top = self.context.cursor_y
        self.context.advance(height)
        self.summary.placements.append(
            Placement(self._block_index, self.context.current_page, top, self.context.cursor_y, kind)
        )
        return top

    def _breaker(self, family: str, size: float, weight: str = "normal") -> LineBreaker:
        return LineBreaker(self.measurer, family, size, weight)

    # ------------------------------------------------------------------
    # Block renderers
    # ------------------------------------------------------------------
    def _render_heading(self, block: Heading) -> None:
        base = self.options.font_size
        size = base + (6 - block.level) * 2
        line_height = size * HEADING_LINE_FACTOR

        lines = self._breaker(BODY_FONT, size, "bold").break_text(
            normalize(block.text), self.geometry.content_width
        )
        if not lines:
            logger.debug(f"Empty heading at block {self._block_index} skipped")
            return

        fresh_page = self.context.at_page_top
        self.context.advance(base * 0.3)
        top = self._place(line_height * len(lines), "heading", may_break=not fresh_page)
        for offset, line in enumerate(lines):
            self.sink.draw_text(self.geometry.margins.left, top + offset * line_height, line, BODY_FONT, size, "bold")

        self.context.advance(base * 0.2)

    def _render_paragraph(self, block: Paragraph) -> None:
        size = self.options.font_size
        line_height = size * self.options.line_height
        weight = _EMPHASIS_WEIGHTS[block.emphasis]

        lines = self._breaker(BODY_FONT, size, weight).break_text(
            normalize(block.text), self.geometry.content_width
        )
        if not lines:
            return

        for line in lines:
            top = self._place(line_height, "line")
            self.sink.draw_text(self.geometry.margins.left, top, line, BODY_FONT, size, weight)

        self.context.advance(line_height * 0.2)

    def _render_list(self, block: ListBlock) -> None:
        size = self.options.font_size
        line_height = size * self.options.line_height
        breaker = self._breaker(BODY_FONT, size)
        x = self.geometry.margins.left + LIST_INDENT

        placed = False
        for item in block.rendered_lines:
            for line in breaker.break_text(normalize(item), self.geometry.content_width - LIST_INDENT):
                top = self._place(line_height, "line")
                self.sink.draw_text(x, top, line, BODY_FONT, size)
                placed = True

        if placed:
            self.context.advance(line_height * 0.1)

    def _render_table(self, block: TableBlock) -> None:
        size = self.options.font_size - 1
        line_height = size * TABLE_LINE_FACTOR
        breaker = self._breaker(BODY_FONT, size)

        placed = False
        for row in block.rendered_rows:
            for line in breaker.break_text(normalize(row), self.geometry.content_width):
                top = self._place(line_height, "row")
                self.sink.draw_text(self.geometry.margins.left, top, line, BODY_FONT, size)
                placed = True

        if placed:
            self.context.advance(line_height * 0.2)

    def _render_code(self, block: CodeBlock) -> None:
        size = self.options.font_size - 1
        line_height = size * CODE_LINE_FACTOR
        total_height = len(block.lines) * line_height + CODE_PADDING
        left = self.geometry.margins.left

        top = self._place(total_height, "code")
        self.sink.draw_rect(left - 2, top - 3, self.geometry.content_width + 4, total_height, CODE_BACKGROUND)
        for offset, line in enumerate(block.lines):
            self.sink.draw_text(left, top + offset * line_height, line, CODE_FONT, size)

        self.context.advance(CODE_PADDING)

    def _render_media(self, block: MediaBlock) -> None:
        if block.pixels is None:
            self._render_fallback(normalize(block.fallback_text))
            return

        width_px = block.intrinsic_w or block.pixels.width
        height_px = block.intrinsic_h or block.pixels.height
        width_mm = pixels_to_mm(width_px)
        height_mm = pixels_to_mm(height_px)
        scale = min(
            self.geometry.content_width / width_mm,
            self.geometry.content_height * IMAGE_MAX_HEIGHT_RATIO / height_mm,
            1.0,
        )
        final_width = width_mm * scale
        final_height = height_mm * scale

        self._ensure_room(final_height)
        x = self.geometry.margins.left + (self.geometry.content_width - final_width) / 2
        top = self.context.cursor_y
        try:
            self.sink.draw_image(x, top, final_width, final_height, block.pixels.data)
        except DrawFailure as exc:
            logger.warning(f"Failed to embed {block.label} at block {self._block_index}: {exc}")
            self._render_failed_embed(f"[{block.label} - failed to embed]")
            return

        self._commit(final_height, "image")
        logger.debug(f"Image {final_width:.1f}x{final_height:.1f} mm placed at y={top:.1f}")
        self.context.advance(self.options.font_size * 0.5)

    def _render_fallback(self, text: str) -> None:
        size = self.options.font_size
        line_height = size * self.options.line_height
        top = self._place(line_height, "fallback")
        self.sink.draw_text(self.geometry.margins.left, top, text, BODY_FONT, size, "italic")
        self.context.advance(line_height * 0.5)
        self.summary.fallbacks += 1

    def _render_failed_embed(self, text: str) -> None:
        size = self.options.font_size
        line_height = size * self.options.line_height
        top = self._place(line_height, "fallback")
        self.sink.draw_text(self.geometry.margins.left, top, text, BODY_FONT, size, "italic")
        self.summary.fallbacks += 1

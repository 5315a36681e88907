"""Running header and footer drawn on every page."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..normalize import normalize
from ..sinks.base import DocumentSink
from .geometry import PageGeometry
from .line_breaker import TextMeasurer

logger = logging.getLogger(__name__)

HEADER_TITLE_SIZE = 12.0
HEADER_DATE_SIZE = 10.0
FOOTER_TEXT_SIZE = 10.0
RULE_WIDTH = 0.5
RULE_COLOR = (0, 0, 0)


class HeaderFooterRenderer:
    """

    Draw the title/date header and the attribution/page-number footer.

    Both are pure functions of the page geometry, the document title, the
    export date and the page number passed in; the renderer keeps no page
    state of its own.

    """

    def __init__(
        self,
        sink: DocumentSink,
        measurer: TextMeasurer,
        geometry: PageGeometry,
        title: str = "",
        export_date: Optional[date] = None,
        attribution: str = "",
    ) -> None:
        self.sink = sink
        self.measurer = measurer
        self.geometry = geometry
        self.title = normalize(title)
        self.export_date = export_date or date.today()
        self.attribution = attribution

    @property
    def date_stamp(self) -> str:
        return f"Exported: {self.export_date.isoformat()}"

    def draw_header(self, page_number: int) -> None:
        margins = self.geometry.margins
        right = self.geometry.page_width - margins.right
        baseline = margins.top + 5

        if self.title:
            self.sink.draw_text(margins.left, baseline, self.title, "helvetica", HEADER_TITLE_SIZE, "bold")

        stamp_width = self.measurer.string_width(self.date_stamp, "helvetica", HEADER_DATE_SIZE)
        self.sink.draw_text(right - stamp_width, baseline, self.date_stamp, "helvetica", HEADER_DATE_SIZE)

        self._rule(margins.top + 8)
        logger.debug(f"Header drawn on page {page_number}")

    def draw_footer(self, page_number: int) -> None:
        margins = self.geometry.margins
        right = self.geometry.page_width - margins.right
        bottom = self.geometry.content_bottom
        baseline = bottom - 3

        self._rule(bottom - 8)

        if self.attribution:
            self.sink.draw_text(margins.left, baseline, self.attribution, "helvetica", FOOTER_TEXT_SIZE)

        label = f"Page {page_number}"
        label_width = self.measurer.string_width(label, "helvetica", FOOTER_TEXT_SIZE)
        self.sink.draw_text(right - label_width, baseline, label, "helvetica", FOOTER_TEXT_SIZE)
        logger.debug(f"Footer drawn on page {page_number}")

    def _rule(self, y: float) -> None:
        self.sink.draw_rect(
            self.geometry.margins.left,
            y - RULE_WIDTH / 2,
            self.geometry.content_width,
            RULE_WIDTH,
            RULE_COLOR,
        )

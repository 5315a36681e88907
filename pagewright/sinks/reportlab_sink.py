"""PDF sink drawing onto a ReportLab canvas."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Union

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as pdf_canvas

from ..engine.geometry import Size
from ..engine.text_metrics import resolve_font_variant
from ..exceptions import DrawFailure, SinkUnavailable
from ..utils.units import mm_to_points
from .base import RGB, DocumentSink

logger = logging.getLogger(__name__)

CanvasTarget = Union[str, Path, BinaryIO]


class ReportLabSink(DocumentSink):
    """

    Serialize draw commands to PDF with ReportLab.

    Layout coordinates (mm, origin top-left) are converted to PDF points with
    the origin at the bottom-left.

    """

    def __init__(
        self,
        output: CanvasTarget,
        page_size: Size,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> None:
        self.output = output
        self.page_size = page_size
        self._page_width_pt = mm_to_points(page_size.width)
        self._page_height_pt = mm_to_points(page_size.height)
        self._pages_started = 0
        self._finalized = False

        if hasattr(output, "write"):
            target = output
        else:
            path = Path(output)
            if not path.parent.exists():
                raise SinkUnavailable("Output directory does not exist", details=str(path.parent))
            target = str(path)

        self.canvas = pdf_canvas.Canvas(target, pagesize=(self._page_width_pt, self._page_height_pt))
        if title:
            self.canvas.setTitle(title)
        if author:
            self.canvas.setAuthor(author)
        self.canvas.setCreator("pagewright")

    @classmethod
    def is_supported(cls) -> bool:
        try:
            pdfmetrics.getFont("Helvetica")
            pdfmetrics.getFont("Courier")
        except KeyError:
            return False
        return True

    def _y(self, y: float) -> float:
        return self._page_height_pt - mm_to_points(y)

    def start_page(self) -> None:
        if self._pages_started:
            self.canvas.showPage()
        self._pages_started += 1
        logger.debug(f"PDF page {self._pages_started} started")

    def draw_text(self, x: float, y: float, text: str, font: str, size: float, weight: str = "normal") -> None:
        self.canvas.setFillColorRGB(0, 0, 0)
        self.canvas.setFont(resolve_font_variant(font, weight), size)
        self.canvas.drawString(mm_to_points(x), self._y(y), text)

    def draw_rect(self, x: float, y: float, w: float, h: float, fill_color: RGB) -> None:
        r, g, b = fill_color
        self.canvas.setFillColorRGB(r / 255.0, g / 255.0, b / 255.0)
        self.canvas.rect(
            mm_to_points(x),
            self._y(y + h),
            mm_to_points(w),
            mm_to_points(h),
            stroke=0,
            fill=1,
        )

    def draw_image(self, x: float, y: float, w: float, h: float, data: bytes) -> None:
        try:
            reader = ImageReader(BytesIO(data))
            reader.getSize()
            # Full decode up front; truncated payloads pass the header check.
            reader.getRGBData()
            self.canvas.drawImage(
                reader,
                mm_to_points(x),
                self._y(y + h),
                width=mm_to_points(w),
                height=mm_to_points(h),
                mask="auto",
            )
        except Exception as exc:
            raise DrawFailure("Sink rejected image data", details=str(exc)) from exc

    def finalize(self) -> Union[Path, bytes]:
        """
        Save the PDF.

        Returns:
            The written path, or the PDF bytes when the target is a stream
        """
        if not self._finalized:
            if not self._pages_started:
                self.start_page()
            self.canvas.save()
            self._finalized = True
            logger.info(f"PDF saved with {self._pages_started} page(s)")

        if hasattr(self.output, "write"):
            if isinstance(self.output, BytesIO):
                return self.output.getvalue()
            return b""
        return Path(self.output)

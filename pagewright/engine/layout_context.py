"""Mutable per-export layout state: current page and vertical cursor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .geometry import PageGeometry

if TYPE_CHECKING:
    from ..config import ExportOptions

HEADER_BAND_HEIGHT = 15.0
FOOTER_BAND_HEIGHT = 10.0


@dataclass
class LayoutContext:
    """

    Cursor state owned by the flow engine.

    ``cursor_y`` is the absolute offset from the top edge of the page; it
    starts at the top margin and only grows within a page.

    """

    geometry: PageGeometry
    options: "ExportOptions"
    current_page: int = 1
    cursor_y: float = field(default=0.0)

    def __post_init__(self) -> None:
        self.cursor_y = self.geometry.margins.top

    @property
    def header_band(self) -> float:
        return HEADER_BAND_HEIGHT if self.options.include_header else 0.0

    @property
    def footer_band(self) -> float:
        return FOOTER_BAND_HEIGHT if self.options.include_footer else 0.0

    @property
    def content_top(self) -> float:
        """Where the first unit of a page is placed."""
        return self.geometry.margins.top + self.header_band

    @property
    def content_limit(self) -> float:
        """Lowest offset a placed unit may reach."""
        return self.geometry.content_bottom - self.footer_band

    @property
    def usable_height(self) -> float:
        return self.content_limit - self.content_top

    @property
    def remaining_height(self) -> float:
        return self.content_limit - self.cursor_y

    @property
    def at_page_top(self) -> bool:
        return self.cursor_y <= self.content_top

    def fits(self, height: float) -> bool:
        return self.cursor_y + height <= self.content_limit

    def advance(self, height: float) -> None:
        self.cursor_y += height

    def next_page(self) -> None:
        self.current_page += 1
        self.cursor_y = self.geometry.margins.top

"""Geometry primitives and page sizes for layout calculations (millimetres)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class PageFormat(str, Enum):
    A4 = "A4"
    LETTER = "Letter"
    LEGAL = "Legal"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


PAGE_SIZES_MM = {
    PageFormat.A4: (210.0, 297.0),
    PageFormat.LETTER: (216.0, 279.0),
    PageFormat.LEGAL: (216.0, 356.0),
}


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "Size":
        width, height = value
        return cls(float(width), float(height))


@dataclass(frozen=True, slots=True)
class Margins:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.top, self.right, self.bottom, self.left)


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def page_size_mm(page_format: PageFormat, orientation: Orientation) -> Size:
    """Page size for a format; landscape swaps width and height."""
    width, height = PAGE_SIZES_MM[page_format]
    if orientation is Orientation.LANDSCAPE:
        width, height = height, width
    return Size(width, height)


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Immutable page and margin geometry for one export."""

    size: Size
    margins: Margins

    @classmethod
    def for_format(
        cls,
        page_format: PageFormat,
        orientation: Orientation = Orientation.PORTRAIT,
        margins: Margins = Margins.uniform(20.0),
    ) -> "PageGeometry":
        return cls(size=page_size_mm(page_format, orientation), margins=margins)

    @property
    def page_width(self) -> float:
        return self.size.width

    @property
    def page_height(self) -> float:
        return self.size.height

    @property
    def content_width(self) -> float:
        return self.size.width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        return self.size.height - self.margins.top - self.margins.bottom

    @property
    def content_bottom(self) -> float:
        """Offset from the page top below which nothing may be placed."""
        return self.size.height - self.margins.bottom

    @property
    def content_box(self) -> Rect:
        return Rect(self.margins.left, self.margins.top, self.content_width, self.content_height)

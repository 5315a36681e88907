"""Interface for document sinks receiving page-level draw commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Tuple

RGB = Tuple[int, int, int]


class DocumentSink(ABC):
    """

    Consumer of draw commands that produces the final multi-page document.

    Coordinates are millimetres measured from the top-left corner of the page;
    the ``y`` of ``draw_text`` is the text baseline. Font sizes are points.
    A sink is owned by a single export run at a time.

    """

    @classmethod
    def is_supported(cls) -> bool:
        """Capability probe run before an export starts."""
        return True

    @abstractmethod
    def start_page(self) -> None:
        """Begin a new page; the first call opens page 1."""

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, font: str, size: float, weight: str = "normal") -> None:
        """Draw a single line of text with its baseline at ``y``."""

    @abstractmethod
    def draw_rect(self, x: float, y: float, w: float, h: float, fill_color: RGB) -> None:
        """Draw a filled rectangle whose top-left corner is ``(x, y)``."""

    @abstractmethod
    def draw_image(self, x: float, y: float, w: float, h: float, data: bytes) -> None:
        """
        Draw an encoded raster image into the given box.

        Raises:
            DrawFailure: If the sink cannot decode ``data``
        """

    @abstractmethod
    def finalize(self) -> Any:
        """Close the document and return it."""

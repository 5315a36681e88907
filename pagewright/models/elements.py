"""
Presentation element handles.

A media block does not carry pixels when it is produced; it carries a handle to
the rendered element (an ``img``, an ``svg`` or a diagram container ``div``)
that the capture adapter later rasterizes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class ElementHandle:
    """
    Minimal view of a rendered presentation element.

    ``style_width``/``style_height`` mirror explicit CSS sizes (``"640px"``,
    ``"100%"``, ``"auto"`` or unset); ``offset_width``/``offset_height`` are the
    laid-out box in pixels (0 when the element is not laid out).
    ``declared_width``/``declared_height`` are the ``width``/``height``
    attributes of an ``img`` (0 when absent) and override the raster's pixel
    size as the display size.
    """

    tag: str
    src: Optional[str] = None
    alt: str = ""
    classes: List[str] = field(default_factory=list)
    children: List["ElementHandle"] = field(default_factory=list)
    source: str = ""
    style_width: Optional[str] = None
    style_height: Optional[str] = None
    offset_width: int = 0
    offset_height: int = 0
    declared_width: int = 0
    declared_height: int = 0

    def __post_init__(self) -> None:
        self.tag = self.tag.lower()

    @property
    def diagram_type(self) -> Optional[str]:
        """``mermaid``/``plantuml`` for diagram containers, else ``None``."""
        for cls in self.classes:
            if cls.endswith("-diagram"):
                return cls[: -len("-diagram")]
        return None

    def find(self, tag: str) -> Optional["ElementHandle"]:
        """Depth-first search for the first descendant with ``tag``."""
        tag = tag.lower()
        for child in self.children:
            if child.tag == tag:
                return child
            nested = child.find(tag)
            if nested is not None:
                return nested
        return None

    @property
    def has_pixel_uri(self) -> bool:
        """True when ``src`` can be rasterized directly (data URI, blob or local file)."""
        if not self.src:
            return False
        return not self.src.startswith(("http://", "https://"))

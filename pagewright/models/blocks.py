"""

Content block model consumed by the flow engine.

A document is an ordered sequence of immutable blocks. ``ContentBlock`` is a
closed union: the flow engine dispatches on every member and rejects anything
else.

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

from .elements import ElementHandle


class Emphasis(str, Enum):
    """Font weight/style of a paragraph."""

    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"


class MediaKind(str, Enum):
    """Kinds of media blocks."""

    IMAGE = "image"
    DIAGRAM = "diagram"


@dataclass(frozen=True, slots=True)
class RasterImage:
    """Encoded raster (PNG bytes) with its pixel dimensions."""

    data: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Raster dimensions must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: str
    emphasis: Emphasis = Emphasis.NORMAL


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Verbatim code; lines are drawn as-is without wrapping or normalization."""

    lines: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "CodeBlock":
        return cls(lines=tuple(text.split("\n")))


@dataclass(frozen=True, slots=True)
class ListBlock:
    """List items with their bullet or number prefix already applied."""

    rendered_lines: Tuple[str, ...]

    @classmethod
    def from_items(cls, items: Iterable[str], ordered: bool = False) -> "ListBlock":
        lines = []
        for index, item in enumerate(items):
            prefix = f"{index + 1}. " if ordered else "• "
            lines.append(prefix + item)
        return cls(rendered_lines=tuple(lines))


@dataclass(frozen=True, slots=True)
class TableBlock:
    """Table rows flattened to ``" | "``-joined text."""

    rendered_rows: Tuple[str, ...]

    @classmethod
    def from_cells(cls, rows: Iterable[Sequence[str]]) -> "TableBlock":
        return cls(rendered_rows=tuple(" | ".join(cells) for cells in rows))


@dataclass(frozen=True, slots=True)
class MediaBlock:
    """

    Image or diagram.

    ``pixels`` is ``None`` until the capture adapter fills it in; a block that
    still has no pixels after capture is rendered as ``fallback_text``.

    """

    kind: MediaKind
    fallback_text: str
    pixels: Optional[RasterImage] = None
    intrinsic_w: int = 0
    intrinsic_h: int = 0
    handle: Optional[ElementHandle] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.intrinsic_w < 0 or self.intrinsic_h < 0:
            raise ValueError("Intrinsic dimensions cannot be negative")

    @classmethod
    def image(cls, handle: Optional[ElementHandle] = None, alt: str = "") -> "MediaBlock":
        alt = alt or (handle.alt if handle else "")
        return cls(
            kind=MediaKind.IMAGE,
            fallback_text=f"[Image: {alt or 'Embedded image'}]",
            handle=handle,
        )

    @classmethod
    def diagram(cls, handle: Optional[ElementHandle] = None, diagram_type: str = "") -> "MediaBlock":
        diagram_type = diagram_type or (handle.diagram_type if handle else "") or "Diagram"
        return cls(
            kind=MediaKind.DIAGRAM,
            fallback_text=f"[{diagram_type} diagram]",
            handle=handle,
        )

    @property
    def label(self) -> str:
        """Human label used in placeholder text (``Image`` or the diagram type)."""
        if self.kind is MediaKind.IMAGE:
            return "Image"
        if self.handle is not None and self.handle.diagram_type:
            return self.handle.diagram_type
        return "Diagram"

    def with_pixels(self, pixels: RasterImage, fallback_text: Optional[str] = None) -> "MediaBlock":
        return replace(
            self,
            pixels=pixels,
            intrinsic_w=pixels.width,
            intrinsic_h=pixels.height,
            fallback_text=fallback_text if fallback_text is not None else self.fallback_text,
        )

    def with_failure(self, fallback_text: str) -> "MediaBlock":
        return replace(self, pixels=None, fallback_text=fallback_text)


ContentBlock = Union[Heading, Paragraph, CodeBlock, ListBlock, TableBlock, MediaBlock]

CONTENT_BLOCK_TYPES = (Heading, Paragraph, CodeBlock, ListBlock, TableBlock, MediaBlock)

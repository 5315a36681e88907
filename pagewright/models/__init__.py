"""Content block model and presentation element handles."""

from .blocks import (
    CONTENT_BLOCK_TYPES,
    CodeBlock,
    ContentBlock,
    Emphasis,
    Heading,
    ListBlock,
    MediaBlock,
    MediaKind,
    Paragraph,
    RasterImage,
    TableBlock,
)
from .elements import ElementHandle

__all__ = [
    "CONTENT_BLOCK_TYPES",
    "CodeBlock",
    "ContentBlock",
    "ElementHandle",
    "Emphasis",
    "Heading",
    "ListBlock",
    "MediaBlock",
    "MediaKind",
    "Paragraph",
    "RasterImage",
    "TableBlock",
]

"""
pagewright - pagination and rendering for content block documents.

Turns an ordered sequence of headings, paragraphs, lists, tables, code blocks
and captured images/diagrams into a paginated PDF with running headers and
footers.

Quick Start:
    from pagewright import export_document, Heading, Paragraph

    blocks = [Heading(1, "Notes"), Paragraph("Hello world")]
    export_document(blocks, "notes.md", output="notes.pdf")
"""

from .version import __version__, __version_info__

from .exceptions import (
    CaptureFailure,
    ConfigurationError,
    DrawFailure,
    ExportCancelled,
    LayoutError,
    PagewrightError,
    SinkUnavailable,
)
from .models import (
    CodeBlock,
    ContentBlock,
    ElementHandle,
    Emphasis,
    Heading,
    ListBlock,
    MediaBlock,
    MediaKind,
    Paragraph,
    RasterImage,
    TableBlock,
)
from .normalize import normalize
from .config import ExportOptions, generate_filename
from .engine import CancellationToken, FlowEngine, LayoutSummary, Margins, Orientation, PageFormat
from .capture import CaptureAdapter, PillowRasterizer, RasterCache
from .sinks import RecordingSink, ReportLabSink
from .api import ExportResult, export_document

__all__ = [
    "__version__",
    "__version_info__",
    "CancellationToken",
    "CaptureAdapter",
    "CaptureFailure",
    "CodeBlock",
    "ConfigurationError",
    "ContentBlock",
    "DrawFailure",
    "ElementHandle",
    "Emphasis",
    "ExportCancelled",
    "ExportOptions",
    "ExportResult",
    "FlowEngine",
    "Heading",
    "LayoutError",
    "LayoutSummary",
    "ListBlock",
    "Margins",
    "MediaBlock",
    "MediaKind",
    "Orientation",
    "PageFormat",
    "PagewrightError",
    "Paragraph",
    "PillowRasterizer",
    "RasterCache",
    "RasterImage",
    "RecordingSink",
    "ReportLabSink",
    "SinkUnavailable",
    "TableBlock",
    "export_document",
    "generate_filename",
    "normalize",
]

"""Document sinks: the consumers of page-level draw commands."""

from .base import DocumentSink
from .recording import (
    DrawCommand,
    ImageCommand,
    RecordedDocument,
    RecordingSink,
    RectCommand,
    TextCommand,
)
from .reportlab_sink import ReportLabSink

__all__ = [
    "DocumentSink",
    "DrawCommand",
    "ImageCommand",
    "RecordedDocument",
    "RecordingSink",
    "RectCommand",
    "ReportLabSink",
    "TextCommand",
]

"""

High-level export API.

Usage example:
>>> from pagewright import export_document, Heading, Paragraph
>>>
>>> blocks = [Heading(1, "Notes"), Paragraph("Hello world")]
>>> result = export_document(blocks, "notes.md", output="notes.pdf")
>>> result.summary.pages
1

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Optional, Union

from .capture import CaptureAdapter, PillowRasterizer, RasterCache, Rasterizer
from .config import ExportOptions, generate_filename
from .engine.flow_engine import CancellationToken, FlowEngine, LayoutSummary
from .exceptions import PagewrightError, SinkUnavailable
from .models.blocks import ContentBlock
from .normalize import normalize
from .sinks.base import DocumentSink
from .sinks.reportlab_sink import ReportLabSink

logger = logging.getLogger(__name__)

__all__ = ["ExportResult", "export_document"]


@dataclass
class ExportResult:
    """Outcome of one export run."""

    document: Any
    filename: str
    summary: LayoutSummary


def export_document(
    blocks: Iterable[ContentBlock],
    title: str,
    options: Optional[ExportOptions] = None,
    *,
    sink: Optional[DocumentSink] = None,
    output: Optional[Union[str, Path, BinaryIO]] = None,
    rasterizer: Optional[Rasterizer] = None,
    cache: Optional[RasterCache] = None,
    export_date: Optional[date] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> ExportResult:
    """
    Capture media, lay out all blocks and finalize the document.

    Args:
        blocks: Content blocks in document order
        title: Document title used in the header and the default filename
        options: Export options (defaults: A4 portrait, 20 mm margins)
        sink: Document sink; a ReportLab PDF sink is created when omitted
        output: PDF target (path, directory or binary stream) for the default sink
        rasterizer: Rasterization collaborator for media blocks
        cache: Raster cache shared between exports
        export_date: Date shown in the header and used in the filename
        cancel_token: Token checked between blocks

    Returns:
        ExportResult with the finalized document and the layout summary

    Raises:
        ConfigurationError: If the options are invalid (nothing is drawn)
        SinkUnavailable: If the sink fails its capability probe
        ExportCancelled: If the token is cancelled during layout
        PagewrightError: If the export fails for any other reason
    """
    options = (options or ExportOptions()).validate()
    export_date = export_date or date.today()
    filename = options.filename or generate_filename(title, export_date)

    if sink is None:
        sink = _default_sink(options, title, filename, output)
    elif not type(sink).is_supported():
        raise SinkUnavailable("Document sink is not supported", details=type(sink).__name__)

    logger.info(f"Exporting '{title}' to {filename}")

    try:
        adapter = CaptureAdapter(rasterizer or PillowRasterizer(), cache=cache)
        captured = adapter.capture_all(blocks)

        engine = FlowEngine(
            sink,
            options,
            title=title,
            export_date=export_date,
            cancel_token=cancel_token,
        )
        summary = engine.render(captured)
        document = sink.finalize()
    except PagewrightError:
        raise
    except Exception as exc:
        logger.error(f"Export of '{title}' failed: {exc}")
        raise PagewrightError("Failed to export PDF", details=str(exc)) from exc

    logger.info(f"Export complete: {summary.pages} page(s)")
    return ExportResult(document=document, filename=filename, summary=summary)


def _default_sink(
    options: ExportOptions,
    title: str,
    filename: str,
    output: Optional[Union[str, Path, BinaryIO]],
) -> ReportLabSink:
    if not ReportLabSink.is_supported():
        raise SinkUnavailable("PDF generation is not available", details="ReportLab core fonts missing")

    if output is None:
        target: Union[str, Path, BinaryIO] = Path(filename)
    elif hasattr(output, "write"):
        target = output
    else:
        target = Path(output)
        if target.is_dir():
            target = target / filename

    return ReportLabSink(target, options.geometry.size, title=normalize(title) or None)

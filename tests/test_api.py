"""Tests for the high-level export API."""

from datetime import date
from io import BytesIO
from unittest.mock import Mock

import pytest

from pagewright.api import ExportResult, export_document
from pagewright.capture.cache import RasterCache
from pagewright.config import ExportOptions
from pagewright.engine.flow_engine import CancellationToken
from pagewright.exceptions import ConfigurationError, ExportCancelled, PagewrightError, SinkUnavailable
from pagewright.models.blocks import CodeBlock, Heading, ListBlock, MediaBlock, MediaKind, Paragraph, RasterImage, TableBlock
from pagewright.models.elements import ElementHandle
from pagewright.sinks.recording import ImageCommand, RecordedDocument, RecordingSink


class UnsupportedSink(RecordingSink):
    @classmethod
    def is_supported(cls):
        return False


class ExplodingSink(RecordingSink):
    def draw_rect(self, x, y, w, h, fill_color):
        raise RuntimeError("disk on fire")


@pytest.fixture
def sample_blocks(image_handle):
    return [
        Heading(1, "Quarterly report \U0001F4C8"),
        Paragraph("Revenue grew in every region. " * 10),
        ListBlock.from_items(["North", "South"], ordered=True),
        TableBlock.from_cells([["Region", "Revenue"], ["North", "10"]]),
        CodeBlock.from_text("SELECT *\nFROM sales;"),
        MediaBlock.image(image_handle),
        MediaBlock.diagram(ElementHandle(tag="div", classes=["mermaid-diagram"], children=[ElementHandle(tag="svg")])),
    ]


class TestExportDocument:
    """Test suite for export_document."""

    def test_recording_export(self, sample_blocks, export_day):
        result = export_document(sample_blocks, "report.md", sink=RecordingSink(), export_date=export_day)

        assert isinstance(result, ExportResult)
        assert isinstance(result.document, RecordedDocument)
        assert result.filename == "report_2024-03-15.pdf"
        assert result.summary.pages == result.document.page_count == 1
        assert result.summary.blocks_placed == len(sample_blocks)
        # image captured, diagram without raster falls back
        assert sum(isinstance(c, ImageCommand) for c in result.document.commands()) == 1
        assert "[mermaid — capture failed]" in result.document.texts()
        assert "Exported: 2024-03-15" in result.document.texts()

    def test_pdf_to_stream(self, sample_blocks, export_day):
        buffer = BytesIO()
        result = export_document(sample_blocks, "report.md", output=buffer, export_date=export_day)

        assert result.document.startswith(b"%PDF")
        assert buffer.getvalue() == result.document

    def test_pdf_into_directory_uses_generated_name(self, tmp_path, export_day):
        result = export_document([Paragraph("hi")], "notes.md", output=tmp_path, export_date=export_day)

        assert result.document == tmp_path / "notes_2024-03-15.pdf"
        assert result.document.read_bytes().startswith(b"%PDF")

    def test_explicit_filename_option(self, tmp_path):
        options = ExportOptions(filename="custom.pdf")
        result = export_document([Paragraph("hi")], "notes.md", options, output=tmp_path)

        assert result.filename == "custom.pdf"
        assert (tmp_path / "custom.pdf").exists()

    def test_truncated_raster_falls_back_in_pdf(self, png_factory):
        png = png_factory(300, 200)
        broken = MediaBlock(
            kind=MediaKind.IMAGE,
            fallback_text="[Image: broken]",
            pixels=RasterImage(png[: len(png) // 2], 300, 200),
        )
        buffer = BytesIO()

        result = export_document([broken, Paragraph("after")], "t.md", output=buffer)

        assert result.summary.fallbacks == 1
        assert result.summary.blocks_placed == 2
        assert result.document.startswith(b"%PDF")

    def test_invalid_options_raise_before_sink_is_touched(self):
        sink = Mock(spec=RecordingSink)
        with pytest.raises(ConfigurationError):
            export_document([Paragraph("x")], "t", ExportOptions(font_size=-2), sink=sink)
        assert sink.method_calls == []

    def test_unsupported_sink(self):
        sink = UnsupportedSink()
        with pytest.raises(SinkUnavailable):
            export_document([Paragraph("x")], "t", sink=sink)
        assert sink.document.page_count == 0

    def test_unexpected_error_wrapped(self):
        with pytest.raises(PagewrightError) as exc_info:
            export_document([CodeBlock.from_text("x = 1")], "t", sink=ExplodingSink())

        assert exc_info.value.message == "Failed to export PDF"
        assert "disk on fire" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_cancellation_propagates(self):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(ExportCancelled):
            export_document([Paragraph("x")], "t", sink=RecordingSink(), cancel_token=token)

    def test_custom_rasterizer_and_shared_cache(self, png_bytes):
        rasterizer = Mock()
        rasterizer.rasterize.return_value = (png_bytes, 40, 20)
        cache = RasterCache()
        container = ElementHandle(
            tag="div",
            classes=["plantuml-diagram"],
            children=[ElementHandle(tag="svg")],
            source="@startuml\nA -> B\n@enduml",
        )
        blocks = [MediaBlock.diagram(container)]

        export_document(blocks, "a", sink=RecordingSink(), rasterizer=rasterizer, cache=cache)
        second = export_document(blocks, "b", sink=RecordingSink(), rasterizer=rasterizer, cache=cache)

        assert rasterizer.rasterize.call_count == 1
        assert any(isinstance(c, ImageCommand) for c in second.document.commands())

    def test_default_export_date(self):
        result = export_document([], "t.md", sink=RecordingSink())
        assert result.filename == f"t_{date.today().isoformat()}.pdf"

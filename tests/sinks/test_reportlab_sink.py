"""Tests for the ReportLab PDF sink."""

from io import BytesIO

import pytest

from pagewright.engine.geometry import Size
from pagewright.exceptions import DrawFailure, SinkUnavailable
from pagewright.sinks.reportlab_sink import ReportLabSink

A4 = Size(210.0, 297.0)


class TestReportLabSink:
    """Test suite for ReportLabSink."""

    def test_is_supported(self):
        assert ReportLabSink.is_supported() is True

    def test_writes_pdf_to_stream(self, png_bytes):
        buffer = BytesIO()
        sink = ReportLabSink(buffer, A4, title="Notes")
        sink.start_page()
        sink.draw_text(20, 30, "Hello", "helvetica", 11, "bold")
        sink.draw_rect(18, 40, 174, 20, (245, 245, 245))
        sink.draw_image(20, 70, 40, 20, png_bytes)
        sink.start_page()
        sink.draw_text(20, 30, "Code", "courier", 10)

        data = sink.finalize()

        assert data.startswith(b"%PDF")
        assert sink._pages_started == 2

    def test_writes_pdf_file(self, tmp_path):
        target = tmp_path / "out.pdf"
        sink = ReportLabSink(target, A4)
        sink.start_page()
        sink.draw_text(20, 30, "Hello", "helvetica", 11)

        result = sink.finalize()

        assert result == target
        assert target.read_bytes().startswith(b"%PDF")

    def test_finalize_is_idempotent(self):
        buffer = BytesIO()
        sink = ReportLabSink(buffer, A4)
        first = sink.finalize()
        assert sink.finalize() == first
        assert first.startswith(b"%PDF")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(SinkUnavailable):
            ReportLabSink(tmp_path / "missing" / "out.pdf", A4)

    def test_corrupt_image_raises_draw_failure(self):
        sink = ReportLabSink(BytesIO(), A4)
        sink.start_page()
        with pytest.raises(DrawFailure):
            sink.draw_image(0, 0, 10, 10, b"definitely not an image")

    def test_truncated_image_raises_draw_failure(self, png_factory):
        png = png_factory(300, 200)
        sink = ReportLabSink(BytesIO(), A4)
        sink.start_page()
        with pytest.raises(DrawFailure):
            sink.draw_image(20, 30, 80, 50, png[: len(png) // 2])

    def test_sink_usable_after_rejected_image(self, png_factory, png_bytes):
        png = png_factory(300, 200)
        sink = ReportLabSink(BytesIO(), A4)
        sink.start_page()
        with pytest.raises(DrawFailure):
            sink.draw_image(20, 30, 80, 50, png[: len(png) // 2])
        sink.draw_image(20, 90, 40, 20, png_bytes)
        sink.draw_text(20, 120, "after", "helvetica", 11)

        assert sink.finalize().startswith(b"%PDF")

    def test_y_axis_flipped(self):
        sink = ReportLabSink(BytesIO(), A4)
        assert sink._y(0) == pytest.approx(297.0 * 72 / 25.4)
        assert sink._y(297.0) == pytest.approx(0.0)

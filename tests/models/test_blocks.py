"""Tests for the content block model."""

import pytest

from pagewright.models.blocks import (
    CodeBlock,
    Emphasis,
    Heading,
    ListBlock,
    MediaBlock,
    MediaKind,
    Paragraph,
    RasterImage,
    TableBlock,
)
from pagewright.models.elements import ElementHandle


class TestTextBlocks:
    """Test suite for text-bearing blocks."""

    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_heading_level_out_of_range(self, level):
        with pytest.raises(ValueError):
            Heading(level=level, text="x")

    def test_heading_is_immutable(self):
        heading = Heading(level=2, text="Intro")
        with pytest.raises(AttributeError):
            heading.text = "Changed"

    def test_paragraph_default_emphasis(self):
        assert Paragraph("text").emphasis is Emphasis.NORMAL

    def test_code_block_from_text_keeps_lines_verbatim(self):
        block = CodeBlock.from_text("def f():\n    return 1\n")
        assert block.lines == ("def f():", "    return 1", "")

    def test_unordered_list_prefix(self):
        block = ListBlock.from_items(["one", "two"])
        assert block.rendered_lines == ("• one", "• two")

    def test_ordered_list_prefix(self):
        block = ListBlock.from_items(["one", "two", "three"], ordered=True)
        assert block.rendered_lines == ("1. one", "2. two", "3. three")

    def test_table_rows_joined(self):
        block = TableBlock.from_cells([["Name", "Age"], ["Ada", "36"]])
        assert block.rendered_rows == ("Name | Age", "Ada | 36")


class TestMediaBlock:
    """Test suite for MediaBlock."""

    def test_image_placeholder_uses_alt(self):
        block = MediaBlock.image(ElementHandle(tag="img", src="a.png", alt="Logo"))
        assert block.kind is MediaKind.IMAGE
        assert block.fallback_text == "[Image: Logo]"
        assert block.pixels is None

    def test_image_placeholder_default(self):
        assert MediaBlock.image(ElementHandle(tag="img")).fallback_text == "[Image: Embedded image]"

    def test_diagram_placeholder_uses_container_class(self):
        container = ElementHandle(tag="div", classes=["diagram", "mermaid-diagram"])
        block = MediaBlock.diagram(container)
        assert block.fallback_text == "[mermaid diagram]"
        assert block.label == "mermaid"

    def test_diagram_without_type(self):
        block = MediaBlock.diagram(ElementHandle(tag="div"))
        assert block.fallback_text == "[Diagram diagram]"
        assert block.label == "Diagram"

    def test_negative_intrinsic_size_rejected(self):
        with pytest.raises(ValueError):
            MediaBlock(kind=MediaKind.IMAGE, fallback_text="x", intrinsic_w=-1)

    def test_with_pixels_sets_intrinsic_size(self):
        block = MediaBlock.image(ElementHandle(tag="img"))
        pixels = RasterImage(data=b"png", width=300, height=150)
        captured = block.with_pixels(pixels, "[Image: captured]")
        assert captured.pixels is pixels
        assert (captured.intrinsic_w, captured.intrinsic_h) == (300, 150)
        assert captured.fallback_text == "[Image: captured]"
        assert block.pixels is None

    def test_with_failure_clears_pixels(self):
        block = MediaBlock(
            kind=MediaKind.IMAGE,
            fallback_text="x",
            pixels=RasterImage(data=b"png", width=1, height=1),
        )
        failed = block.with_failure("[Image — capture failed]")
        assert failed.pixels is None
        assert failed.fallback_text == "[Image — capture failed]"

    @pytest.mark.parametrize("size", [(0, 10), (10, 0), (-5, 5)])
    def test_raster_dimensions_must_be_positive(self, size):
        with pytest.raises(ValueError):
            RasterImage(data=b"", width=size[0], height=size[1])


class TestElementHandle:
    """Test suite for ElementHandle."""

    def test_tag_lowercased(self):
        assert ElementHandle(tag="SVG").tag == "svg"

    def test_find_depth_first(self):
        svg = ElementHandle(tag="svg")
        wrapper = ElementHandle(tag="div", children=[ElementHandle(tag="span"), ElementHandle(tag="div", children=[svg])])
        assert wrapper.find("svg") is svg
        assert wrapper.find("img") is None

    @pytest.mark.parametrize(
        "src,expected",
        [
            ("data:image/png;base64,AAAA", True),
            ("blob:http://localhost/1234", True),
            ("images/a.png", True),
            ("https://example.com/a.png", False),
            (None, False),
        ],
    )
    def test_has_pixel_uri(self, src, expected):
        assert ElementHandle(tag="img", src=src).has_pixel_uri is expected

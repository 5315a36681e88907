"""Layout engine: page geometry, text measurement and the flow engine."""

from .flow_engine import CancellationToken, FlowEngine, FlowState, LayoutSummary, Placement
from .geometry import Margins, Orientation, PageFormat, PageGeometry, Rect, Size, page_size_mm
from .header_footer import HeaderFooterRenderer
from .layout_context import FOOTER_BAND_HEIGHT, HEADER_BAND_HEIGHT, LayoutContext
from .line_breaker import LineBreaker
from .text_metrics import MonospaceMetrics, TextMetricsEngine

__all__ = [
    "CancellationToken",
    "FOOTER_BAND_HEIGHT",
    "FlowEngine",
    "FlowState",
    "HEADER_BAND_HEIGHT",
    "HeaderFooterRenderer",
    "LayoutContext",
    "LayoutSummary",
    "LineBreaker",
    "Margins",
    "MonospaceMetrics",
    "Orientation",
    "PageFormat",
    "PageGeometry",
    "Placement",
    "Rect",
    "Size",
    "TextMetricsEngine",
    "page_size_mm",
]

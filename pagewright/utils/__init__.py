"""Helper utilities: logging setup and unit conversions."""

from .logger import get_logger, setup_logging
from .units import (
    PT_TO_MM,
    MM_TO_PT,
    PX_TO_MM,
    mm_to_points,
    points_to_mm,
    pixels_to_mm,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "PT_TO_MM",
    "MM_TO_PT",
    "PX_TO_MM",
    "mm_to_points",
    "points_to_mm",
    "pixels_to_mm",
]

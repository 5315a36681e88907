"""Capture phase: rasterize media blocks before layout."""

from .adapter import CaptureAdapter
from .cache import RasterCache, cache_key
from .rasterizer import PillowRasterizer, Rasterizer

__all__ = ["CaptureAdapter", "PillowRasterizer", "RasterCache", "Rasterizer", "cache_key"]

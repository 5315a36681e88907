"""
Capture adapter - turns media blocks into embeddable rasters.

Runs before layout: every media block is captured in document order, one
rasterization at a time, and the flow engine only ever sees the result.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from ..models.blocks import ContentBlock, MediaBlock, MediaKind, RasterImage
from ..models.elements import ElementHandle
from .cache import RasterCache
from .rasterizer import Rasterizer

logger = logging.getLogger(__name__)

DEFAULT_DIAGRAM_WIDTH = 800
DEFAULT_DIAGRAM_HEIGHT = 600
DIAGRAM_SCALE = 2.0
IMAGE_SCALE = 1.0

_PX_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:px)?\s*$")


def _explicit_px(value: Optional[str]) -> Optional[int]:
    """``"640px"``/``"640"`` -> 640; unset, ``100%``, ``auto`` and other units -> None."""
    if not value:
        return None
    match = _PX_RE.match(value)
    return round(float(match.group(1))) if match else None


class CaptureAdapter:
    """

    Fill in ``pixels`` for media blocks.

    A failed capture never raises: the block comes back with ``pixels=None``
    and a ``"[<kind> — capture failed]"`` fallback text.

    """

    def __init__(self, rasterizer: Rasterizer, cache: Optional[RasterCache] = None) -> None:
        self.rasterizer = rasterizer
        self.cache = cache
        self.captured = 0
        self.failed = 0

    def capture_all(self, blocks: Iterable[ContentBlock]) -> List[ContentBlock]:
        """Capture every media block in order; other blocks pass through untouched."""
        result: List[ContentBlock] = []
        for block in blocks:
            if isinstance(block, MediaBlock):
                block = self.capture(block)
            result.append(block)

        if self.captured or self.failed:
            logger.info(f"Capture finished: {self.captured} captured, {self.failed} failed")
        return result

    def capture(self, block: MediaBlock) -> MediaBlock:
        if block.pixels is not None:
            return block

        if block.handle is None:
            return self._fail(block, "no element handle")

        if block.kind is MediaKind.IMAGE:
            target, width, height, scale = block.handle, None, None, IMAGE_SCALE
        else:
            target, width, height, scale = self._diagram_target(block.handle)

        source_key = block.handle.source or target.src or ""
        if self.cache is not None and source_key:
            cached = self.cache.get(source_key)
            if cached is not None:
                self.captured += 1
                return self._captured(block, cached)

        try:
            data, px_w, px_h = self.rasterizer.rasterize(target, width=width, height=height, scale=scale)
            pixels = RasterImage(data=data, width=px_w, height=px_h)
        except Exception as exc:
            return self._fail(block, str(exc))

        if self.cache is not None and source_key:
            self.cache.put(source_key, pixels)

        self.captured += 1
        logger.debug(f"Captured {block.label}: {px_w}x{px_h} px")
        return self._captured(block, pixels)

    def _diagram_target(self, container: ElementHandle) -> Tuple[ElementHandle, Optional[int], Optional[int], float]:
        """Pick the element to rasterize and the pixel size to force on it."""
        if container.tag in ("svg", "img"):
            target = container
        else:
            target = container.find("svg") or container.find("img") or container

        if target.tag == "img":
            return target, None, None, IMAGE_SCALE
        if target.tag != "svg":
            return target, None, None, DIAGRAM_SCALE

        width = _explicit_px(target.style_width)
        if width is None:
            width = container.offset_width or DEFAULT_DIAGRAM_WIDTH
        height = _explicit_px(target.style_height)
        if height is None:
            height = container.offset_height or DEFAULT_DIAGRAM_HEIGHT
        return target, width, height, DIAGRAM_SCALE

    def _captured(self, block: MediaBlock, pixels: RasterImage) -> MediaBlock:
        block = block.with_pixels(pixels, self._captured_text(block))
        display = self._display_size(block.handle, pixels)
        if display is None:
            return block
        return replace(block, intrinsic_w=display[0], intrinsic_h=display[1])

    @staticmethod
    def _display_size(handle: Optional[ElementHandle], pixels: RasterImage) -> Optional[Tuple[int, int]]:
        """Declared ``width``/``height`` of the element; a missing side keeps the aspect ratio."""
        if handle is None:
            return None
        width, height = max(handle.declared_width, 0), max(handle.declared_height, 0)
        if not (width or height):
            return None
        if not width:
            width = max(1, round(pixels.width * height / pixels.height))
        elif not height:
            height = max(1, round(pixels.height * width / pixels.width))
        return width, height

    @staticmethod
    def _captured_text(block: MediaBlock) -> str:
        if block.kind is MediaKind.IMAGE:
            alt = block.handle.alt if block.handle is not None else ""
            return f"[Image: {alt or 'Embedded image'} - captured]"
        return f"[{block.label} diagram captured]"

    def _fail(self, block: MediaBlock, reason: str) -> MediaBlock:
        self.failed += 1
        logger.warning(f"Capture of {block.label} failed: {reason}")
        return block.with_failure(f"[{block.label} — capture failed]")

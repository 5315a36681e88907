"""
Rasterization collaborator.

Turns a presentation element that already points at pixels (``data:`` URI,
registered ``blob:`` URL or local file) into PNG bytes. Vector rendering and
network retrieval belong to the host application and are not attempted here.
"""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from pathlib import Path
from typing import Mapping, Optional, Protocol, Tuple, Union
from urllib.parse import unquote, urlparse

from PIL import Image, UnidentifiedImageError

from ..exceptions import CaptureFailure
from ..models.elements import ElementHandle

logger = logging.getLogger(__name__)

RasterResult = Tuple[bytes, int, int]

_PNG_MODES = ("1", "L", "LA", "P", "RGB", "RGBA")


class Rasterizer(Protocol):
    def rasterize(
        self,
        handle: ElementHandle,
        width: Optional[int] = None,
        height: Optional[int] = None,
        scale: float = 1.0,
    ) -> RasterResult:
        """Return ``(png_bytes, width_px, height_px)`` or raise."""


class PillowRasterizer:
    """
    Rasterizer backed by Pillow.

    Args:
        base_dir: Directory relative file paths are resolved against
        blobs: Payloads for ``blob:`` URLs, keyed by the full URL
    """

    def __init__(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        blobs: Optional[Mapping[str, bytes]] = None,
    ) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.blobs = dict(blobs or {})

    def rasterize(
        self,
        handle: ElementHandle,
        width: Optional[int] = None,
        height: Optional[int] = None,
        scale: float = 1.0,
    ) -> RasterResult:
        if scale <= 0:
            raise CaptureFailure("Raster scale must be positive", details=str(scale))

        payload = self._load(handle)
        try:
            with Image.open(BytesIO(payload)) as image:
                image.load()
                target_w = round((width or image.width) * scale)
                target_h = round((height or image.height) * scale)
                if target_w <= 0 or target_h <= 0:
                    raise CaptureFailure("Raster target size is empty", details=f"{target_w}x{target_h}")

                if (target_w, target_h) != image.size:
                    image = image.resize((target_w, target_h), Image.Resampling.LANCZOS)
                if image.mode not in _PNG_MODES:
                    image = image.convert("RGBA")

                buffer = BytesIO()
                image.save(buffer, format="PNG")
        except (UnidentifiedImageError, OSError) as exc:
            raise CaptureFailure("Could not decode image", details=str(exc)) from exc

        logger.debug(f"Rasterized <{handle.tag}> to {target_w}x{target_h} px")
        return buffer.getvalue(), target_w, target_h

    def _load(self, handle: ElementHandle) -> bytes:
        src = handle.src
        if not src:
            raise CaptureFailure("Element has no raster source", details=f"<{handle.tag}>")

        if src.startswith("data:"):
            return _decode_data_uri(src)

        if src.startswith("blob:"):
            if src not in self.blobs:
                raise CaptureFailure("Unknown blob URL", details=src)
            return self.blobs[src]

        parsed = urlparse(src)
        if parsed.scheme in ("http", "https"):
            raise CaptureFailure("Remote images are not fetched", details=src)

        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(src)
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        try:
            return path.read_bytes()
        except OSError as exc:
            raise CaptureFailure("Could not read image file", details=str(path)) from exc


def _decode_data_uri(uri: str) -> bytes:
    header, sep, data = uri.partition(",")
    if not sep:
        raise CaptureFailure("Malformed data URI", details=uri[:40])

    if header.endswith(";base64"):
        try:
            return base64.b64decode(data, validate=True)
        except ValueError as exc:
            raise CaptureFailure("Malformed base64 payload", details=str(exc)) from exc
    return unquote(data).encode("latin-1", errors="replace")

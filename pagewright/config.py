"""
Export configuration.

Options can be built directly, or from a dictionary using either the
snake_case field names or the camelCase keys of the export dialog
(``includeHeader``, ``fontSize``, ``lineHeight``, ``format``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Mapping, Optional

from .engine.geometry import Margins, Orientation, PageFormat, PageGeometry
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTION = "Generated by MarkDown Buddy"

_KEY_ALIASES = {
    "format": "page_format",
    "pageFormat": "page_format",
    "includeHeader": "include_header",
    "includeFooter": "include_footer",
    "fontSize": "font_size",
    "lineHeight": "line_height",
    "line_height_multiplier": "line_height",
}


@dataclass(frozen=True)
class ExportOptions:
    """Language-agnostic export option set."""

    page_format: PageFormat = PageFormat.A4
    orientation: Orientation = Orientation.PORTRAIT
    margins: Margins = field(default_factory=lambda: Margins.uniform(20.0))
    include_header: bool = True
    include_footer: bool = True
    font_size: float = 11.0
    line_height: float = 1.0
    filename: Optional[str] = None
    attribution: str = DEFAULT_ATTRIBUTION

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> "ExportOptions":
        """
        Build options from a partial mapping; missing keys keep their defaults.

        Raises:
            ConfigurationError: For unknown keys or values that cannot be coerced
        """
        values: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _KEY_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ConfigurationError("Unknown export option", details=key)
            values[name] = value

        try:
            if "page_format" in values:
                values["page_format"] = _coerce_format(values["page_format"])
            if "orientation" in values and not isinstance(values["orientation"], Orientation):
                values["orientation"] = Orientation(str(values["orientation"]).lower())
            if "margins" in values:
                values["margins"] = _coerce_margins(values["margins"])
            for name in ("font_size", "line_height"):
                if name in values:
                    values[name] = float(values[name])
        except (ValueError, TypeError) as exc:
            raise ConfigurationError("Invalid export option", details=str(exc)) from exc

        return cls(**values)

    def merged(self, **overrides: Any) -> "ExportOptions":
        return replace(self, **overrides)

    @property
    def geometry(self) -> PageGeometry:
        return PageGeometry.for_format(self.page_format, self.orientation, self.margins)

    def validate(self) -> "ExportOptions":
        """
        Check the options before any page is started.

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: If any option is unusable
        """
        if self.filename is not None and not self.filename.strip():
            raise ConfigurationError("Filename cannot be empty")
        if not isinstance(self.page_format, PageFormat):
            raise ConfigurationError("Invalid page format", details=repr(self.page_format))
        if not isinstance(self.orientation, Orientation):
            raise ConfigurationError("Invalid orientation", details=repr(self.orientation))
        if self.font_size <= 0:
            raise ConfigurationError("Font size must be positive", details=str(self.font_size))
        if self.font_size - 1 <= 0:
            raise ConfigurationError("Font size must leave room for code and table text", details=str(self.font_size))
        if self.line_height <= 0:
            raise ConfigurationError("Line height multiplier must be positive", details=str(self.line_height))
        if min(self.margins.as_tuple()) < 0:
            raise ConfigurationError("Margins cannot be negative", details=str(self.margins))

        geometry = self.geometry
        if geometry.content_width <= 0 or geometry.content_height <= 0:
            raise ConfigurationError(
                "Margins leave no content area",
                details=f"{geometry.content_width:.1f}x{geometry.content_height:.1f} mm",
            )
        logger.debug(f"Export options validated: {self.page_format.value} {self.orientation.value}")
        return self


def _coerce_format(value: Any) -> PageFormat:
    if isinstance(value, PageFormat):
        return value
    for page_format in PageFormat:
        if str(value).lower() == page_format.value.lower():
            return page_format
    raise ValueError(f"'{value}' is not a valid page format")


def _coerce_margins(value: Any) -> Margins:
    if isinstance(value, Margins):
        return value
    if isinstance(value, (int, float)):
        return Margins.uniform(float(value))
    if isinstance(value, Mapping):
        return Margins(
            top=float(value.get("top", 20.0)),
            right=float(value.get("right", 20.0)),
            bottom=float(value.get("bottom", 20.0)),
            left=float(value.get("left", 20.0)),
        )
    top, right, bottom, left = value
    return Margins(float(top), float(right), float(bottom), float(left))


def generate_filename(title: str, export_date: Optional[date] = None) -> str:
    """Default output name: title without extension plus the ISO export date."""
    base_name = re.sub(r"\.[^/.]+$", "", title or "document") or "document"
    stamp = (export_date or date.today()).isoformat()
    return f"{base_name}_{stamp}.pdf"

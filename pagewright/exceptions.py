"""Custom exceptions for pagewright."""

from typing import Optional


class PagewrightError(Exception):
    """Base exception for pagewright errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(PagewrightError):
    """Exception raised for invalid export options, before any page is started."""

    pass


class SinkUnavailable(PagewrightError):
    """Exception raised when the document sink cannot be constructed."""

    pass


class CaptureFailure(PagewrightError):
    """Exception raised when a media element cannot be rasterized."""

    pass


class DrawFailure(PagewrightError):
    """Exception raised when the sink rejects a draw call."""

    pass


class LayoutError(PagewrightError):
    """Exception raised during layout calculation."""

    pass


class ExportCancelled(PagewrightError):
    """Exception raised when an export is cancelled at a block boundary."""

    pass

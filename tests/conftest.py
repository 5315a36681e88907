"""
Pytest configuration for pagewright
"""

import base64
import logging
import sys
from datetime import date
from io import BytesIO

import pytest
from PIL import Image

from pagewright.config import ExportOptions
from pagewright.engine.text_metrics import MonospaceMetrics
from pagewright.models.elements import ElementHandle
from pagewright.sinks.recording import RecordingSink


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid handler leaks between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


def make_png(width: int = 40, height: int = 20, color=(200, 30, 30)) -> bytes:
    """Encode a solid-color PNG of the given size."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def data_uri(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


@pytest.fixture
def png_bytes():
    """Small 40x20 PNG."""
    return make_png()


@pytest.fixture
def png_data_uri(png_bytes):
    return data_uri(png_bytes)


@pytest.fixture
def image_handle(png_data_uri):
    return ElementHandle(tag="img", src=png_data_uri, alt="Chart")


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def metrics():
    """Deterministic fixed-advance measurer."""
    return MonospaceMetrics()


@pytest.fixture
def default_options():
    return ExportOptions()


@pytest.fixture
def export_day():
    return date(2024, 3, 15)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    logging.raiseExceptions = False


@pytest.fixture
def png_factory():
    """Callable building PNG bytes: ``png_factory(width, height)``."""
    return make_png

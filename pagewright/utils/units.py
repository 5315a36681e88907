"""
Unit conversions between pixels, points and millimetres.

Layout runs in millimetres; fonts are sized in points and captured rasters
are measured in CSS pixels (96 DPI).
"""

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0
CSS_DPI = 96

PT_TO_MM = MM_PER_INCH / POINTS_PER_INCH  # 0.352778
MM_TO_PT = POINTS_PER_INCH / MM_PER_INCH  # 2.834646
PX_TO_MM = 0.264583


def mm_to_points(value: float) -> float:
    """Convert millimetres to PDF points."""
    return float(value) * MM_TO_PT


def points_to_mm(value: float) -> float:
    """Convert PDF points to millimetres."""
    return float(value) * PT_TO_MM


def pixels_to_mm(value: float) -> float:
    """Convert CSS pixels (96 DPI) to millimetres."""
    return float(value) * PX_TO_MM

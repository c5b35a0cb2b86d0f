"""Unit conversions between millimetres, points and CSS pixels."""

MM_PER_INCH = 25.4
PT_PER_INCH = 72.0
PX_PER_INCH = 96.0


def mm2pt(mm: float) -> float:
    return mm * PT_PER_INCH / MM_PER_INCH


def pt2mm(pt: float) -> float:
    return pt * MM_PER_INCH / PT_PER_INCH


def pt2px(pt: float) -> float:
    """Convert points to CSS pixels (96 px per inch)."""
    return pt * PX_PER_INCH / PT_PER_INCH

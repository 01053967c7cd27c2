"""Pure scale/fit functions, extents, and formatting for drawn objects."""
import math
from typing import Iterable, Optional

from .types import Point, Box, Fit

# ============================================================
# Error Type
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""

# ============================================================
# Scale Utilities
# ============================================================

# Used whenever an object has no usable extent.
FALLBACK_SCALE = 0.1

def is_positive(v) -> bool:
    """True for finite numbers strictly greater than zero."""
    return isinstance(v, (int, float)) and math.isfinite(v) and v > 0

def compute_scale(object_w: float, object_h: float, viewport_w: float, viewport_h: float,
                  margin: float = 0.82, max_scale: Optional[float] = None) -> float:
    """Uniform scale that fits object_w x object_h inside the viewport.

    scale = min(viewport_w/object_w, viewport_h/object_h) * margin, then
    clamped to max_scale when given. Degenerate objects get FALLBACK_SCALE;
    a degenerate viewport gets 0 so nothing can overflow it.
    """
    if not (is_positive(object_w) and is_positive(object_h)):
        return FALLBACK_SCALE
    if not (is_positive(viewport_w) and is_positive(viewport_h)):
        return 0.0
    scale = min(viewport_w / object_w, viewport_h / object_h) * margin
    if max_scale is not None and is_positive(max_scale):
        scale = min(scale, max_scale)
    return scale

def center(drawn_w: float, drawn_h: float, viewport_w: float, viewport_h: float) -> Point:
    """Offset that centers a drawn_w x drawn_h object in the viewport."""
    return ((viewport_w - drawn_w) / 2, (viewport_h - drawn_h) / 2)

def fit(object_w: float, object_h: float, box: Box, inset: float = 0.0,
        margin: float = 0.82, max_scale: Optional[float] = None) -> Fit:
    """Scale an object into box (shrunk by inset on each axis) and center it in box."""
    scale = compute_scale(object_w, object_h, box.w - inset, box.h - inset, margin, max_scale)
    w = _extent(object_w) * scale
    h = _extent(object_h) * scale
    dx, dy = center(w, h, box.w, box.h)
    return Fit(scale, box.x + dx, box.y + dy, w, h)

def _extent(v) -> float:
    return v if is_positive(v) else 0.0

def stack_offsets(count: int, first: float, gap: float) -> list[float]:
    """Distances from an object edge for count stacked dimension lines."""
    if gap <= 0:
        raise GeometryError(f"Dimension gap must be positive: gap={gap}")
    return [first + i * gap for i in range(count)]

# ============================================================
# Extents
# ============================================================

def extent(rects: Iterable, floor: float) -> tuple[float, float]:
    """Right/bottom-most edge of rects (anything with x, y, width, height), at least floor."""
    right = bottom = floor
    for r in rects:
        edge_x, edge_y = r.x + r.width, r.y + r.height
        if math.isfinite(edge_x):
            right = max(right, edge_x)
        if math.isfinite(edge_y):
            bottom = max(bottom, edge_y)
    return right, bottom

def rect_corners(x: float, y: float, w: float, h: float) -> list[Point]:
    """Four corners of a rectangle, counter-clockwise from (x, y)."""
    return [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]

# ============================================================
# Formatting
# ============================================================

def fmt_mm(v: float) -> str:
    """Millimetre value without a trailing .0 (600 -> '600', 12.5 -> '12.5')."""
    if float(v).is_integer():
        return str(int(v))
    return f"{v:.1f}"

def truncate(text: str, limit: int) -> str:
    """Shorten text to limit characters, ending in an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[:limit - 1] + "…"

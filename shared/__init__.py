"""Shared types, input model, geometry, scene graph and SVG output."""

from .types import Point, Box, Fit
from .errors import DrawingError, MissingDataError, SerializationError
from .geometry import (
    GeometryError, FALLBACK_SCALE,
    compute_scale, center, fit, stack_offsets, extent, fmt_mm, truncate,
)
from .model import DrawingModel, load_drawing_model
from .scene import Scene, Group, Rect, Line, Circle, Polygon, Text

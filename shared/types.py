"""Shared type definitions for the drawing engine."""
from typing import Literal, NamedTuple

Point = tuple[float, float]

Axis = Literal["horizontal", "vertical"]

class Box(NamedTuple):
    """Axis-aligned box in screen space (y grows downward)."""
    x: float; y: float
    w: float; h: float

class Fit(NamedTuple):
    """An object scaled and centered inside a box."""
    scale: float
    x: float; y: float       # top-left of the drawn object
    w: float; h: float       # drawn size

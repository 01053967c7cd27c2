"""Framework-free scene graph emitted by the composers.

Every primitive is an immutable NamedTuple in screen space (y grows
downward). Adapters (SVG file, inline SVG, print HTML) walk a Scene and
never compute layout.
"""
from typing import NamedTuple

from .types import Point

class Rect(NamedTuple):
    x: float; y: float
    w: float; h: float
    fill: str = "none"
    stroke: str = "none"
    width: float = 0.0
    dash: str = ""
    rx: float = 0.0

class Line(NamedTuple):
    x1: float; y1: float
    x2: float; y2: float
    stroke: str
    width: float = 1.0
    dash: str = ""
    arrows: bool = False     # arrowheads at both ends

class Circle(NamedTuple):
    cx: float; cy: float
    r: float
    fill: str = "none"
    stroke: str = "none"
    width: float = 0.0

class Polygon(NamedTuple):
    points: tuple[Point, ...]
    fill: str = "none"
    stroke: str = "none"
    width: float = 0.0
    opacity: float = 1.0

class Text(NamedTuple):
    x: float; y: float
    text: str
    size: float
    fill: str
    anchor: str = "start"    # start | middle | end
    weight: str = "normal"
    rotate: float = 0.0      # degrees about (x, y)
    spacing: float = 0.0     # letter spacing
    opacity: float = 1.0

class Group(NamedTuple):
    name: str
    items: tuple

class Scene(NamedTuple):
    """One sheet (or diagram) ready for serialization."""
    sheet_id: str
    title: str
    width: float
    height: float
    items: tuple


def walk(items):
    """Yield every primitive in items, flattening groups depth-first."""
    for item in items:
        if isinstance(item, Group):
            yield from walk(item.items)
        else:
            yield item

def find_groups(items, name: str) -> list[Group]:
    """All groups with the given name, at any depth."""
    found = []
    for item in items:
        if isinstance(item, Group):
            if item.name == name:
                found.append(item)
            found.extend(find_groups(item.items, name))
    return found

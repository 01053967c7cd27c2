"""Orthographic view rendering: frame, scaled elements, dimensions, label."""
from typing import Iterable, NamedTuple, Optional

from .dimensions import annotate_view, DimStyle, STANDARD
from .geometry import fit, truncate
from .model import Element, View
from .palette import FRAME, LINE, MUTED, GOLD, kind_color, kind_dash
from .scene import Group, Rect, Text
from .types import Box, Fit


class ViewStyle(NamedTuple):
    inset: float = 60.0         # viewport = cell minus inset on each axis
    margin: float = 0.82
    label_min_w: float = 36.0   # element labels only above this drawn size
    label_min_h: float = 16.0
    label_chars: int = 14
    dims: DimStyle = STANDARD

VIEW = ViewStyle()


def render_elements(elements: Iterable[Element], at: Fit, style: ViewStyle = VIEW) -> Group:
    """Elements scaled by at.scale and offset to at's origin, each at least 1 px."""
    items = []
    for el in elements:
        ex = at.x + el.x * at.scale
        ey = at.y + el.y * at.scale
        ew = max(el.width * at.scale, 1.0)
        eh = max(el.height * at.scale, 1.0)
        parts = [Rect(ex, ey, ew, eh, kind_color(el.kind), LINE, 0.9, kind_dash(el.kind))]
        if ew > style.label_min_w and eh > style.label_min_h and el.name:
            parts.append(Text(ex + ew / 2, ey + eh / 2 + 3, truncate(el.name, style.label_chars),
                              7, MUTED, "middle"))
        items.append(Group("element", tuple(parts)))
    return Group("elements", tuple(items))


def render_view(view: Optional[View], box: Box, label: str, style: ViewStyle = VIEW) -> Group:
    """One view auto-scaled and centered in box.

    A missing view yields an empty group so the cell stays where it is.
    """
    if view is None:
        return Group("view", ())
    at = fit(view.total_width, view.total_height, box, style.inset, style.margin)
    return Group("view", (
        Rect(box.x, box.y, box.w, box.h, "none", FRAME, 0.7),
        Rect(at.x, at.y, at.w, at.h, "none", LINE, 1.4),
        render_elements(view.elements, at, style),
        annotate_view(view.dimensions, at, style.dims),
        Text(box.x + box.w / 2, box.y + box.h - 6, label, 8, GOLD, "middle", "700", spacing=1),
    ))

"""Stacked dimension annotation around a drawn object.

Horizontal dimensions stack downward from the object's bottom edge,
vertical ones leftward from its left edge. Line i sits at
first + i * gap from the edge, so stacked lines never overlap.
"""
from typing import Iterable, NamedTuple

from .geometry import stack_offsets, fmt_mm
from .model import Dimension
from .palette import DIM, MUTED
from .scene import Group, Line, Text
from .types import Fit


class DimStyle(NamedTuple):
    first: float            # edge to first dimension line
    gap: float              # between stacked lines
    overshoot: float = 4.0  # extension line past the dimension line
    inset: float = 2.0      # dimension line pulled in from the extension lines
    label_size: float = 7.5
    caption_size: float = 6.0
    ext_width: float = 0.6
    line_width: float = 0.9

# Assembly views and joint details.
STANDARD = DimStyle(first=6 + 14, gap=22)
# Small per-piece faces.
COMPACT = DimStyle(first=8, gap=10, overshoot=2, inset=0, label_size=6.5, caption_size=5.5,
                   ext_width=0.5, line_width=0.7)


def offsets(dims: Iterable[Dimension], axis: str, style: DimStyle = STANDARD) -> list[float]:
    """Edge distance of every dimension on axis, in list order."""
    count = sum(1 for d in dims if d.axis == axis)
    return stack_offsets(count, style.first, style.gap)


def _horizontal(d: Dimension, off: float, fit: Fit, style: DimStyle) -> list:
    x1 = fit.x + d.start * fit.scale
    x2 = fit.x + d.end * fit.scale
    edge = fit.y + fit.h
    cy = edge + off
    mid = (x1 + x2) / 2
    items = [
        Line(x1, edge, x1, cy + style.overshoot, DIM, style.ext_width, "3,2"),
        Line(x2, edge, x2, cy + style.overshoot, DIM, style.ext_width, "3,2"),
        Line(x1 + style.inset, cy, x2 - style.inset, cy, DIM, style.line_width, arrows=True),
        Text(mid, cy - 4, d.label, style.label_size, DIM, "middle", "700"),
    ]
    if d.description:
        items.append(Text(mid, cy + 11, d.description, style.caption_size, MUTED, "middle"))
    return items


def _vertical(d: Dimension, off: float, fit: Fit, style: DimStyle) -> list:
    y1 = fit.y + d.start * fit.scale
    y2 = fit.y + d.end * fit.scale
    edge = fit.x
    cx = edge - off
    mid = (y1 + y2) / 2
    return [
        Line(edge, y1, cx - style.overshoot, y1, DIM, style.ext_width, "3,2"),
        Line(edge, y2, cx - style.overshoot, y2, DIM, style.ext_width, "3,2"),
        Line(cx, y1 + style.inset, cx, y2 - style.inset, DIM, style.line_width, arrows=True),
        Text(cx - 7, mid, d.label, style.label_size, DIM, "middle", "700", rotate=-90),
    ]


def annotate(dims: Iterable[Dimension], axis: str, fit: Fit, style: DimStyle = STANDARD) -> Group:
    """Dimension lines for every entry of dims on axis around the drawn object at fit.

    Zero-length or reversed spans keep their stack slot but draw nothing.
    Identical spans are not merged.
    """
    dims = [d for d in dims if d.axis == axis]
    draw = _horizontal if axis == "horizontal" else _vertical
    groups = []
    for d, off in zip(dims, stack_offsets(len(dims), style.first, style.gap)):
        if d.end <= d.start:
            continue
        groups.append(Group(f"dim-{axis}", tuple(draw(d, off, fit, style))))
    return Group(f"dimensions-{axis}", tuple(groups))


def annotate_view(dims: Iterable[Dimension], fit: Fit, style: DimStyle = STANDARD) -> Group:
    """Both axes; dimensions on any other axis are ignored."""
    dims = list(dims)
    return Group("dimensions", (annotate(dims, "horizontal", fit, style),
                                annotate(dims, "vertical", fit, style)))


def overall(axis: str, length: float, label: str = "") -> Dimension:
    """Full-span dimension from 0 to length, labelled with the length in mm."""
    return Dimension(axis=axis, start=0.0, end=length, label=label or fmt_mm(length))

"""Per-step assembly diagram: the step's pieces as 2.5D blocks.

Pieces come from associate(); each is drawn as a front face with a
simulated top and side face, a size callout underneath, and a dashed
arrow from the first piece to the second.
"""
import logging
import math
from typing import Sequence

from shared.geometry import compute_scale, fmt_mm, truncate
from shared.model import AssemblyStep, DrawingModel, Piece
from shared.palette import DIM, GOLD, LABEL, MUTED
from shared.scene import Group, Line, Polygon, Rect, Scene, Text

from .associate import associate
from .constants import ARROW, DIAGRAM, FILLS, WATERMARK, DiagramLayout

logger = logging.getLogger(__name__)


def block_size(piece: Piece, max_w: float, layout: DiagramLayout = DIAGRAM) -> tuple[float, float, float]:
    """On-screen (w, h, depth) of a piece's block."""
    sc = compute_scale(piece.length, piece.width, max_w, layout.max_h, 1.0, layout.max_scale)
    w = max(piece.length * sc, layout.min_w)
    h = max(piece.width * sc, layout.min_h)
    d = max(piece.thickness * sc * layout.depth_factor, layout.min_depth)
    return w, h, min(d * layout.depth_ratio, layout.max_depth)


def _block(piece: Piece, x: float, y: float, w: float, h: float, dp: float, fill: str,
           layout: DiagramLayout) -> Group:
    items = [
        Polygon(((x, y), (x + w, y), (x + w + dp, y - dp), (x + dp, y - dp)), fill, LABEL, 0.8, 0.7),
        Rect(x, y, w, h, fill, LABEL, 1.0),
        Polygon(((x + w, y), (x + w + dp, y - dp), (x + w + dp, y + h - dp), (x + w, y + h)),
                fill, LABEL, 0.8, 0.6),
    ]
    if w > 30 and h > 14:
        items.append(Text(x + w / 2, y + h / 2 + 4, truncate(piece.name, layout.label_chars),
                          8, LABEL, "middle", "600"))
    size = f"{fmt_mm(piece.length)}×{fmt_mm(piece.width)}×{fmt_mm(piece.thickness)}"
    items += [
        Line(x, y + h + 10, x + w, y + h + 10, DIM, 0.8),
        Line(x, y + h + 6, x, y + h + 14, DIM, 0.8),
        Line(x + w, y + h + 6, x + w, y + h + 14, DIM, 0.8),
        Text(x + w / 2, y + h + 22, size, 7, DIM, "middle"),
    ]
    return Group("block", tuple(items))


def _arrow(x1: float, y1: float, x2: float, y2: float) -> Group:
    angle = math.atan2(y2 - y1, x2 - x1)
    ca, sa = math.cos(angle), math.sin(angle)
    bx, by = x2 - 8 * ca, y2 - 8 * sa
    head = ((x2, y2), (bx - 4 * sa, by + 4 * ca), (bx + 4 * sa, by - 4 * ca))
    return Group("arrow", (
        Line(x1, y1, bx, by, ARROW, 1.5, "4,2"),
        Polygon(head, ARROW),
    ))


def render_step_diagram(step: AssemblyStep, pieces: Sequence[Piece], total_steps: int,
                        layout: DiagramLayout = DIAGRAM) -> Scene:
    """Diagram of one step with its associated pieces."""
    shown = associate(step.text, pieces, step.number)
    number = f"{step.number:02d}"
    items = [Line(layout.width / 2, 0, layout.width / 2, layout.height, WATERMARK, 0.5, "4,4")]

    placed = []
    if shown:
        slots = layout.slots[len(shown) - 1]
        max_w = layout.max_w[len(shown) - 1]
        for i, (piece, (x, y)) in enumerate(zip(shown, slots)):
            w, h, dp = block_size(piece, max_w, layout)
            placed.append((x, y, w, h))
            items.append(_block(piece, x, y, w, h, dp, FILLS[i % len(FILLS)], layout))
    if len(placed) >= 2:
        (x0, y0, w0, h0), (x1, y1, _, h1) = placed[0], placed[1]
        items.append(_arrow(x0 + w0 + 4, y0 + h0 / 2, x1 - 8, y1 + h1 / 2))

    header = [
        Text(10, 16, f"{number}  {step.operation}", 9, GOLD, weight="700"),
    ]
    if step.minutes > 0:
        header.append(Text(layout.width - 10, 16, f"~{fmt_mm(step.minutes)} min", 8, MUTED, "end"))
    if step.tools:
        header.append(Text(10, 30, " · ".join(step.tools[:layout.max_tools]), 7, MUTED))
    items.append(Group("header", tuple(header)))

    progress = min(step.number / total_steps, 1.0) if total_steps > 0 else 0.0
    items.append(Group("progress", (
        Text(10, layout.height - 14, f"Paso {step.number} / {total_steps}", 7, MUTED),
        Rect(10, layout.height - 9, 120, 3, WATERMARK),
        Rect(10, layout.height - 9, 120 * progress, 3, GOLD),
    )))
    items.append(Text(layout.width - 10, layout.height - 8, number, 28, WATERMARK, "end", "900"))
    return Scene(f"paso-{step.number}", f"Paso {step.number} · {step.operation}",
                 layout.width, layout.height, tuple(items))


def render_assembly_steps(model: DrawingModel, layout: DiagramLayout = DIAGRAM) -> list[Scene]:
    """One diagram per assembly step; a step that fails is logged and skipped."""
    total = len(model.assembly_steps)
    scenes = []
    for step in model.assembly_steps:
        try:
            scenes.append(render_step_diagram(step, model.pieces, total, layout))
        except Exception:
            logger.warning("Skipping diagram for step %d", step.number, exc_info=True)
    return scenes

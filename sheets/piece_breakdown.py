"""Sheet 2: three orthographic faces per cut-list piece, with holes and grooves.

Each piece gets a cell in a grid. Inside the cell, the front face
(length x width) sits top-left, the side face (thickness x width) to its
right and the top face (length x thickness) below it. Each face has its
own scale and its own callouts.
"""
import logging
import math
from typing import NamedTuple, Optional

from shared.dimensions import COMPACT, annotate_view, overall
from shared.errors import MissingDataError
from shared.geometry import compute_scale, fmt_mm, truncate
from shared.model import DrawingModel, Piece, PieceDetail
from shared.palette import BG, CENTER, DIM, FRAME, GOLD, LINE, MUTED, kind_color
from shared.scene import Circle, Group, Line, Rect, Scene, Text
from shared.title_block import TITLE_H, TitleInfo, render_title_block
from shared.types import Fit

from .constants import PIECES, PieceLayout

logger = logging.getLogger(__name__)

SHEET = 2
GROOVE_FILL = "#0A0A0A"


class Faces(NamedTuple):
    front: Fit
    side: Fit
    top: Fit


def face_fits(piece: Piece, ox: float, oy: float, layout: PieceLayout = PIECES) -> Faces:
    """Scale and position of the three faces of piece in the cell at (ox, oy)."""
    L, A, E = piece.length, piece.width, piece.thickness
    vw = layout.face_w - layout.face_inset
    vh = layout.face_h - layout.face_inset
    sc_f = compute_scale(L, A, vw, vh, layout.margin, layout.max_scale)
    sc_l = compute_scale(E, A, layout.face_w * 0.25, vh, layout.margin, layout.max_scale)
    sc_s = compute_scale(L, E, vw, layout.face_h * 0.22, layout.margin, layout.max_scale)

    fx = ox + 20
    fy = oy + layout.header_h + 12
    front = Fit(sc_f, fx, fy, max(L * sc_f, 1.0), max(A * sc_f, 1.0))
    side = Fit(sc_l, fx + layout.face_w, fy, max(E * sc_l, 1.0), max(A * sc_l, 1.0))
    top = Fit(sc_s, fx, fy + front.h + 22, max(L * sc_s, 1.0), max(E * sc_s, 1.0))
    return Faces(front, side, top)


def _inside(offset: float, span: float) -> float:
    """Offset along a face clamped to [0, span - 4] so callouts stay on the face."""
    return max(0.0, min(offset, span - 4))


def _holes(detail: PieceDetail, f: Fit, layout: PieceLayout) -> list:
    items = []
    for hole in detail.holes:
        ax = f.x + _inside(hole.x * f.scale, f.w)
        ay = f.y + _inside(hole.y * f.scale, f.h)
        r = max(hole.diameter * f.scale / 2, layout.hole_min_r)
        items.append(Group("hole", (
            Circle(ax, ay, r, "none", DIM, 0.7),
            Line(ax - r - 2, ay, ax + r + 2, ay, CENTER, 0.5, "3,2"),
            Line(ax, ay - r - 2, ax, ay + r + 2, CENTER, 0.5, "3,2"),
        )))
    return items


def _grooves(detail: PieceDetail, f: Fit, layout: PieceLayout) -> list:
    items = []
    for g in detail.grooves:
        thick = max(g.width * f.scale, layout.groove_min_w)
        if g.orientation == "horizontal":
            gx = f.x + _inside(g.x * f.scale, f.w)
            length = min(g.length * f.scale, f.x + f.w - gx)
            rect = Rect(gx, f.y + f.h - thick - 2, length, thick, GROOVE_FILL, DIM, 0.6, "2,1")
        elif g.orientation == "vertical":
            gy = f.y + _inside(g.x * f.scale, f.h)
            length = min(g.length * f.scale, f.y + f.h - gy)
            rect = Rect(f.x + 2, gy, thick, length, GROOVE_FILL, DIM, 0.6, "2,1")
        else:
            continue
        items.append(Group("groove", (rect,)))
    return items


def render_piece(piece: Piece, detail: Optional[PieceDetail], ox: float, oy: float,
                 layout: PieceLayout = PIECES) -> Group:
    """One piece cell: header, three faces, callouts, machining and edge notes."""
    front, side, top = face_fits(piece, ox, oy, layout)
    L, A, E = piece.length, piece.width, piece.thickness
    by = oy + layout.header_h
    block_w = layout.cell_w - 4
    block_h = layout.cell_h - layout.header_h - 4

    items = [
        Text(ox + 4, oy + 11, truncate(piece.name, layout.name_chars), 8.5, GOLD, weight="800"),
        Text(ox + 4, oy + 22, f"×{piece.quantity}  {piece.material}".rstrip(), 6.5, MUTED),
        Rect(ox, by, block_w, block_h, BG, FRAME, 0.6, rx=3),
        # front
        Rect(front.x, front.y, front.w, front.h, kind_color("panel"), LINE, 1.0),
        Text(front.x + front.w / 2, front.y + front.h - 4, "FRONTAL", 6, MUTED, "middle"),
        annotate_view([overall("horizontal", L), overall("vertical", A)], front, COMPACT),
        # side
        Rect(side.x, side.y, side.w, side.h, kind_color("panel"), LINE, 1.0),
        Text(side.x + side.w / 2, side.y + side.h - 4, "LAT.", 6, MUTED, "middle"),
        annotate_view([overall("horizontal", E), overall("vertical", A)], side, COMPACT),
        # top
        Rect(top.x, top.y, top.w, top.h, kind_color("base"), LINE, 1.0, "4,2"),
        Text(top.x + top.w / 2, top.y + max(top.h - 2, 6), "PLANTA", 6, MUTED, "middle"),
        annotate_view([overall("horizontal", L), overall("vertical", E)], top, COMPACT),
        Text(side.x, front.y - 4, f"e={fmt_mm(E)}mm", 6.5, DIM),
    ]
    if detail is not None:
        items.append(Group("machining", tuple(_grooves(detail, front, layout) + _holes(detail, front, layout))))
        if detail.edge_banding:
            items.append(Text(ox + 4, by + block_h - 6,
                              "▸ " + detail.edge_banding[0][:layout.banding_chars], 6, MUTED))
        if detail.cutting_notes:
            items.append(Text(ox + block_w - 4, oy + 22, truncate(detail.cutting_notes, layout.note_chars),
                              6, DIM, "end"))
        if detail.grain_direction:
            items.append(Text(ox + block_w - 4, by + block_h - 6,
                              f"VETA: {detail.grain_direction}", 6, MUTED, "end"))
    return Group("piece", tuple(items))


def sheet_height(count: int, layout: PieceLayout = PIECES) -> float:
    rows = math.ceil(min(count, layout.max_pieces) / layout.cols)
    return layout.pad_y * 2 + rows * layout.cell_h + TITLE_H


def compose_piece_breakdown(model: DrawingModel, layout: PieceLayout = PIECES) -> Scene:
    """Sheet 2 scene for the first max_pieces pieces of the cut list.

    Pieces past the cap are not drawn. Raises MissingDataError for an
    empty cut list.
    """
    if not model.pieces:
        raise MissingDataError("piece breakdown needs a cut list")
    pieces = model.pieces[:layout.max_pieces]
    if len(model.pieces) > layout.max_pieces:
        logger.info("Piece breakdown shows %d of %d pieces", len(pieces), len(model.pieces))

    cells = []
    for i, piece in enumerate(pieces):
        ox = layout.pad_x + (i % layout.cols) * (layout.cell_w + layout.gutter)
        oy = layout.pad_y + (i // layout.cols) * layout.cell_h
        try:
            cells.append(render_piece(piece, model.detail_for(piece.name), ox, oy, layout))
        except Exception:
            logger.warning("Skipping piece cell %r", piece.name, exc_info=True)

    height = sheet_height(len(pieces), layout)
    info = TitleInfo(model.title, model.folio, "VARIAS", SHEET)
    items = (
        Group("pieces", tuple(cells)),
        render_title_block(info, 0, height - TITLE_H, layout.width),
    )
    return Scene("h2", "Hoja 2 · Despiece individual por pieza", layout.width, height, items)

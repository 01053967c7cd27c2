"""Sheet title block: project, scale, folio, studio and sheet number."""
from typing import NamedTuple

from .geometry import truncate
from .palette import BG, GOLD, MUTED, LABEL, DIM
from .scene import Group, Line, Rect, Text

TITLE_H = 36
STUDIO = "FENGA"
STUDIO_SUB = "DISEÑO INDUSTRIAL"
TOTAL_SHEETS = 3


class TitleInfo(NamedTuple):
    project: str
    folio: str
    scale: str
    sheet: int
    piece: str = ""
    total: int = TOTAL_SHEETS


def render_title_block(info: TitleInfo, x: float, y: float, w: float) -> Group:
    """Three-column block, TITLE_H high, spanning w."""
    h = TITLE_H
    c1 = x + w * 0.45
    c2 = x + w * 0.72
    mid = y + h / 2
    items = [
        Rect(x, y, w, h, BG, GOLD, 1.0),
        Line(c1, y, c1, y + h, GOLD, 0.5),
        Line(c2, y, c2, y + h, GOLD, 0.5),
        Line(x, mid, c1, mid, GOLD, 0.5),
        # project
        Text(x + 5, y + 10, "PROYECTO", 6, MUTED),
        Text(x + 5, y + 21, truncate(info.project, 28), 9, LABEL, weight="700"),
    ]
    if info.piece:
        items += [
            Text(x + 5, mid + 8, "PIEZA", 6, MUTED),
            Text(x + 5, mid + 18, truncate(info.piece, 28), 8, DIM),
        ]
    items += [
        # technical data
        Text(c1 + 5, y + 9, "ESCALA", 6, MUTED),
        Text(c1 + 5, y + 20, info.scale, 8.5, LABEL, weight="600"),
        Text(c1 + 5, mid + 8, "FOLIO", 6, MUTED),
        Text(c1 + 5, mid + 18, info.folio, 7.5, DIM),
        # studio and sheet
        Text(c2 + 5, y + 9, STUDIO, 7, GOLD, weight="800"),
        Text(c2 + 5, y + 19, STUDIO_SUB, 5.5, MUTED),
        Text(c2 + 5, mid + 8, "HOJA", 6, MUTED),
        Text(c2 + 5, mid + 18, f"{info.sheet}/{info.total}", 8, LABEL, weight="700"),
    ]
    return Group("title-block", tuple(items))

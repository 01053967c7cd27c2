"""Layout configuration for the three sheet types.

All values in screen px unless noted. Pass a modified copy
(e.g. GENERAL._replace(view_h=320)) to a composer to retune a sheet.
"""
from typing import NamedTuple


class GeneralLayout(NamedTuple):
    width: float = 1090
    pad_l: float = 50
    pad_t: float = 20
    front_w: float = 440
    side_w: float = 280
    top_w: float = 290
    gutter: float = 8
    view_h: float = 300
    inset: float = 60           # per-view viewport inset
    margin: float = 0.82
    max_notes: int = 5
    note_gap: float = 14
    legend_x: float = 620
    legend_col_w: float = 130
    height: float = 470
    default_scale: str = "1:10"


class PieceLayout(NamedTuple):
    cols: int = 3
    cell_w: float = 290
    cell_h: float = 200
    gutter: float = 10
    pad_x: float = 20
    pad_y: float = 20
    max_pieces: int = 12
    header_h: float = 26        # piece name, quantity and material above the block
    face_w: float = 190         # nominal face cell; the side face starts face_w right of the front
    face_h: float = 120
    face_inset: float = 30
    margin: float = 1.0
    max_scale: float = 1.0
    hole_min_r: float = 2.0
    groove_min_w: float = 1.5
    banding_chars: int = 38
    name_chars: int = 22
    note_chars: int = 26        # cutting notes, right of the quantity line

    @property
    def width(self) -> float:
        return self.pad_x * 2 + self.cols * self.cell_w + (self.cols - 1) * self.gutter


class JointLayout(NamedTuple):
    width: float = 1060
    pad_x: float = 20
    section_h: float = 200      # row A, cross-sections
    detail_h: float = 180       # row B, construction details
    row_gap: float = 40
    item_gap: float = 4
    max_sections: int = 3
    max_details: int = 4
    section_floor: float = 100  # mm
    detail_floor: float = 80    # mm
    margin: float = 0.82
    default_scale: str = "1:2"

    @property
    def height(self) -> float:
        return 30 + self.section_h + self.row_gap + self.detail_h + 36 + 30


GENERAL = GeneralLayout()
PIECES = PieceLayout()
JOINTS = JointLayout()

VIEW_LABELS = {
    "front": "VISTA FRONTAL",
    "side": "VISTA LATERAL DERECHA",
    "top": "VISTA SUPERIOR / PLANTA",
}

LEGEND = [
    ("panel", "Panel"),
    ("base", "Base"),
    ("cajones", "Cajones"),
    ("espejo", "Espejo"),
    ("estructura", "Estructura"),
    ("union", "Unión"),
]

"""DXF export layers and placement constants (model space, mm, 1:1)."""
from typing import NamedTuple

# (name, ACI colour)
LAYERS = (
    ("FRONTAL", 7),    # white
    ("LATERAL", 3),    # green
    ("PLANTA", 4),     # cyan
    ("COTAS", 1),      # red
    ("TEXTO", 2),      # yellow
    ("TITULO", 6),     # magenta
    ("DESPIECE", 5),   # blue, cut-list row
)

VIEW_LAYERS = {"front": "FRONTAL", "side": "LATERAL", "top": "PLANTA"}

VIEW_LABELS = {
    "front": "VISTA FRONTAL",
    "side": "VISTA LATERAL DERECHA",
    "top": "VISTA SUPERIOR (PLANTA)",
}

STUDIO = "FENGA DISENO INDUSTRIAL"


class DxfLayout(NamedTuple):
    margin: float = 50
    front_pad: float = 80         # extra room left of the front view for stacked dims
    # placement-only extents when a view is absent
    front_w: float = 1200
    front_h: float = 1800
    side_w: float = 500
    top_w: float = 1200
    top_h: float = 500
    dim_first: float = 15
    dim_gap: float = 12
    text_h: float = 3
    view_label_h: float = 5
    label_min_w: float = 20
    label_min_h: float = 10
    label_chars: int = 20
    title_w: float = 180
    title_h: float = 60
    title_chars: int = 30
    max_notes: int = 5
    note_gap: float = 8
    piece_row_gap: float = 120    # below the lowest view origin
    piece_gap: float = 50

DXF = DxfLayout()

"""Step-piece association vocabulary and step diagram layout."""
from typing import NamedTuple

# Structural tokens that tie a step's wording to piece names.
KEYWORDS = (
    "cajon", "cajón", "lateral", "base", "panel", "frente", "trasero", "superior",
    "inferior", "divisor", "estante", "vidrio", "puerta", "estructura", "riel", "soporte",
)

MAX_MATCHES = 3
FALLBACK_WINDOW = 2


class DiagramLayout(NamedTuple):
    width: float = 520
    height: float = 200
    # top-left of each piece's front face, by number of pieces shown
    slots: tuple = (
        ((120, 60),),
        ((60, 60), (300, 60)),
        ((30, 60), (200, 60), (370, 60)),
    )
    max_w: tuple = (160, 140, 110)
    max_h: float = 80
    max_scale: float = 0.15
    min_w: float = 40
    min_h: float = 25
    depth_factor: float = 3.0    # thickness exaggeration
    depth_ratio: float = 0.4     # on-screen share of the depth
    min_depth: float = 6
    max_depth: float = 20
    label_chars: int = 10
    max_tools: int = 4

DIAGRAM = DiagramLayout()

FILLS = ("#1C2A1C", "#1A2535", "#2D1F1F")
ARROW = "#F5B800"
WATERMARK = "#1C2128"

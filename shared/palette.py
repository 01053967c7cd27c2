"""Drawing palette and element kind styling, shared by every sheet."""

BG = "#0D1117"
GRID = "#161B22"
FRAME = "#30363D"
LINE = "#C0C8D2"
DIM = "#58A6FF"
GOLD = "#F5B800"
MUTED = "#8B949E"
LABEL = "#E6EDF3"
CUT = "#FF6B6B"        # cutting-plane lines
CENTER = "#3FB950"     # centre lines

FONT = "monospace"

# Fill colour by element kind. English tags map onto the same colours.
KIND_COLORS = {
    "cajones": "#1A2F45",
    "panel": "#1A2F1A",
    "espejo": "#1A2535",
    "estructura": "#2D1B1B",
    "base": "#2D2A1A",
    "union": "#2A1F2A",
}
DEFAULT_KIND_COLOR = "#1C2128"

KIND_ALIASES = {
    "cajon": "cajones", "cajón": "cajones", "drawer": "cajones", "drawers": "cajones",
    "mirror": "espejo", "vidrio": "espejo", "glass": "espejo",
    "structure": "estructura",
    "unión": "union", "joint": "union",
}

# Kinds drawn with a dashed outline.
DASHED_KINDS = {"espejo"}


def canonical_kind(kind: str) -> str:
    k = (kind or "").strip().lower()
    return KIND_ALIASES.get(k, k)


def kind_color(kind: str) -> str:
    return KIND_COLORS.get(canonical_kind(kind), DEFAULT_KIND_COLOR)


def kind_dash(kind: str) -> str:
    return "5,2" if canonical_kind(kind) in DASHED_KINDS else ""

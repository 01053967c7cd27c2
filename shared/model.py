"""Drawing input model: coercion of the design-agent payload into frozen models.

The payload is LLM-authored JSON and untrusted. Numbers may be missing,
strings, NaN or negative; lists may hold non-objects. Everything is coerced
here, once, so geometry code downstream never sees a non-finite value.
Keys are the Spanish names the design agent emits; English aliases are
accepted too.
"""
import datetime
import logging
import math
import re
from typing import Annotated, Any, Optional

from pydantic import (
    AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, ValidationError,
)

logger = logging.getLogger(__name__)

# ============================================================
# Coercion helpers
# ============================================================

# Anything larger is treated as garbage rather than drawn.
MAX_MM = 1e6

# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile(r"[^\t\n\r\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")

def _to_mm(v: Any) -> float:
    """Finite float within +-MAX_MM, or 0.0."""
    if isinstance(v, bool):
        return 0.0
    if isinstance(v, str):
        v = v.strip().replace(",", ".")
    try:
        f = float(v)
    except (TypeError, ValueError):
        return 0.0
    return f if math.isfinite(f) and abs(f) <= MAX_MM else 0.0

def _to_size(v: Any) -> float:
    """Like _to_mm, but negative sizes become 0.0."""
    return max(_to_mm(v), 0.0)

def _to_count(v: Any) -> int:
    """Integer >= 1."""
    return max(1, int(_to_mm(v)))

def _to_text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, (str, int, float)):
        return _XML_ILLEGAL.sub("", str(v)).strip()
    return ""

def _to_axis(v: Any) -> str:
    s = _to_text(v).lower()
    if s in ("h", "horizontal"):
        return "horizontal"
    if s in ("v", "vertical"):
        return "vertical"
    return s

def _records(v: Any) -> list:
    """Keep only mapping items (or already-built models) of a list."""
    if not isinstance(v, (list, tuple)):
        return []
    return [item for item in v if isinstance(item, (dict, BaseModel))]

def _texts(v: Any) -> list[str]:
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, (list, tuple)):
        return []
    return [t for t in (_to_text(item) for item in v) if t]

def _mapping(v: Any) -> Any:
    return v if isinstance(v, (dict, BaseModel)) else None

MM = Annotated[float, BeforeValidator(_to_mm)]
Size = Annotated[float, BeforeValidator(_to_size)]
Count = Annotated[int, BeforeValidator(_to_count)]
Text = Annotated[str, BeforeValidator(_to_text)]
AxisName = Annotated[str, BeforeValidator(_to_axis)]
TextList = Annotated[tuple[str, ...], BeforeValidator(_texts)]

def _field(default, *names):
    return Field(default, validation_alias=AliasChoices(*names))

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

# ============================================================
# Views
# ============================================================

class Element(_Frozen):
    """Named rectangular part within a view, in object-space mm."""
    name: Text = _field("", "nombre", "name")
    x: MM = 0.0
    y: MM = 0.0
    width: Size = _field(0.0, "ancho", "width")
    height: Size = _field(0.0, "alto", "height")
    kind: Text = _field("", "tipo", "kind")

class Dimension(_Frozen):
    """Measurement annotation along one axis."""
    axis: AxisName = _field("horizontal", "tipo", "axis")
    start: MM = _field(0.0, "desde", "from", "start")
    end: MM = _field(0.0, "hasta", "to", "end")
    label: Text = _field("", "valor", "label")
    description: Text = _field("", "descripcion", "description")

Elements = Annotated[tuple[Element, ...], BeforeValidator(_records)]
Dimensions = Annotated[tuple[Dimension, ...], BeforeValidator(_records)]

class View(_Frozen):
    """One orthographic projection of the whole assembly."""
    total_width: Size = _field(0.0, "anchoTotal", "totalWidth", "total_width")
    total_height: Size = _field(0.0, "altoTotal", "totalHeight", "total_height")
    elements: Elements = _field((), "elementos", "elements")
    dimensions: Dimensions = _field((), "cotas", "dimensions")

    def dims_on(self, axis: str) -> list[Dimension]:
        return [d for d in self.dimensions if d.axis == axis]

OptView = Annotated[Optional[View], BeforeValidator(_mapping)]

class Plans(_Frozen):
    """Sheet-1 data: the three assembly views and the drawing notes."""
    scale: Text = _field("1:10", "escala", "scale")
    units: Text = _field("mm", "unidades", "units")
    front: OptView = _field(None, "vistaFrontal", "frontView", "front")
    side: OptView = _field(None, "vistaLateral", "sideView", "side")
    top: OptView = _field(None, "vistaSuperior", "topView", "top")
    notes: TextList = _field((), "notas", "notes")

    def views(self) -> dict[str, Optional[View]]:
        return {"front": self.front, "side": self.side, "top": self.top}

# ============================================================
# Cut list and per-piece detail
# ============================================================

class Piece(_Frozen):
    """One cut-list row."""
    name: Text = _field("", "pieza", "name")
    quantity: Count = _field(1, "cantidad", "quantity")
    length: Size = _field(0.0, "largoMM", "length")
    width: Size = _field(0.0, "anchoMM", "width")
    thickness: Size = _field(0.0, "espesorMM", "thickness")
    material: Text = ""
    note: Text = _field("", "observaciones", "note")

class Hole(_Frozen):
    type: Text = _field("", "tipo", "type")
    diameter: Size = _field(0.0, "diametro", "diameter")
    depth: Size = _field(0.0, "profundidad", "depth")
    x: MM = _field(0.0, "xMM", "x")
    y: MM = _field(0.0, "yMM", "y")
    description: Text = _field("", "descripcion", "description")

class Groove(_Frozen):
    x: MM = _field(0.0, "xMM", "x")
    depth: Size = _field(0.0, "profundidadMM", "depth")
    width: Size = _field(0.0, "anchoMM", "width")
    length: Size = _field(0.0, "longitudMM", "length")
    orientation: AxisName = _field("horizontal", "orientacion", "orientation")
    description: Text = _field("", "descripcion", "description")

class PieceDetail(_Frozen):
    """Holes, grooves and edge notes for the piece of the same name."""
    piece: Text = _field("", "pieza", "piece", "name")
    holes: Annotated[tuple[Hole, ...], BeforeValidator(_records)] = _field((), "agujeros", "holes")
    grooves: Annotated[tuple[Groove, ...], BeforeValidator(_records)] = _field((), "ranuras", "grooves")
    edge_banding: TextList = _field((), "cantosAplicar", "edgeBanding", "edgeBandingNotes")
    grain_direction: Text = _field("", "direccionVeta", "grainDirection")
    cutting_notes: Text = _field("", "notasCorte", "cuttingNotes")

# ============================================================
# Joints
# ============================================================

class CrossSection(_Frozen):
    """Independently scaled cut-away of one joint."""
    id: Text = ""
    name: Text = _field("", "nombre", "name")
    description: Text = _field("", "descripcion", "description")
    scale: Text = _field("1:2", "escala", "scale")
    plane: Text = _field("", "plano", "plane")
    position: MM = _field(0.0, "posicionMM", "position")
    elements: Elements = _field((), "elementos", "elements")
    dimensions: Dimensions = _field((), "cotas", "dimensions")
    notes: TextList = _field((), "notas", "notes")

class ConstructionDetail(_Frozen):
    """Independently scaled close-up of one structural union."""
    id: Text = ""
    kind: Text = _field("", "tipo", "kind")
    name: Text = _field("", "nombre", "name")
    description: Text = _field("", "descripcion", "description")
    tools: TextList = _field((), "herramientas", "tools")
    tolerance: Text = _field("", "tolerancia", "tolerance")
    elements: Elements = _field((), "elementos", "elements")
    dimensions: Dimensions = _field((), "cotas", "dimensions")

# ============================================================
# Assembly sequence
# ============================================================

class AssemblyStep(_Frozen):
    number: Count = _field(1, "paso", "number")
    operation: Text = _field("", "operacion", "operation")
    description: Text = _field("", "descripcion", "description")
    tools: TextList = _field((), "herramientas", "tools")
    minutes: Size = _field(0.0, "tiempoMin", "minutes")

    @property
    def text(self) -> str:
        return f"{self.operation} {self.description}"

# ============================================================
# Aggregate
# ============================================================

class DrawingModel(_Frozen):
    """Everything one render pass needs for a project."""
    title: str = "PROYECTO"
    folio: str = "SIN-FOLIO"
    issued: datetime.date
    plans: Optional[Plans] = None
    pieces: tuple[Piece, ...] = ()
    piece_details: tuple[PieceDetail, ...] = ()
    cross_sections: tuple[CrossSection, ...] = ()
    construction_details: tuple[ConstructionDetail, ...] = ()
    assembly_steps: tuple[AssemblyStep, ...] = ()

    @property
    def file_stem(self) -> str:
        """Folio reduced to characters that are safe in a filename."""
        return re.sub(r"[^A-Za-z0-9._-]+", "_", self.folio).strip("._") or "SIN-FOLIO"

    def detail_for(self, piece_name: str) -> Optional[PieceDetail]:
        for d in self.piece_details:
            if d.piece == piece_name:
                return d
        return None


_SECTION_KEYS = {
    "plans": ("planos", "plans"),
    "pieces": ("listaCortesDetallada", "cortes", "cutList", "pieces"),
    "piece_details": ("piezasDetalladas", "pieceDetails"),
    "cross_sections": ("cortesTransversales", "crossSections"),
    "construction_details": ("detallesConstructivos", "constructionDetails"),
    "assembly_steps": ("secuenciaEnsamble", "assemblySteps"),
}

_SECTION_TYPES = {
    "pieces": Piece,
    "piece_details": PieceDetail,
    "cross_sections": CrossSection,
    "construction_details": ConstructionDetail,
    "assembly_steps": AssemblyStep,
}


def _lookup(payload: dict, names) -> Any:
    for n in names:
        if n in payload and payload[n] is not None:
            return payload[n]
    return None


def load_drawing_model(payload: Any, issued: Optional[datetime.date] = None) -> DrawingModel:
    """Coerce a design-agent payload into a DrawingModel.

    Each section is validated on its own; a section that cannot be
    coerced is logged and left empty rather than failing the model.
    """
    if not isinstance(payload, dict):
        logger.warning("Drawing payload is %s, not an object; using empty model",
                       type(payload).__name__)
        payload = {}

    fields: dict[str, Any] = {
        "title": _to_text(_lookup(payload, ("titulo", "title"))) or "PROYECTO",
        "folio": _to_text(payload.get("folio")) or "SIN-FOLIO",
        "issued": issued or datetime.date.today(),
    }

    raw_plans = _lookup(payload, _SECTION_KEYS["plans"])
    if isinstance(raw_plans, dict):
        try:
            fields["plans"] = Plans.model_validate(raw_plans)
        except ValidationError as e:
            logger.warning("Discarding plans section: %s", e)

    for key, cls in _SECTION_TYPES.items():
        items = []
        for raw in _records(_lookup(payload, _SECTION_KEYS[key])):
            try:
                items.append(cls.model_validate(raw))
            except ValidationError as e:
                logger.warning("Discarding %s entry: %s", key, e)
        fields[key] = tuple(items)

    return DrawingModel(**fields)

"""DXF (R2000) export of the drawing model with ezdxf.

Walks the model directly, not the rendered scenes. Views are drawn 1:1 in
millimetres in the same relative arrangement as sheet 1: top view at the
base origin, front view above it, side view to the right of the front
view, title block right of the front view. Object-space y is used as-is
(no inversion), so views read mirrored vertically next to the SVG sheets.
"""
import contextlib
import io
import logging
from typing import Optional

import ezdxf
from ezdxf import units
from ezdxf.enums import TextEntityAlignment

from shared.errors import SerializationError
from shared.geometry import fmt_mm, rect_corners
from shared.model import DrawingModel, Plans, View

from .constants import DXF, DxfLayout, LAYERS, STUDIO, VIEW_LABELS, VIEW_LAYERS

logger = logging.getLogger(__name__)

DXF_VERSION = "R2000"


def dxf_filename(model: DrawingModel) -> str:
    return f"{model.file_stem}-planos.dxf"


# ============================================================
# Placement
# ============================================================

def view_origins(plans: Optional[Plans], layout: DxfLayout = DXF) -> dict[str, tuple[float, float]]:
    """Lower-left origin of each view; absent views still reserve their fallback extent.

    Gaps between views widen past the margin when a view carries more
    stacked dimensions than the margin can hold.
    """
    front = plans.front if plans else None
    side = plans.side if plans else None
    top = plans.top if plans else None
    f_w = front.total_width if front and front.total_width > 0 else layout.front_w
    t_h = top.total_height if top and top.total_height > 0 else layout.top_h
    m = layout.margin
    fx = m + max(layout.front_pad, _clearance(front, top, axis="vertical", layout=layout))
    fy = m + t_h + max(m, _clearance(front, side, axis="horizontal", layout=layout))
    return {
        "front": (fx, fy),
        "side": (fx + f_w + max(m, _clearance(side, axis="vertical", layout=layout)), fy),
        "top": (fx, m),
    }


def _clearance(*views: Optional[View], axis: str, layout: DxfLayout) -> float:
    """Room taken by the deepest dimension stack on axis among views."""
    count = max((len(v.dims_on(axis)) for v in views if v is not None), default=0)
    return layout.dim_first + count * layout.dim_gap


def _extent(view: Optional[View], w: float, h: float) -> tuple[float, float]:
    if view is None:
        return w, h
    return (view.total_width if view.total_width > 0 else w,
            view.total_height if view.total_height > 0 else h)


# ============================================================
# Entity helpers
# ============================================================

def _rect(msp, layer: str, x: float, y: float, w: float, h: float) -> None:
    msp.add_lwpolyline(rect_corners(x, y, w, h), close=True, dxfattribs={"layer": layer})


def _text(msp, layer: str, content: str, x: float, y: float, height: float,
          center: bool = False, rotation: float = 0.0) -> None:
    attribs = {"layer": layer}
    if rotation:
        attribs["rotation"] = rotation
    align = TextEntityAlignment.CENTER if center else TextEntityAlignment.LEFT
    msp.add_text(content, height=height, dxfattribs=attribs).set_placement((x, y), align=align)


def _draw_view(msp, view: View, ox: float, oy: float, layer: str, layout: DxfLayout) -> None:
    _rect(msp, layer, ox, oy, view.total_width, view.total_height)
    for el in view.elements:
        _rect(msp, layer, ox + el.x, oy + el.y, el.width, el.height)
        if el.width > layout.label_min_w and el.height > layout.label_min_h and el.name:
            _text(msp, "TEXTO", el.name[:layout.label_chars],
                  ox + el.x + el.width / 2, oy + el.y + el.height / 2, layout.text_h, center=True)

    for i, d in enumerate(view.dims_on("horizontal")):
        if d.end <= d.start:
            continue
        dy = -layout.dim_first - i * layout.dim_gap
        x1, x2 = ox + d.start, ox + d.end
        msp.add_line((x1, oy), (x1, oy + dy), dxfattribs={"layer": "COTAS"})
        msp.add_line((x2, oy), (x2, oy + dy), dxfattribs={"layer": "COTAS"})
        msp.add_line((x1, oy + dy), (x2, oy + dy), dxfattribs={"layer": "COTAS"})
        _text(msp, "COTAS", d.label, (x1 + x2) / 2, oy + dy + 2, layout.text_h, center=True)

    for i, d in enumerate(view.dims_on("vertical")):
        if d.end <= d.start:
            continue
        dx = -layout.dim_first - i * layout.dim_gap
        y1, y2 = oy + d.start, oy + d.end
        msp.add_line((ox, y1), (ox + dx - 2, y1), dxfattribs={"layer": "COTAS"})
        msp.add_line((ox, y2), (ox + dx - 2, y2), dxfattribs={"layer": "COTAS"})
        msp.add_line((ox + dx, y1), (ox + dx, y2), dxfattribs={"layer": "COTAS"})
        _text(msp, "COTAS", d.label, ox + dx - 4, (y1 + y2) / 2, layout.text_h, center=True, rotation=90)


def _draw_title_block(msp, model: DrawingModel, x: float, y: float, layout: DxfLayout) -> None:
    w, h = layout.title_w, layout.title_h
    _rect(msp, "TITULO", x, y, w, h)
    msp.add_line((x, y + h * 0.55), (x + w, y + h * 0.55), dxfattribs={"layer": "TITULO"})
    msp.add_line((x + w * 0.65, y), (x + w * 0.65, y + h), dxfattribs={"layer": "TITULO"})

    scale = (model.plans.scale if model.plans else "") or "1:10"
    right = x + w * 0.67
    upper = y + h * 0.55 + h * 0.12
    _text(msp, "TITULO", STUDIO, x + 3, y + h - 8, 4.5)
    _text(msp, "TITULO", model.title[:layout.title_chars], x + 3, upper, 3.5)
    _text(msp, "TITULO", f"FOLIO: {model.folio}", x + 3, y + 5, 3)
    _text(msp, "TITULO", f"ESCALA: {scale}", right, y + h - 8, 3)
    _text(msp, "TITULO", "UNIDADES: mm", right, upper, 3)
    _text(msp, "TITULO", model.issued.strftime("%d/%m/%Y"), right, y + 5, 3)

    notes = model.plans.notes if model.plans else ()
    for i, note in enumerate(notes[:layout.max_notes]):
        _text(msp, "TEXTO", f"{i + 1}. {note}", x, y + h + 10 + i * layout.note_gap, layout.text_h)


def _draw_pieces(msp, model: DrawingModel, x0: float, top: float, layout: DxfLayout) -> None:
    """Every cut-list piece as an L x W rectangle, hanging below top."""
    x = x0
    for piece in model.pieces:
        y = top - piece.width
        _rect(msp, "DESPIECE", x, y, piece.length, piece.width)
        _text(msp, "DESPIECE", f"{piece.name[:layout.label_chars]} x{piece.quantity}", x, top + 5, layout.text_h)
        size = f"{fmt_mm(piece.length)} x {fmt_mm(piece.width)} x {fmt_mm(piece.thickness)}"
        _text(msp, "DESPIECE", size, x, y - 8, layout.text_h)
        detail = model.detail_for(piece.name)
        if detail and detail.cutting_notes:
            _text(msp, "DESPIECE", detail.cutting_notes, x, y - 14, layout.text_h)
        for hole in detail.holes if detail else ():
            if hole.diameter > 0:
                msp.add_circle((x + hole.x, y + hole.y), hole.diameter / 2, dxfattribs={"layer": "DESPIECE"})
        x += max(piece.length, 0.0) + layout.piece_gap


# ============================================================
# Document
# ============================================================

def build_dxf(model: DrawingModel, layout: DxfLayout = DXF):
    """ezdxf document for model; missing views and their labels are omitted."""
    doc = ezdxf.new(DXF_VERSION)
    doc.units = units.MM
    doc.header["$LUNITS"] = 2       # decimal
    doc.header["$LUPREC"] = 2
    doc.header["$MEASUREMENT"] = 1  # metric
    for name, color in LAYERS:
        doc.layers.add(name, color=color)
    msp = doc.modelspace()

    plans = model.plans
    origins = view_origins(plans, layout)
    views = plans.views() if plans else {"front": None, "side": None, "top": None}
    fallback = {"front": (layout.front_w, layout.front_h),
                "side": (layout.side_w, layout.front_h),
                "top": (layout.top_w, layout.top_h)}
    for name, view in views.items():
        if view is None:
            continue
        ox, oy = origins[name]
        _draw_view(msp, view, ox, oy, VIEW_LAYERS[name], layout)
        w, _ = _extent(view, *fallback[name])
        _text(msp, "TEXTO", VIEW_LABELS[name], ox + w / 2 - 20, oy - 10, layout.view_label_h)

    # title block shares the side view's column, below it
    _draw_title_block(msp, model, origins["side"][0], layout.margin, layout)
    _draw_pieces(msp, model, origins["front"][0], -layout.piece_row_gap, layout)
    return doc


@contextlib.contextmanager
def _fixed_metadata():
    """Write timestamps and GUIDs as constants so the same model gives the same bytes."""
    previous = ezdxf.options.write_fixed_meta_data_for_testing
    ezdxf.options.write_fixed_meta_data_for_testing = True
    try:
        yield
    finally:
        ezdxf.options.write_fixed_meta_data_for_testing = previous


def render_dxf(model: DrawingModel, layout: DxfLayout = DXF) -> str:
    """DXF text for model. Raises SerializationError if the document cannot be built."""
    stream = io.StringIO()
    try:
        # ezdxf stamps creation metadata in new() and write metadata in write()
        with _fixed_metadata():
            build_dxf(model, layout).write(stream)
    except Exception as e:
        raise SerializationError(f"DXF export failed for {model.folio}: {e}") from e
    text = stream.getvalue()
    logger.debug("DXF for %s: %d bytes", model.folio, len(text))
    return text

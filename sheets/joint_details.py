"""Sheet 3: cross-sections (row A) and construction details (row B).

Every item is scaled on its own from the extent of its elements, so a
tiny dowel detail and a large rail section can share a row.
"""
import logging

from shared.dimensions import annotate_view
from shared.errors import MissingDataError
from shared.geometry import compute_scale, extent, fmt_mm
from shared.model import ConstructionDetail, CrossSection, DrawingModel
from shared.palette import BG, CUT, DIM, FRAME, GOLD, GRID, MUTED
from shared.scene import Group, Line, Rect, Scene, Text
from shared.title_block import TITLE_H, TitleInfo, render_title_block
from shared.types import Fit
from shared.views import render_elements

from .constants import JOINTS, JointLayout

logger = logging.getLogger(__name__)

SHEET = 3


def _place(elements, floor: float, ox: float, oy: float, w: float, vw: float, vh: float,
           top: float, margin: float) -> Fit:
    mx, my = extent(elements, floor)
    sc = compute_scale(mx, my, vw, vh, margin)
    dw, dh = mx * sc, my * sc
    return Fit(sc, ox + (w - dw) / 2, oy + top, dw, dh)


def _header(ox: float, oy: float, w: float, item_id: str, name: str, color: str) -> list:
    tag = f"[{item_id}] {name}" if item_id else name
    return [
        Rect(ox, oy - 16, w, 16, GRID),
        Text(ox + 5, oy - 4, tag, 8, color, weight="800"),
    ]


def render_cross_section(cs: CrossSection, ox: float, oy: float, w: float, h: float,
                         layout: JointLayout = JOINTS) -> Group:
    at = _place(cs.elements, layout.section_floor, ox, oy, w, w - 40, h - 60, 20, layout.margin)
    mid = at.y + at.h / 2
    items = _header(ox, oy, w, cs.id, cs.name, GOLD) + [
        Text(ox + w - 5, oy - 4, f"Escala {cs.scale or layout.default_scale}", 7, MUTED, "end"),
        Rect(ox, oy, w, h, BG, FRAME, 0.7),
        render_elements(cs.elements, at),
        annotate_view(cs.dimensions, at),
        # cutting-plane markers from the frame edges to the object
        Line(ox, mid, at.x - 4, mid, CUT, 0.8, "6,3,1,3"),
        Line(at.x + at.w + 4, mid, ox + w, mid, CUT, 0.8, "6,3,1,3"),
    ]
    if cs.plane:
        items.append(Text(ox + w - 5, oy + 12, f"PLANO {cs.plane} @ {fmt_mm(cs.position)} mm", 6, CUT, "end"))
    for i, note in enumerate(cs.notes):
        items.append(Text(ox + 5, oy + h - 16 - i * 11, f"▸ {note}", 6.5, MUTED))
    if cs.description:
        items.append(Text(ox + w / 2, oy + h - 4, cs.description[:55], 7, DIM, "middle"))
    return Group("cross-section", tuple(items))


def render_construction_detail(det: ConstructionDetail, ox: float, oy: float, w: float, h: float,
                               layout: JointLayout = JOINTS) -> Group:
    at = _place(det.elements, layout.detail_floor, ox, oy, w, w - 40, h - 70, 22, layout.margin)
    items = _header(ox, oy, w, det.id, det.name, DIM) + [
        Rect(ox, oy, w, h, BG, FRAME, 0.7),
        render_elements(det.elements, at),
        annotate_view(det.dimensions, at),
    ]
    if det.kind:
        items.append(Text(ox + w - 5, oy - 4, det.kind.upper(), 6.5, MUTED, "end"))
    if det.description:
        items.append(Text(ox + 5, oy + h - 28, det.description[:48], 7, MUTED))
    if det.tolerance:
        items.append(Text(ox + 5, oy + h - 16, f"TOL: {det.tolerance}", 6.5, DIM))
    if det.tools:
        items.append(Text(ox + 5, oy + h - 4, " · ".join(det.tools[:3]), 6, MUTED))
    return Group("construction-detail", tuple(items))


def _row(entries, render, oy: float, h: float, kind: str, layout: JointLayout) -> list:
    if not entries:
        return []
    slot = (layout.width - 2 * layout.pad_x) / len(entries)
    out = []
    for i, entry in enumerate(entries):
        try:
            out.append(render(entry, layout.pad_x + i * slot, oy,
                              slot - layout.item_gap, h, layout))
        except Exception:
            logger.warning("Skipping %s %r", kind, entry.id or entry.name, exc_info=True)
    return out


def _section_bar(y: float, label: str, color: str, rule: str, layout: JointLayout) -> Group:
    return Group("section-bar", (
        Text(layout.pad_x, y, label, 9, color, weight="800", spacing=1.5),
        Line(layout.pad_x, y + 4, layout.width - layout.pad_x, y + 4, rule, 0.6, "4,3"),
    ))


def compose_joint_details(model: DrawingModel, layout: JointLayout = JOINTS) -> Scene:
    """Sheet 3 scene.

    At most max_sections cross-sections and max_details construction
    details are drawn; the rest are dropped. Raises MissingDataError when
    there are neither.
    """
    sections = model.cross_sections[:layout.max_sections]
    details = model.construction_details[:layout.max_details]
    if not sections and not details:
        raise MissingDataError("joint details need a cross-section or a construction detail")
    if len(model.cross_sections) > len(sections) or len(model.construction_details) > len(details):
        logger.info("Joint details show %d/%d sections and %d/%d details",
                    len(sections), len(model.cross_sections), len(details), len(model.construction_details))

    row_b = 30 + layout.section_h + layout.row_gap
    items = []
    if sections:
        items.append(_section_bar(18, "A ── CORTES TRANSVERSALES", GOLD, CUT, layout))
        items.append(Group("cross-sections", tuple(
            _row(sections, render_cross_section, 30, layout.section_h, "cross-section", layout))))
    if details:
        items.append(_section_bar(row_b - 16, "B ── DETALLES CONSTRUCTIVOS", DIM, DIM, layout))
        items.append(Group("construction-details", tuple(
            _row(details, render_construction_detail, row_b - 4, layout.detail_h,
                 "construction detail", layout))))

    info = TitleInfo(model.title, model.folio, "VARIAS", SHEET)
    items.append(render_title_block(info, 0, layout.height - TITLE_H, layout.width))
    return Scene("h3", "Hoja 3 · Cortes transversales y detalles constructivos",
                 layout.width, layout.height, tuple(items))

"""Sheet 1: front, side and top views of the whole assembly."""
import logging

from shared.errors import MissingDataError
from shared.model import DrawingModel
from shared.palette import GOLD, MUTED, LINE, kind_color, kind_dash
from shared.scene import Group, Rect, Scene, Text
from shared.title_block import TITLE_H, TitleInfo, render_title_block
from shared.types import Box
from shared.views import ViewStyle, render_view

from .constants import GENERAL, GeneralLayout, LEGEND, VIEW_LABELS

logger = logging.getLogger(__name__)

SHEET = 1


def view_boxes(layout: GeneralLayout = GENERAL) -> dict[str, Box]:
    """Fixed cell of each view; cells do not move when a view is missing."""
    x_side = layout.pad_l + layout.front_w + layout.gutter
    x_top = x_side + layout.side_w + layout.gutter
    return {
        "front": Box(layout.pad_l, layout.pad_t, layout.front_w, layout.view_h),
        "side": Box(x_side, layout.pad_t, layout.side_w, layout.view_h),
        "top": Box(x_top, layout.pad_t, layout.top_w, layout.view_h),
    }


def _notes(notes, layout: GeneralLayout) -> Group:
    items = []
    y0 = layout.pad_t + layout.view_h + 36
    for i, note in enumerate(notes[:layout.max_notes]):
        y = y0 + i * layout.note_gap
        items.append(Text(layout.pad_l, y, f"{i + 1}.", 8, GOLD, weight="700"))
        items.append(Text(layout.pad_l + 14, y, note, 8, MUTED))
    return Group("notes", tuple(items))


def _legend(layout: GeneralLayout) -> Group:
    y0 = layout.pad_t + layout.view_h + 36
    items = [Text(layout.legend_x, y0 - 14, "LEYENDA", 8, GOLD, weight="700", spacing=1)]
    for i, (kind, label) in enumerate(LEGEND):
        x = layout.legend_x + (i % 3) * layout.legend_col_w
        y = y0 + (i // 3) * 16
        items.append(Rect(x, y - 8, 10, 10, kind_color(kind), LINE, 0.8, kind_dash(kind)))
        items.append(Text(x + 16, y, label, 8, MUTED))
    return Group("legend", tuple(items))


def compose_general_assembly(model: DrawingModel, layout: GeneralLayout = GENERAL) -> Scene:
    """Sheet 1 scene. Raises MissingDataError when the model has no plans."""
    plans = model.plans
    if plans is None:
        raise MissingDataError("general assembly needs plans")

    style = ViewStyle(inset=layout.inset, margin=layout.margin)
    views = []
    for name, box in view_boxes(layout).items():
        view = plans.views()[name]
        if view is None:
            logger.debug("View %s absent; leaving its column empty", name)
        try:
            views.append(render_view(view, box, VIEW_LABELS[name], style))
        except Exception:
            logger.warning("Skipping %s view of %s", name, model.folio, exc_info=True)

    info = TitleInfo(model.title, model.folio, plans.scale or layout.default_scale, SHEET)
    items = (
        Group("views", tuple(views)),
        _notes(plans.notes, layout),
        _legend(layout),
        render_title_block(info, 0, layout.height - TITLE_H, layout.width),
    )
    return Scene("h1", "Hoja 1 · Vistas ortogonales, ensamble general",
                 layout.width, layout.height, items)

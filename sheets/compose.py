"""Build every sheet of a drawing model, containing faults per sheet."""
import logging
from typing import Callable, NamedTuple, Optional

from shared.errors import MissingDataError
from shared.model import DrawingModel
from shared.scene import Scene

from .general_assembly import compose_general_assembly
from .joint_details import compose_joint_details
from .piece_breakdown import compose_piece_breakdown

logger = logging.getLogger(__name__)

COMPOSERS: list[tuple[str, Callable[[DrawingModel], Scene]]] = [
    ("general_assembly", compose_general_assembly),
    ("piece_breakdown", compose_piece_breakdown),
    ("joint_details", compose_joint_details),
]


class SheetSet(NamedTuple):
    """Sheets that rendered, in sheet order, plus what happened to the rest."""
    scenes: tuple[Scene, ...]
    missing: tuple[str, ...]             # no data for the sheet
    failed: tuple[tuple[str, str], ...]  # (sheet, error message)

    def scene(self, sheet_id: str) -> Optional[Scene]:
        for s in self.scenes:
            if s.sheet_id == sheet_id:
                return s
        return None


def compose_sheets(model: DrawingModel) -> SheetSet:
    """Compose all three sheets; one sheet failing never blocks the others."""
    scenes, missing, failed = [], [], []
    for name, compose in COMPOSERS:
        try:
            scene = compose(model)
        except MissingDataError as e:
            logger.debug("Sheet %s not shown: %s", name, e)
            missing.append(name)
            continue
        except Exception as e:
            logger.warning("Sheet %s failed for %s", name, model.folio, exc_info=True)
            failed.append((name, str(e)))
            continue
        logger.debug("Composed sheet %s (%.0fx%.0f)", name, scene.width, scene.height)
        scenes.append(scene)
    return SheetSet(tuple(scenes), tuple(missing), tuple(failed))

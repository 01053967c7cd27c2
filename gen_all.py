"""Produce every drawing artefact for one project.

From one design-agent payload this builds the stacked SVG of all sheets
(`{folio}-planos.svg`), the DXF (`{folio}-planos.dxf`) and the print
page (sheets plus assembly step diagrams). Each format is produced on its
own: a failure in one is logged and recorded, and the others are still
returned.
"""
import datetime
import logging
import os
from typing import Any, NamedTuple, Optional

from assembly.gen_step_diagram import render_assembly_steps
from cad.gen_dxf import dxf_filename, render_dxf
from sheets.compose import SheetSet, compose_sheets
from shared.errors import SerializationError
from shared.model import DrawingModel, load_drawing_model
from shared.svg import render_document, render_print_html

logger = logging.getLogger(__name__)


class Artefacts(NamedTuple):
    model: DrawingModel
    sheets: SheetSet
    files: dict            # filename -> text
    print_html: Optional[str]
    errors: dict           # format -> message


def svg_filename(model: DrawingModel) -> str:
    return f"{model.file_stem}-planos.svg"


def _svg(model: DrawingModel, sheets: SheetSet) -> str:
    try:
        return render_document(sheets.scenes)
    except Exception as e:
        raise SerializationError(f"SVG export failed for {model.folio}: {e}") from e


def _print(model: DrawingModel, sheets: SheetSet) -> str:
    try:
        scenes = list(sheets.scenes) + render_assembly_steps(model)
        return render_print_html(scenes, f"{model.title} · {model.folio}")
    except Exception as e:
        raise SerializationError(f"Print page failed for {model.folio}: {e}") from e


def generate_all(payload: Any, issued: Optional[datetime.date] = None) -> Artefacts:
    """Build all artefacts; pass issued to pin the date printed on the drawings."""
    model = load_drawing_model(payload, issued)
    sheets = compose_sheets(model)

    files, errors = {}, {}
    print_html = None
    steps = [
        ("svg", svg_filename(model), lambda: _svg(model, sheets)),
        ("dxf", dxf_filename(model), lambda: render_dxf(model)),
        ("print", None, lambda: _print(model, sheets)),
    ]
    for fmt, filename, produce in steps:
        try:
            text = produce()
        except SerializationError as e:
            logger.warning("%s", e, exc_info=True)
            errors[fmt] = str(e)
            continue
        if filename is None:
            print_html = text
        else:
            files[filename] = text
    logger.info("Generated %s for %s (%d sheets)", ", ".join(sorted(files)) or "nothing",
                model.folio, len(sheets.scenes))
    return Artefacts(model, sheets, files, print_html, errors)


def write_outputs(artefacts: Artefacts, directory: str) -> list[str]:
    """Write the downloadable files (and the print page) into directory; return the paths."""
    os.makedirs(directory, exist_ok=True)
    paths = []
    outputs = dict(artefacts.files)
    if artefacts.print_html is not None:
        outputs[f"{artefacts.model.file_stem}-planos.html"] = artefacts.print_html
    for name, text in outputs.items():
        path = os.path.join(directory, name)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        paths.append(path)
    return paths

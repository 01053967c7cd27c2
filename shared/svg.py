"""SVG serialization of scenes: downloadable file, inline element, print page."""
from typing import Sequence
from xml.sax.saxutils import escape

from .palette import BG, DIM, GRID, FONT
from .scene import Circle, Group, Line, Polygon, Rect, Scene, Text

SHEET_GAP = 24    # vertical gap between sheets in the stacked file

_STYLE = f"text{{font-family:{FONT}}}"


def _f(v: float) -> str:
    return f"{v:.1f}"


def _stroke(stroke: str, width: float, dash: str = "") -> str:
    if stroke == "none":
        return ' stroke="none"'
    s = f' stroke="{stroke}" stroke-width="{width:g}"'
    if dash:
        s += f' stroke-dasharray="{dash}"'
    return s


def _emit(out: list[str], item, sid: str, indent: str) -> None:
    if isinstance(item, Group):
        out.append(f'{indent}<g class="{escape(item.name)}">')
        for child in item.items:
            _emit(out, child, sid, indent + "  ")
        out.append(f'{indent}</g>')
    elif isinstance(item, Rect):
        rx = f' rx="{_f(item.rx)}"' if item.rx else ""
        out.append(f'{indent}<rect x="{_f(item.x)}" y="{_f(item.y)}" width="{_f(item.w)}" height="{_f(item.h)}"{rx}'
                   f' fill="{item.fill}"{_stroke(item.stroke, item.width, item.dash)}/>')
    elif isinstance(item, Line):
        markers = f' marker-start="url(#arr-rev-{sid})" marker-end="url(#arr-{sid})"' if item.arrows else ""
        out.append(f'{indent}<line x1="{_f(item.x1)}" y1="{_f(item.y1)}" x2="{_f(item.x2)}" y2="{_f(item.y2)}"'
                   f'{_stroke(item.stroke, item.width, item.dash)}{markers}/>')
    elif isinstance(item, Circle):
        out.append(f'{indent}<circle cx="{_f(item.cx)}" cy="{_f(item.cy)}" r="{_f(item.r)}"'
                   f' fill="{item.fill}"{_stroke(item.stroke, item.width)}/>')
    elif isinstance(item, Polygon):
        pts = " ".join(f"{_f(x)},{_f(y)}" for x, y in item.points)
        op = f' opacity="{item.opacity:g}"' if item.opacity < 1 else ""
        out.append(f'{indent}<polygon points="{pts}" fill="{item.fill}"{_stroke(item.stroke, item.width)}{op}/>')
    elif isinstance(item, Text):
        attrs = f'x="{_f(item.x)}" y="{_f(item.y)}"'
        if item.anchor != "start":
            attrs += f' text-anchor="{item.anchor}"'
        attrs += f' font-size="{item.size:g}" fill="{item.fill}"'
        if item.weight != "normal":
            attrs += f' font-weight="{item.weight}"'
        if item.spacing:
            attrs += f' letter-spacing="{item.spacing:g}"'
        if item.opacity < 1:
            attrs += f' opacity="{item.opacity:g}"'
        if item.rotate:
            attrs += f' transform="rotate({item.rotate:g},{_f(item.x)},{_f(item.y)})"'
        out.append(f'{indent}<text {attrs}>{escape(item.text)}</text>')
    else:
        raise TypeError(f"Unknown scene item: {type(item).__name__}")


def _defs(sid: str) -> list[str]:
    return [
        '  <defs>',
        f'    <marker id="arr-{sid}" markerWidth="6" markerHeight="6" refX="3" refY="3" orient="auto">'
        f'<path d="M0,0 L6,3 L0,6 Z" fill="{DIM}"/></marker>',
        f'    <marker id="arr-rev-{sid}" markerWidth="6" markerHeight="6" refX="3" refY="3" orient="auto-start-reverse">'
        f'<path d="M0,0 L6,3 L0,6 Z" fill="{DIM}"/></marker>',
        f'    <pattern id="grid-{sid}" width="16" height="16" patternUnits="userSpaceOnUse">'
        f'<path d="M 16 0 L 0 0 0 16" fill="none" stroke="{GRID}" stroke-width="0.5"/></pattern>',
        '  </defs>',
    ]


def _sheet(scene: Scene, x: float = 0.0, y: float = 0.0, standalone: bool = False) -> list[str]:
    sid = scene.sheet_id
    ns = ' xmlns="http://www.w3.org/2000/svg"' if standalone else ""
    pos = "" if standalone else f' x="{_f(x)}" y="{_f(y)}"'
    out = [f'<svg{ns}{pos} width="{_f(scene.width)}" height="{_f(scene.height)}"'
           f' viewBox="0 0 {_f(scene.width)} {_f(scene.height)}" id="sheet-{sid}">']
    if standalone:
        out.append(f'  <style>{_STYLE}</style>')
    out.extend(_defs(sid))
    out.append(f'  <rect width="{_f(scene.width)}" height="{_f(scene.height)}" fill="{BG}"/>')
    out.append(f'  <rect width="{_f(scene.width)}" height="{_f(scene.height)}" fill="url(#grid-{sid})"/>')
    for item in scene.items:
        _emit(out, item, sid, "  ")
    out.append('</svg>')
    return out


def render_inline(scene: Scene) -> str:
    """One sheet as an <svg> element for embedding in a page (no prolog)."""
    return "\n".join(_sheet(scene, standalone=True))


def render_document(scenes: Sequence[Scene]) -> str:
    """Self-contained SVG file with every sheet stacked vertically."""
    width = max((s.width for s in scenes), default=0.0)
    height = sum(s.height for s in scenes) + SHEET_GAP * max(len(scenes) - 1, 0)
    out = ['<?xml version="1.0" encoding="UTF-8"?>',
           f'<svg xmlns="http://www.w3.org/2000/svg" width="{_f(width)}" height="{_f(height)}"'
           f' viewBox="0 0 {_f(width)} {_f(height)}">',
           f'<style>{_STYLE}</style>',
           f'<rect width="{_f(width)}" height="{_f(height)}" fill="{BG}"/>']
    y = 0.0
    for scene in scenes:
        out.extend(_sheet(scene, 0.0, y))
        y += scene.height + SHEET_GAP
    out.append('</svg>')
    return "\n".join(out) + "\n"


def render_print_html(scenes: Sequence[Scene], title: str) -> str:
    """Minimal HTML page with one sheet per printed page, for print-to-PDF."""
    out = ['<!DOCTYPE html>',
           '<html lang="es">',
           '<head>',
           '<meta charset="utf-8">',
           f'<title>{escape(title)}</title>',
           '<style>',
           f'body{{margin:0;background:{BG}}}',
           '.sheet{page-break-after:always;break-after:page;padding:8px}',
           '.sheet:last-child{page-break-after:auto;break-after:auto}',
           '@page{size:landscape;margin:8mm}',
           '</style>',
           '</head>',
           '<body>']
    for scene in scenes:
        out.append(f'<section class="sheet" title="{escape(scene.title, {chr(34): "&quot;"})}">')
        out.append(render_inline(scene))
        out.append('</section>')
    out += ['</body>', '</html>']
    return "\n".join(out) + "\n"

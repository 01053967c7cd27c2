"""CAD interchange (DXF) export."""

from .gen_dxf import build_dxf, render_dxf, dxf_filename

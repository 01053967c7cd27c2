"""Tests for sheet 2, the per-piece breakdown."""
import datetime

import pytest

from shared.errors import MissingDataError
from shared.model import Piece, PieceDetail, load_drawing_model
from shared.scene import Circle, Text, find_groups, walk
from shared.title_block import TITLE_H
from sheets.constants import PIECES
from sheets.piece_breakdown import compose_piece_breakdown, face_fits, render_piece, sheet_height

ISSUED = datetime.date(2025, 3, 14)

TABLERO = Piece(name="Tablero", quantity=1, length=600, width=400, thickness=18)


class TestFaceFits:
    def test_front_face(self):
        front = face_fits(TABLERO, 0, 0).front
        assert front.scale == pytest.approx(0.225)
        assert front.w == pytest.approx(135)
        assert front.h == pytest.approx(90)

    def test_faces_have_own_scales(self):
        front, side, top = face_fits(TABLERO, 0, 0)
        # the thin top face is limited by its length, not its thickness
        assert top.scale == pytest.approx(160 / 600)
        assert top.scale != front.scale
        assert side.w <= PIECES.face_w * 0.25 + 1e-9
        assert side.h <= PIECES.face_h - PIECES.face_inset + 1e-9
        assert top.w <= PIECES.face_w - PIECES.face_inset + 1e-9
        assert top.h <= PIECES.face_h * 0.22 + 1e-9

    def test_face_arrangement(self):
        front, side, top = face_fits(TABLERO, 100, 50)
        assert side.x == front.x + PIECES.face_w
        assert side.y == front.y
        assert top.x == front.x
        assert top.y > front.y + front.h

    def test_zero_size_piece_drawn_minimal(self):
        front, side, top = face_fits(Piece(name="Vacía"), 0, 0)
        assert (front.w, front.h) == (1.0, 1.0)
        assert (side.w, top.h) == (1.0, 1.0)


class TestRenderPiece:
    def test_overall_dimensions(self):
        g = render_piece(TABLERO, None, 0, 0)
        labels = [t.text for t in walk(g.items) if isinstance(t, Text)]
        assert labels.count("600") == 2
        assert labels.count("400") == 2
        assert labels.count("18") == 2
        assert "e=18mm" in labels
        assert find_groups(g.items, "machining") == []

    def test_holes_and_grooves(self, model):
        piece = model.pieces[0]
        g = render_piece(piece, model.detail_for(piece.name), 0, 0)
        assert len(find_groups(g.items, "hole")) == 2
        assert len(find_groups(g.items, "groove")) == 1
        labels = [t.text for t in walk(g.items) if isinstance(t, Text)]
        assert "VETA: longitudinal" in labels
        assert "▸ Canto frontal PVC 2 mm" in labels

    def test_hole_minimum_radius_and_clamped_inside_face(self):
        detail = PieceDetail(piece="Tablero", holes=[{"diametro": 1, "xMM": 5000, "yMM": 5000}])
        g = render_piece(TABLERO, detail, 0, 0)
        front = face_fits(TABLERO, 0, 0).front
        circle = next(c for c in walk(g.items) if isinstance(c, Circle))
        assert circle.r == PIECES.hole_min_r
        assert circle.cx <= front.x + front.w
        assert circle.cy <= front.y + front.h

    def test_groove_orientations(self):
        detail = PieceDetail(piece="Tablero", ranuras=[
            {"orientacion": "horizontal", "anchoMM": 6, "longitudMM": 600},
            {"orientacion": "vertical", "anchoMM": 6, "longitudMM": 400},
            {"orientacion": "diagonal", "anchoMM": 6, "longitudMM": 400},
        ])
        g = render_piece(TABLERO, detail, 0, 0)
        horizontal, vertical = (grp.items[0] for grp in find_groups(g.items, "groove"))
        front = face_fits(TABLERO, 0, 0).front
        assert horizontal.w == pytest.approx(front.w)
        assert vertical.h == pytest.approx(front.h)
        # 6 mm at 0.225 is under the minimum drawn width
        assert vertical.w == PIECES.groove_min_w

    def test_negative_hole_position_stays_on_face(self):
        detail = PieceDetail(piece="Tablero", holes=[{"diametro": 8, "xMM": -50, "yMM": -50}])
        g = render_piece(TABLERO, detail, 0, 0)
        front = face_fits(TABLERO, 0, 0).front
        circle = next(c for c in walk(g.items) if isinstance(c, Circle))
        assert (circle.cx, circle.cy) == (front.x, front.y)

    @pytest.mark.parametrize("groove", [
        {"orientacion": "horizontal", "anchoMM": 6, "longitudMM": -120},
        {"orientacion": "vertical", "anchoMM": -6, "longitudMM": -120},
        {"orientacion": "horizontal", "anchoMM": 6, "longitudMM": 100, "xMM": 5000},
        {"orientacion": "vertical", "anchoMM": 6, "longitudMM": 100, "xMM": -300},
    ])
    def test_grooves_never_drawn_inverted(self, groove):
        g = render_piece(TABLERO, PieceDetail(piece="Tablero", ranuras=[groove]), 0, 0)
        front = face_fits(TABLERO, 0, 0).front
        rect = find_groups(g.items, "groove")[0].items[0]
        assert rect.w >= 0 and rect.h >= 0
        assert front.x <= rect.x <= front.x + front.w
        assert front.y <= rect.y <= front.y + front.h

    def test_cutting_notes(self, model):
        piece = model.pieces[0]
        g = render_piece(piece, model.detail_for(piece.name), 0, 0)
        notes = [t for t in walk(g.items) if isinstance(t, Text) and t.text == "Cortar con sierra de mesa"]
        assert len(notes) == 1
        assert notes[0].anchor == "end"
        assert notes[0].x == PIECES.cell_w - 4 - 4

    def test_long_cutting_notes_truncated(self):
        detail = PieceDetail(piece="Tablero", notasCorte="Cortar a favor de la veta y lijar cantos")
        g = render_piece(TABLERO, detail, 0, 0)
        labels = [t.text for t in walk(g.items) if isinstance(t, Text)]
        assert "Cortar a favor de la veta…" in labels


class TestComposePieceBreakdown:
    def test_scene(self, model):
        scene = compose_piece_breakdown(model)
        assert scene.sheet_id == "h2"
        assert len(find_groups(scene.items, "piece")) == 5
        assert scene.width == PIECES.width
        assert scene.height == sheet_height(5)
        labels = [t.text for t in walk(scene.items) if isinstance(t, Text)]
        assert "2/3" in labels
        assert "VARIAS" in labels
        assert "×2  MDF 18 mm" in labels

    def test_capped_at_twelve(self, ficha):
        ficha["listaCortesDetallada"] = [
            {"pieza": f"P{i}", "cantidad": 1, "largoMM": 500, "anchoMM": 300, "espesorMM": 18}
            for i in range(15)
        ]
        scene = compose_piece_breakdown(load_drawing_model(ficha, ISSUED))
        assert len(find_groups(scene.items, "piece")) == 12
        labels = [t.text for t in walk(scene.items) if isinstance(t, Text)]
        assert "P11" in labels
        assert "P12" not in labels
        assert scene.height == sheet_height(15) == PIECES.pad_y * 2 + 4 * PIECES.cell_h + TITLE_H

    def test_grid_positions(self, model):
        pieces = find_groups(compose_piece_breakdown(model).items, "piece")
        name_x = [g.items[0].x for g in pieces]
        assert name_x[0] == name_x[3]
        assert name_x[1] - name_x[0] == PIECES.cell_w + PIECES.gutter

    def test_empty_cut_list_raises(self, ficha):
        ficha["listaCortesDetallada"] = []
        with pytest.raises(MissingDataError):
            compose_piece_breakdown(load_drawing_model(ficha, ISSUED))


@pytest.mark.parametrize("count, rows", [(1, 1), (3, 1), (4, 2), (12, 4), (40, 4)])
def test_sheet_height(count, rows):
    assert sheet_height(count) == PIECES.pad_y * 2 + rows * PIECES.cell_h + TITLE_H

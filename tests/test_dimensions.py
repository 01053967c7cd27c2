"""Tests for shared/dimensions.py stacked dimension annotation."""
import pytest

from shared.dimensions import COMPACT, STANDARD, annotate, annotate_view, offsets, overall
from shared.model import Dimension
from shared.scene import Line, Text, find_groups, walk
from shared.types import Fit

FIT = Fit(scale=0.5, x=100.0, y=50.0, w=300.0, h=200.0)


def dim(start, end, axis="horizontal", label="", description=""):
    return Dimension(axis=axis, start=start, end=end, label=label, description=description)


def dimension_line(group):
    return next(i for i in group.items if isinstance(i, Line) and i.arrows)


class TestOffsets:
    def test_stacked_by_gap(self):
        dims = [dim(0, 600), dim(0, 300), dim(0, 1800, "vertical"), dim(300, 600)]
        assert offsets(dims, "horizontal") == [20, 42, 64]
        assert offsets(dims, "vertical") == [20]

    def test_compact_style(self):
        assert offsets([dim(0, 1), dim(0, 2)], "horizontal", COMPACT) == [8, 18]


class TestAnnotate:
    def test_horizontal_lines_below_object(self):
        g = annotate([dim(0, 600, label="600"), dim(0, 300, label="300")], "horizontal", FIT)
        assert g.name == "dimensions-horizontal"
        assert len(g.items) == 2
        edge = FIT.y + FIT.h
        ys = [dimension_line(d).y1 for d in g.items]
        assert ys == [edge + STANDARD.first, edge + STANDARD.first + STANDARD.gap]

    def test_horizontal_span_scaled(self):
        g = annotate([dim(100, 500, label="400")], "horizontal", FIT)
        line = dimension_line(g.items[0])
        assert line.x1 == pytest.approx(100 + 100 * 0.5 + STANDARD.inset)
        assert line.x2 == pytest.approx(100 + 500 * 0.5 - STANDARD.inset)
        labels = [t.text for t in walk(g.items) if isinstance(t, Text)]
        assert labels == ["400"]

    def test_vertical_lines_left_of_object(self):
        g = annotate([dim(0, 400, "vertical", "400")], "vertical", FIT)
        line = dimension_line(g.items[0])
        assert line.x1 == line.x2 == FIT.x - STANDARD.first
        label = next(t for t in walk(g.items) if isinstance(t, Text))
        assert label.rotate == -90

    def test_description_caption(self):
        g = annotate([dim(0, 600, label="600", description="Ancho total")], "horizontal", FIT)
        texts = [t.text for t in walk(g.items) if isinstance(t, Text)]
        assert texts == ["600", "Ancho total"]

    def test_no_dimensions_no_groups(self):
        assert annotate([], "horizontal", FIT).items == ()
        assert annotate([dim(0, 10, "vertical")], "horizontal", FIT).items == ()

    @pytest.mark.parametrize("start, end", [(300, 300), (600, 0)])
    def test_degenerate_span_skipped_but_keeps_slot(self, start, end):
        g = annotate([dim(start, end), dim(0, 600)], "horizontal", FIT)
        assert len(g.items) == 1
        # the surviving dimension still sits on the second line
        assert dimension_line(g.items[0]).y1 == FIT.y + FIT.h + STANDARD.first + STANDARD.gap

    def test_duplicate_spans_both_drawn(self):
        g = annotate([dim(0, 600, label="600"), dim(0, 600, label="600")], "horizontal", FIT)
        assert len(g.items) == 2
        a, b = (dimension_line(d) for d in g.items)
        assert b.y1 - a.y1 == STANDARD.gap


class TestAnnotateView:
    def test_both_axes(self):
        g = annotate_view([dim(0, 600), dim(0, 400, "vertical"), dim(0, 400, "vertical")], FIT)
        assert g.name == "dimensions"
        assert len(find_groups(g.items, "dim-horizontal")) == 1
        assert len(find_groups(g.items, "dim-vertical")) == 2

    def test_unknown_axis_ignored(self):
        g = annotate_view([dim(0, 600, "diagonal")], FIT)
        assert list(walk(g.items)) == []


def test_overall_dimension():
    d = overall("vertical", 1800)
    assert (d.axis, d.start, d.end, d.label) == ("vertical", 0, 1800, "1800")
    assert overall("horizontal", 12.5, "L").label == "L"

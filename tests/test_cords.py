"""Tests for pdfcrop.cords."""

import pytest

from pdfcrop.cords import (
    Point,
    ScreenRect,
    PageGeometry,
    CropBox,
    normalize_drag,
    to_document_space,
    is_degenerate,
    scale_rect,
    box_corners,
)

LETTER = PageGeometry(612, 792)


class TestNormalizeDrag:
    @pytest.mark.parametrize("anchor, current", [
        (Point(10, 20), Point(110, 70)),   # down-right
        (Point(110, 20), Point(10, 70)),   # down-left
        (Point(10, 70), Point(110, 20)),   # up-right
        (Point(110, 70), Point(10, 20)),   # up-left
    ])
    def test_all_drag_directions(self, anchor, current):
        assert normalize_drag(anchor, current) == ScreenRect(10, 20, 100, 50)

    def test_matches_min_and_abs_delta(self):
        anchor, current = Point(-3.5, 40), Point(12.25, -8)
        rect = normalize_drag(anchor, current)
        assert rect.x == min(anchor.x, current.x)
        assert rect.y == min(anchor.y, current.y)
        assert rect.width == abs(current.x - anchor.x)
        assert rect.height == abs(current.y - anchor.y)

    def test_symmetric(self):
        a, c = Point(300, 15), Point(42, 280)
        assert normalize_drag(a, c) == normalize_drag(c, a)

    def test_same_point_is_zero_size(self):
        assert normalize_drag(Point(5, 6), Point(5, 6)) == ScreenRect(5, 6, 0, 0)


class TestToDocumentSpace:
    def test_letter_page_example(self):
        box = to_document_space(ScreenRect(100, 100, 200, 150), 600, LETTER)
        assert box.x == pytest.approx(102)
        assert box.width == pytest.approx(204)
        assert box.height == pytest.approx(153)
        assert box.y == pytest.approx(537)

    def test_unit_scale_flips_y_axis(self):
        box = to_document_space(ScreenRect(0, 0, 612, 92), 612, LETTER)
        assert box == CropBox(0, 700, 612, 92)

    def test_bottom_of_page_maps_to_zero(self):
        box = to_document_space(ScreenRect(0, 692, 100, 100), 612, LETTER)
        assert box.y == pytest.approx(0)

    def test_uses_viewport_width_for_scale(self):
        # Half-size preview doubles every length.
        box = to_document_space(ScreenRect(10, 10, 50, 20), 306, LETTER)
        assert box == CropBox(20, 792 - 60, 100, 40)

    def test_degenerate_rect_gives_zero_area_box(self):
        box = to_document_space(ScreenRect(50, 50, 0, 30), 600, LETTER)
        assert box.width == 0
        assert box.height == pytest.approx(30.6)

    @pytest.mark.parametrize("width", [0, -10])
    def test_rejects_non_positive_viewport(self, width):
        with pytest.raises(ValueError):
            to_document_space(ScreenRect(0, 0, 10, 10), width, LETTER)


class TestHelpers:
    @pytest.mark.parametrize("rect, expected", [
        (None, True),
        (ScreenRect(0, 0, 0, 10), True),
        (ScreenRect(0, 0, 10, 0), True),
        (ScreenRect(0, 0, 1, 1), False),
    ])
    def test_is_degenerate(self, rect, expected):
        assert is_degenerate(rect) is expected

    def test_scale_rect(self):
        assert scale_rect(ScreenRect(10, 20, 30, 40), 1.5) == ScreenRect(15, 30, 45, 60)

    def test_box_corners(self):
        assert box_corners(CropBox(10, 20, 100, 50)) == ((10, 20), (110, 70))

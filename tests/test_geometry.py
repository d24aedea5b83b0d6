import pytest

from thumbor_url import ConfigurationError, Coords, Rect
from thumbor_url.schemas.geometry import to_rect


class TestCoords:

    def test_of(self):
        assert Coords.of((3, 4)) == Coords(x=3, y=4)
        assert Coords.of(5) == Coords(x=5, y=5)
        point = Coords(x=1, y=2)
        assert Coords.of(point) is point

    def test_arithmetic_and_str(self):
        assert Coords(x=1, y=2) + Coords(x=3, y=4) == Coords(x=4, y=6)
        assert Coords(x=1, y=2) - Coords(x=3, y=4) == Coords(x=-2, y=-2)
        assert str(Coords(x=300, y=200)) == "300x200"


class TestRect:

    def test_str(self):
        assert str(Rect.from_points((10, 20), (300, 200))) == "10x20:300x200"

    def test_edges(self):
        rect = Rect.from_points((10, 20), (110, 70))

        assert (rect.left, rect.top, rect.right, rect.bottom) == (10, 20, 110, 70)
        assert (rect.width, rect.height) == (100, 50)
        assert rect.center() == Coords(x=60, y=45)

    def test_from_center(self):
        rect = Rect.from_center((50, 50), 20, 10)
        assert str(rect) == "40x45:60x55"

    def test_scale(self):
        rect = Rect.from_points((40, 40), (60, 60))

        assert str(rect.scale(2)) == "30x30:70x70"
        assert str(rect.scale(0.5)) == "45x45:55x55"

    def test_scale_out_of_image(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Rect.from_points((0, 0), (10, 10)).scale(3)
        assert exc_info.value.field == "crop"

    def test_invalid_boxes(self):
        for top_left, bottom_right in [((10, 10), (5, 20)), ((10, 10), (20, 5)), ((0, 0), (0, 0)), ((-5, 0), (5, 5))]:
            with pytest.raises(ConfigurationError) as exc_info:
                Rect.from_points(top_left, bottom_right)
            assert exc_info.value.field == "crop", f"Failed for {top_left}, {bottom_right}"

    def test_invalid_points(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Rect.from_points(("a", 0), (10, 10), field="filters")
        assert exc_info.value.field == "filters"

    def test_to_rect(self):
        rect = Rect.from_points((1, 2), (3, 4))
        assert to_rect(rect) is rect
        assert to_rect(((1, 2), (3, 4))) == rect

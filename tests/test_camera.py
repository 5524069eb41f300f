import pytest

from attractor.camera import Camera, round_half_away


def test_origin_lands_on_screen_center():
    camera = Camera(center=(0.0, 0.0), height=2.0, screen_size=(4, 4))
    assert camera.to_screen((0.0, 0.0)) == (2, 2)


def test_width_follows_height_and_aspect_ratio():
    camera = Camera(center=(0.0, 0.0), height=2.0, screen_size=(8, 4))
    assert camera.width == 4.0


def test_y_axis_points_up():
    camera = Camera(center=(0.0, 0.0), height=2.0, screen_size=(10, 10))
    column, top_row = camera.to_screen((0.0, 0.9))
    _, bottom_row = camera.to_screen((0.0, -0.9))
    assert column == 5
    assert top_row < bottom_row


@pytest.mark.parametrize("screen_size", [(4, 4), (7, 5), (16, 9)])
def test_pixels_round_trip(screen_size):
    camera = Camera(center=(0.0, 0.0), height=3.0, screen_size=screen_size)
    for column in range(screen_size[0]):
        for row in range(screen_size[1]):
            assert camera.to_screen(camera.to_real((column, row))) == (column, row)


def test_real_points_round_trip_within_half_a_pixel():
    camera = Camera(center=(0.0, 0.0), height=2.0, screen_size=(100, 100))
    pixel_size = camera.height / camera.screen_size[1]
    x, y = camera.to_real(camera.to_screen((0.3141, -0.2718)))
    assert abs(x - 0.3141) <= pixel_size / 2
    assert abs(y + 0.2718) <= pixel_size / 2


def test_bottom_edge_is_outside_the_screen():
    camera = Camera(center=(0.0, 0.0), height=2.0, screen_size=(4, 4))
    pixel = camera.to_screen((0.0, -1.0))
    assert pixel == (2, 4)
    assert not camera.contains(pixel)
    assert camera.contains((0, 0))


def test_rounding_is_half_away_from_zero():
    assert round_half_away(0.5) == 1
    assert round_half_away(-0.5) == -1
    assert round_half_away(2.5) == 3
    assert round_half_away(-0.4) == 0


@pytest.mark.parametrize("height", [0.0, -1.0, float("inf"), float("nan")])
def test_rejects_invalid_height(height):
    with pytest.raises(ValueError):
        Camera(center=(0.0, 0.0), height=height, screen_size=(4, 4))


@pytest.mark.parametrize("screen_size", [(0, 4), (4, -1), (4.0, 4)])
def test_rejects_invalid_screen_size(screen_size):
    with pytest.raises(ValueError):
        Camera(center=(0.0, 0.0), height=1.0, screen_size=screen_size)

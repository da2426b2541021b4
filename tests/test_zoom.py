import pytest

from cinebook.utils.zoom import ZoomController


def test_pinch_is_clamped_to_max():
    zoom = ZoomController(1.0)

    zoom.begin_pinch()
    zoom.pinch(3.0)

    assert zoom.scale == 2.0


def test_pinch_is_clamped_to_min():
    zoom = ZoomController(1.0)

    zoom.begin_pinch()
    zoom.pinch(0.1)

    assert zoom.scale == 0.8


def test_pinch_factor_is_relative_to_gesture_start():
    zoom = ZoomController(1.2)

    zoom.begin_pinch()
    zoom.pinch(1.1)
    zoom.pinch(1.25)

    assert zoom.scale == pytest.approx(1.5)


@pytest.mark.parametrize("factor, expected", [
    (0.85, 1.0),   # zoomed out springs back
    (1.3, 1.3),    # in range stays
    (1.9, 1.5),    # deep zoom settles
])
def test_release_snaps(factor, expected):
    zoom = ZoomController(1.0)
    zoom.begin_pinch()
    zoom.pinch(factor)

    assert zoom.end_pinch() == pytest.approx(expected)
    assert zoom.pinching is False


def test_buttons_step_and_clamp():
    zoom = ZoomController(1.0)

    assert zoom.zoom_in() == pytest.approx(1.2)
    for _ in range(10):
        zoom.zoom_in()
    assert zoom.scale == 2.0

    for _ in range(10):
        zoom.zoom_out()
    assert zoom.scale == 0.8


def test_percent_display():
    zoom = ZoomController(1.0)
    zoom.zoom_in()

    assert zoom.percent == 120


def test_reset():
    zoom = ZoomController(1.8)

    assert zoom.reset() == 1.0

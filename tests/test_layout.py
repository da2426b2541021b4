from cinebook.utils.layout import compute_layout, layout_for_rows
from cinebook.utils.seat_rows import group_seats_by_row

from conftest import seat


def test_small_hall_uses_max_seat_size():
    layout = compute_layout(row_count=4, max_seats_in_row=6, viewport_width=390, viewport_height=420)

    assert layout.seat_size == 40
    assert layout.row_height == 40 + 6
    assert layout.content_width == 390
    assert layout.content_height == 420


def test_large_hall_never_goes_below_min_size_and_scrolls():
    layout = compute_layout(row_count=20, max_seats_in_row=60, viewport_width=390, viewport_height=420)

    assert layout.seat_size == 28
    assert layout.content_width > 390
    assert layout.content_height == 20 * (28 + 6)


def test_size_between_bounds_fits_the_viewport():
    layout = compute_layout(
        row_count=8, max_seats_in_row=10, viewport_width=400, viewport_height=1000,
        gap=0, label_width=0, padding=0,
    )

    assert layout.seat_size == 40
    layout = compute_layout(
        row_count=8, max_seats_in_row=12, viewport_width=400, viewport_height=1000,
        gap=0, label_width=0, padding=0,
    )
    assert layout.seat_size == 33


def test_couple_seats_widen_without_changing_row_height():
    plain = group_seats_by_row([seat(i, "A", str(i)) for i in range(1, 9)])
    with_couples = group_seats_by_row(
        [seat(i, "A", str(i)) for i in range(1, 7)]
        + [seat(7, "A", "7", "COUPLE"), seat(8, "A", "8", "COUPLE")]
    )

    a = layout_for_rows(plain, 2000, 400)
    b = layout_for_rows(with_couples, 2000, 400)

    assert a.row_height == b.row_height == 46
    assert b.couple_width == 84.0


def test_empty_hall_falls_back_to_viewport():
    layout = layout_for_rows({}, 390, 420)

    assert layout.seat_size == 28
    assert layout.content_width == 390
    assert layout.content_height == 420

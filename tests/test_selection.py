import threading

import pytest

from cinebook.core.exceptions import SeatAlreadyBooked, UnknownSeat
from cinebook.services.selection import SelectionTracker

from conftest import seat


@pytest.fixture
def tracker():
    return SelectionTracker([
        seat(1, "A", "1", booked=True),
        seat(2, "A", "2"),
        seat(3, "A", "3"),
        seat(4, "B", "1", "VIP"),
    ])


def test_booked_seat_can_never_be_selected(tracker):
    for _ in range(3):
        with pytest.raises(SeatAlreadyBooked):
            tracker.toggle(1)

    assert tracker.get(1).is_selected is False
    assert tracker.selected_ids == []


def test_rejected_toggle_leaves_existing_selection_alone(tracker):
    tracker.toggle(2)

    with pytest.raises(SeatAlreadyBooked):
        tracker.toggle(1)

    assert tracker.selected_ids == [2]


def test_toggle_twice_restores_previous_selection(tracker):
    tracker.toggle(3)
    before = set(tracker.selected_ids)

    assert tracker.toggle(2) is True
    assert tracker.toggle(2) is False

    assert set(tracker.selected_ids) == before
    assert tracker.get(2).is_selected is False


def test_selection_keeps_click_order(tracker):
    tracker.toggle(4)
    tracker.toggle(2)
    tracker.toggle(3)

    assert tracker.selected_ids == [4, 2, 3]
    assert [s.label for s in tracker.selected_seats()] == ["B1", "A2", "A3"]


def test_unknown_seat(tracker):
    with pytest.raises(UnknownSeat):
        tracker.toggle(404)


def test_reset_clears_flags(tracker):
    tracker.toggle(2)
    tracker.toggle(4)

    tracker.reset()

    assert tracker.selected_ids == []
    assert not any(s.is_selected for s in tracker.seats)


def test_incoming_selected_flag_on_booked_seat_is_ignored():
    booked = seat(1, booked=True)
    booked.is_selected = True

    tracker = SelectionTracker([booked, seat(2)])

    assert tracker.selected_ids == []
    assert booked.is_selected is False


def test_overlapping_toggles_keep_selection_consistent(tracker):
    threads_per_round = 8
    errors = []

    for _ in range(50):
        barrier = threading.Barrier(threads_per_round)

        def tap():
            barrier.wait()
            try:
                tracker.toggle(2)
            except Exception as exc:  # surfaced by the assertion below
                errors.append(exc)

        threads = [threading.Thread(target=tap) for _ in range(threads_per_round)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # an even number of taps always lands back on unselected
        assert tracker.get(2).is_selected is False
        assert tracker.selected_ids == []

    assert errors == []

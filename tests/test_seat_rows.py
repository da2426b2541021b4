from cinebook.utils.seat_rows import group_seats_by_row, seat_number_key

from conftest import seat


def test_numeric_sort_within_row():
    rows = group_seats_by_row([seat(1, "A", "10"), seat(2, "A", "2")])

    assert [s.label for s in rows["A"]] == ["A2", "A10"]


def test_rows_in_ascending_label_order():
    rows = group_seats_by_row([seat(1, "C", "1"), seat(2, "A", "1"), seat(3, "B", "1")])

    assert list(rows) == ["A", "B", "C"]


def test_seat_without_row_is_dropped():
    rows = group_seats_by_row([seat(1, "A", "1"), seat(2, None, "2"), seat(3, "  ", "3")])

    assert list(rows) == ["A"]
    assert [s.id for s in rows["A"]] == [1]


def test_non_numeric_seat_numbers_sort_first():
    rows = group_seats_by_row([seat(1, "A", "3"), seat(2, "A", "X"), seat(3, "A", "1")])

    assert [s.seat_number for s in rows["A"]] == ["X", "1", "3"]


def test_seat_number_key():
    assert seat_number_key("12") == 12
    assert seat_number_key("7B") == 7
    assert seat_number_key("B7") == 0
    assert seat_number_key("") == 0

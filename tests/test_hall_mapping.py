from cinebook.clients.cinemas import CinemaClient
from cinebook.schemas.showtime import Cinema
from cinebook.services.hall_mapping import (
    FlatHallRef,
    NestedHallRef,
    ShowtimeDirectory,
    UnknownHallRef,
    build_hall_index,
    group_showtimes_by_cinema,
    parse_hall_ref,
)

from conftest import envelope

CINEMAS = [
    {"id": 1, "name": "CGV", "halls": [{"id": 10}, {"id": 11}]},
    {"id": 2, "name": "Lotte", "halls": [{"id": 20}]},
    {"id": 3, "name": "Galaxy"},
]


def cinemas():
    return [Cinema.model_validate(c) for c in CINEMAS]


def test_parse_flat_ref():
    assert parse_hall_ref({"id": 1, "cinemaHallId": 10}) == FlatHallRef(hall_id=10)


def test_parse_flat_ref_keeps_cinema_from_nested_stub():
    ref = parse_hall_ref({"id": 1, "cinemaHallId": 10, "cinemaHall": {"id": 10, "cinemaId": 1}})

    assert ref == FlatHallRef(hall_id=10, cinema_id=1)


def test_parse_nested_ref():
    ref = parse_hall_ref({"id": 1, "cinemaHall": {"id": 30, "cinema": {"id": 3}}})

    assert ref == NestedHallRef(hall_id=30, cinema_id=3)


def test_parse_unknown_shapes():
    assert isinstance(parse_hall_ref({"id": 1}), UnknownHallRef)
    assert isinstance(parse_hall_ref({"id": 1, "cinemaHall": 10}), UnknownHallRef)
    assert isinstance(parse_hall_ref({"id": 1, "cinemaHall": {"hallName": "X"}}), UnknownHallRef)


def test_hall_index_only_from_listed_halls():
    assert build_hall_index(cinemas()) == {10: 1, 11: 1, 20: 2}


def test_hall_claimed_twice_is_left_out():
    conflicting = cinemas() + [Cinema.model_validate({"id": 4, "name": "BHD", "halls": [{"id": 20}]})]

    assert 20 not in build_hall_index(conflicting)


def test_grouping_fails_closed():
    raw = [
        {"id": 100, "cinemaHallId": 11, "showDate": "2025-03-07", "startTime": "21:00:00"},
        {"id": 101, "cinemaHallId": 10, "showDate": "2025-03-07", "startTime": "18:00:00"},
        {"id": 102, "cinemaHall": {"id": 20}, "showDate": "2025-03-07", "startTime": "19:00:00"},
        {"id": 103, "cinemaHall": {"id": 30, "cinemaId": 3}, "showDate": "2025-03-07", "startTime": "20:00:00"},
        # Galaxy lists no halls and this showtime does not name its cinema
        {"id": 104, "cinemaHallId": 31, "showDate": "2025-03-07", "startTime": "20:00:00"},
        {"id": 105, "showDate": "2025-03-07", "startTime": "20:00:00"},
    ]

    result = group_showtimes_by_cinema(raw, cinemas())

    assert [(g.cinema.name, [s.id for s in g.showtimes]) for g in result.groups] == [
        ("CGV", [101, 100]),
        ("Lotte", [102]),
        ("Galaxy", [103]),
    ]
    assert sorted(s.id for s in result.unmapped) == [104, 105]
    lotte = result.groups[1].showtimes[0]
    assert lotte.cinema_hall_id == 20


def test_directory_filters_by_cinema_halls(showtime_client, api, fake_session):
    fake_session.add("GET", "/showtimes/movie/3", envelope([
        {"id": 1, "cinemaHallId": 10, "showDate": "2025-03-07", "startTime": "20:00:00"},
        {"id": 2, "cinemaHallId": 20, "showDate": "2025-03-07", "startTime": "20:00:00"},
        {"id": 3, "cinemaHall": {"id": 11}, "showDate": "2025-03-07", "startTime": "10:00:00"},
    ]))
    fake_session.add("GET", "/cinemas", envelope(CINEMAS))

    directory = ShowtimeDirectory(showtime_client, CinemaClient(api))

    assert [s.id for s in directory.showtimes_for_cinema(3, 1)] == [3, 1]
    assert directory.showtimes_for_cinema(3, 99) == []


def test_directory_fetches_halls_when_cinema_does_not_list_them(showtime_client, api, fake_session):
    fake_session.add("GET", "/showtimes/movie/3", envelope([
        {"id": 1, "cinemaHallId": 30},
        {"id": 2, "cinemaHallId": 10},
    ]))
    fake_session.add("GET", "/cinemas", envelope(CINEMAS))
    fake_session.add("GET", "/cinemas/3/halls", envelope([{"id": 30, "cinemaId": 3}]))

    directory = ShowtimeDirectory(showtime_client, CinemaClient(api))

    assert [s.id for s in directory.showtimes_for_cinema(3, 3)] == [1]


def test_movie_without_showtimes_is_empty(showtime_client, api, fake_session):
    # Unrouted paths answer 404
    directory = ShowtimeDirectory(showtime_client, CinemaClient(api))

    result = directory.showtimes_by_cinema(3)

    assert result.groups == []
    assert result.unmapped == []

import json
from typing import Any, Dict, Optional, Tuple

import pytest
import requests

from cinebook.clients.api import ApiClient
from cinebook.clients.showtimes import ShowtimeClient
from cinebook.schemas.seat import Seat, SeatWithStatus

BASE_URL = "http://cinema.test/api"


def envelope(result: Any, code: int = 200, message: str = "Success") -> dict:
    return {"code": code, "message": message, "result": result}


def make_response(status: int, body: Any, url: str = BASE_URL) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = "OK" if status < 400 else "Error"
    response.url = url
    response.headers["Content-Type"] = "application/json"
    response._content = b"" if body is None else json.dumps(body).encode()
    return response


class FakeSession:
    """Stands in for requests.Session; answers from a route table keyed by (method, path)."""

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.calls = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method.upper(), path)] = (status, body)

    def add_error(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method.upper(), path)] = exc

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(self.base_url):]
        self.calls.append({"method": method, "path": path, "json": json, "headers": headers or {}})
        route = self.routes.get((method.upper(), path))
        if route is None:
            return make_response(404, {"code": 404, "message": "Not found"}, url)
        if isinstance(route, Exception):
            raise route
        status, body = route
        return make_response(status, body, url)

    def paths(self, method: Optional[str] = None):
        return [c["path"] for c in self.calls if method is None or c["method"] == method]


# ---------------------------------------------------------------------------
# Sample hall: showtime 7 in hall 1, seat 1 already booked, seat 6 has no row (dropped)
# ---------------------------------------------------------------------------

SHOWTIME = {
    "id": 7,
    "movieId": 3,
    "cinemaHallId": 1,
    "showDate": "2025-03-07",
    "startTime": "19:30:00",
    "endTime": "22:10:00",
    "price": 80000,
    "movie": {"id": 3, "title": "Dune: Part Two", "duration": 166},
    "cinemaHall": {"id": 1, "cinemaId": 2, "hallName": "Hall 1"},
}

ALL_SEATS = [
    {"id": 1, "cinemaHallId": 1, "seatRow": "A", "seatNumber": "1", "seatType": "NORMAL"},
    {"id": 3, "cinemaHallId": 1, "seatRow": "A", "seatNumber": "10", "seatType": "VIP", "basePrice": 0},
    {"id": 2, "cinemaHallId": 1, "seatRow": "A", "seatNumber": "2", "seatType": "NORMAL"},
    {"id": 4, "cinemaHallId": 1, "seatRow": "B", "seatNumber": "1", "seatType": "COUPLE"},
    {"id": 5, "cinemaHallId": 1, "seatRow": "B", "seatNumber": "2", "seatType": "NORMAL", "basePrice": 120000},
    {"id": 6, "cinemaHallId": 1, "seatRow": "", "seatNumber": "9", "seatType": "NORMAL"},
]

AVAILABLE_IDS = [2, 3, 4, 5, 6]


def available_seats():
    return [s for s in ALL_SEATS if s["id"] in AVAILABLE_IDS]


def install_showtime(fake: FakeSession, showtime_id: int = 7) -> None:
    fake.add("GET", f"/showtimes/{showtime_id}", envelope(SHOWTIME))
    fake.add("GET", f"/showtimes/{showtime_id}/seats", envelope(ALL_SEATS))
    fake.add("GET", f"/showtimes/{showtime_id}/available-seats", envelope(available_seats()))


def seat(seat_id: int, row: str = "A", number: str = "1", seat_type: Optional[str] = "NORMAL",
         base_price: Optional[int] = None, booked: bool = False) -> SeatWithStatus:
    return SeatWithStatus(
        id=seat_id,
        cinema_hall_id=1,
        seat_row=row,
        seat_number=number,
        seat_type=seat_type,
        base_price=base_price,
        is_booked=booked,
    )


def plain_seat(seat_id: int, **kwargs) -> Seat:
    return Seat(id=seat_id, cinema_hall_id=1, seat_row="A", seat_number=str(seat_id), **kwargs)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def api(fake_session):
    return ApiClient(fake_session, base_url=BASE_URL, timeout=5)


@pytest.fixture
def showtime_client(api):
    return ShowtimeClient(api)

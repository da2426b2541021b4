import logging
from datetime import date
from typing import List, Union

from cinebook.clients.api import ApiClient
from cinebook.core.exceptions import RemoteApiError
from cinebook.schemas.seat import Seat
from cinebook.schemas.showtime import Showtime

logger = logging.getLogger(__name__)


class ShowtimeClient:
    """Showtime and per-showtime seat endpoints of the remote API."""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_showtime(self, showtime_id: int) -> Showtime:
        return Showtime.model_validate(self.api.get(f"/showtimes/{showtime_id}"))

    def get_all_seats(self, showtime_id: int) -> List[Seat]:
        """Every seat of the showtime's hall, booked or not."""
        result = self.api.get(f"/showtimes/{showtime_id}/seats") or []
        return [Seat.model_validate(s) for s in result]

    def get_available_seats(self, showtime_id: int) -> List[Seat]:
        """Seats not yet booked for this showtime."""
        result = self.api.get(f"/showtimes/{showtime_id}/available-seats") or []
        return [Seat.model_validate(s) for s in result]

    def get_raw_showtimes_by_movie(self, movie_id: int) -> List[dict]:
        """
        Raw showtime dicts for a movie, across all dates.

        Kept untyped on purpose: the hall reference comes in several shapes and is
        classified by ``services.hall_mapping``. A 404 means the movie has no showtimes.
        """
        try:
            result = self.api.get(f"/showtimes/movie/{movie_id}")
        except RemoteApiError as exc:
            if exc.remote_status == 404:
                logger.info("No showtimes for movie %s", movie_id)
                return []
            raise
        return list(result or [])

    def get_showtimes_by_movie(self, movie_id: int) -> List[Showtime]:
        return [Showtime.model_validate(s) for s in self.get_raw_showtimes_by_movie(movie_id)]

    def get_raw_showtimes_by_movie_and_date(self, movie_id: int, show_date: Union[date, str]) -> List[dict]:
        if isinstance(show_date, date):
            show_date = show_date.isoformat()
        result = self.api.get(f"/showtimes/movie/{movie_id}/date/{show_date}")
        return list(result or [])

    def get_showtimes_by_movie_and_date(self, movie_id: int, show_date: Union[date, str]) -> List[Showtime]:
        return [
            Showtime.model_validate(s)
            for s in self.get_raw_showtimes_by_movie_and_date(movie_id, show_date)
        ]

"""
Tie showtimes to cinemas.

The remote API is inconsistent about how a showtime points at its hall:

- shape A: a flat ``cinemaHallId`` field
- shape B: a nested ``cinemaHall`` object carrying ``id`` (and sometimes ``cinemaId``
  or a nested ``cinema``)

Anything else is classified as unknown. Resolution fails closed: a showtime whose
hall cannot be tied to exactly one cinema is reported as unmapped, never guessed.
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel

from cinebook.clients.cinemas import CinemaClient
from cinebook.clients.showtimes import ShowtimeClient
from cinebook.schemas.showtime import Cinema, CinemaShowtimes, Showtime, ShowtimesByCinema

logger = logging.getLogger(__name__)


class FlatHallRef(BaseModel):
    kind: Literal["flat"] = "flat"
    hall_id: int
    cinema_id: Optional[int] = None


class NestedHallRef(BaseModel):
    kind: Literal["nested"] = "nested"
    hall_id: int
    cinema_id: Optional[int] = None


class UnknownHallRef(BaseModel):
    kind: Literal["unknown"] = "unknown"


HallRef = Union[FlatHallRef, NestedHallRef, UnknownHallRef]


def _as_id(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and value > 0:
        return value
    return None


def _cinema_id_of_hall(hall: dict) -> Optional[int]:
    cinema_id = _as_id(hall.get("cinemaId"))
    if cinema_id is None and isinstance(hall.get("cinema"), dict):
        cinema_id = _as_id(hall["cinema"].get("id"))
    return cinema_id


def parse_hall_ref(raw_showtime: dict) -> HallRef:
    nested = raw_showtime.get("cinemaHall")
    nested = nested if isinstance(nested, dict) else None

    flat_id = _as_id(raw_showtime.get("cinemaHallId"))
    if flat_id is not None:
        cinema_id = _cinema_id_of_hall(nested) if nested else None
        return FlatHallRef(hall_id=flat_id, cinema_id=cinema_id)

    if nested is not None:
        hall_id = _as_id(nested.get("id"))
        if hall_id is not None:
            return NestedHallRef(hall_id=hall_id, cinema_id=_cinema_id_of_hall(nested))

    return UnknownHallRef()


def build_hall_index(cinemas: Iterable[Cinema]) -> Dict[int, int]:
    """
    hall id -> cinema id, from cinemas that list their halls.

    A hall claimed by two different cinemas is left out.
    """
    index: Dict[int, int] = {}
    conflicted = set()
    for cinema in cinemas:
        for hall in cinema.halls or []:
            owner = hall.cinema_id or cinema.id
            if hall.id in index and index[hall.id] != owner:
                conflicted.add(hall.id)
            index.setdefault(hall.id, owner)

    for hall_id in conflicted:
        logger.warning("Hall %s is listed under more than one cinema; left unmapped", hall_id)
        index.pop(hall_id, None)
    return index


def resolve_cinema_id(ref: HallRef, hall_index: Dict[int, int]) -> Optional[int]:
    if isinstance(ref, UnknownHallRef):
        return None
    if ref.cinema_id is not None:
        return ref.cinema_id
    return hall_index.get(ref.hall_id)


def _sort_key(showtime: Showtime):
    return (showtime.show_date or "", showtime.start_time or "")


def group_showtimes_by_cinema(raw_showtimes: Iterable[dict], cinemas: List[Cinema]) -> ShowtimesByCinema:
    """Group showtimes under their cinema, in the cinema list's order."""
    hall_index = build_hall_index(cinemas)
    by_id = {c.id: c for c in cinemas}
    grouped: Dict[int, List[Showtime]] = {}
    unmapped: List[Showtime] = []

    for raw in raw_showtimes:
        ref = parse_hall_ref(raw)
        showtime = Showtime.model_validate(raw)
        if not isinstance(ref, UnknownHallRef):
            showtime.cinema_hall_id = ref.hall_id

        cinema_id = resolve_cinema_id(ref, hall_index)
        if cinema_id is None or cinema_id not in by_id:
            logger.warning("Showtime %s (%s hall ref) has no known cinema", showtime.id, ref.kind)
            unmapped.append(showtime)
            continue
        grouped.setdefault(cinema_id, []).append(showtime)

    groups = [
        CinemaShowtimes(cinema=c, showtimes=sorted(grouped[c.id], key=_sort_key))
        for c in cinemas
        if c.id in grouped
    ]
    return ShowtimesByCinema(groups=groups, unmapped=sorted(unmapped, key=_sort_key))


class ShowtimeDirectory:
    """Showtime lookups that need both the showtime and the cinema endpoints."""

    def __init__(self, showtimes: ShowtimeClient, cinemas: CinemaClient):
        self.showtimes = showtimes
        self.cinemas = cinemas

    def showtimes_by_cinema(self, movie_id: int, show_date: Optional[date] = None) -> ShowtimesByCinema:
        if show_date is not None:
            raw = self.showtimes.get_raw_showtimes_by_movie_and_date(movie_id, show_date)
        else:
            raw = self.showtimes.get_raw_showtimes_by_movie(movie_id)
        if not raw:
            return ShowtimesByCinema(groups=[], unmapped=[])
        return group_showtimes_by_cinema(raw, self.cinemas.get_cinemas())

    def showtimes_for_cinema(self, movie_id: int, cinema_id: int) -> List[Showtime]:
        """Showtimes of a movie playing in one cinema's halls."""
        cinema = next((c for c in self.cinemas.get_cinemas() if c.id == cinema_id), None)
        if cinema is None:
            return []

        if cinema.halls is not None:
            hall_ids = {h.id for h in cinema.halls}
        else:
            hall_ids = {h.id for h in self.cinemas.get_cinema_halls(cinema_id)}

        result = []
        for raw in self.showtimes.get_raw_showtimes_by_movie(movie_id):
            ref = parse_hall_ref(raw)
            if isinstance(ref, UnknownHallRef) or ref.hall_id not in hall_ids:
                continue
            showtime = Showtime.model_validate(raw)
            showtime.cinema_hall_id = ref.hall_id
            result.append(showtime)
        return sorted(result, key=_sort_key)

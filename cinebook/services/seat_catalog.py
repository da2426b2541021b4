import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from pydantic import ValidationError

from cinebook.clients.showtimes import ShowtimeClient
from cinebook.core.exceptions import CineBookError, FetchFailure
from cinebook.schemas.seat import Seat, SeatWithStatus
from cinebook.schemas.showtime import Showtime, ShowtimeContext, ShowtimeContextOverrides
from cinebook.utils.display import format_show_date, format_show_time

logger = logging.getLogger(__name__)


@dataclass
class SeatCatalog:
    """Everything the seat screen needs, fetched in one go."""
    showtime_id: int
    context: ShowtimeContext
    seats: List[SeatWithStatus] = field(default_factory=list)

    @property
    def available_count(self) -> int:
        return sum(1 for s in self.seats if not s.is_booked)

    @property
    def booked_count(self) -> int:
        return sum(1 for s in self.seats if s.is_booked)

    def seat(self, seat_id: int) -> Optional[SeatWithStatus]:
        for s in self.seats:
            if s.id == seat_id:
                return s
        return None


def merge_seat_status(
    all_seats: Iterable[Seat],
    available_seats: Iterable[Seat],
    hall_id: Optional[int] = None,
) -> List[SeatWithStatus]:
    """
    Combine the hall's seat list with the still-available subset, by seat id.

    - in both lists: available
    - only in the hall list: booked
    - only in the available list, belonging to another hall, or without a row
      label: orphaned, dropped

    Hall order is kept. Every seat comes back unselected.
    """
    available_ids = {s.id for s in available_seats}
    merged: List[SeatWithStatus] = []
    seen = set()
    orphaned = 0

    for seat in all_seats:
        if seat.id in seen:
            continue
        seen.add(seat.id)
        if hall_id is not None and seat.cinema_hall_id is not None and seat.cinema_hall_id != hall_id:
            logger.warning(
                "Seat %s belongs to hall %s, not %s; dropped", seat.id, seat.cinema_hall_id, hall_id
            )
            orphaned += 1
            continue
        if not seat.seat_row:
            logger.warning("Seat %s has no row label; dropped", seat.id)
            orphaned += 1
            continue
        merged.append(
            SeatWithStatus(
                **seat.model_dump(),
                is_booked=seat.id not in available_ids,
                is_selected=False,
            )
        )

    for seat_id in available_ids - seen:
        logger.warning("Available seat %s is missing from the hall seat list; dropped", seat_id)
        orphaned += 1

    booked = sum(1 for s in merged if s.is_booked)
    logger.info(
        "Merged seat status: %d available, %d booked, %d orphaned",
        len(merged) - booked, booked, orphaned,
    )
    return merged


def build_context(
    showtime: Showtime,
    overrides: Optional[ShowtimeContextOverrides] = None,
) -> ShowtimeContext:
    """Header data for the seat screen; caller-provided values take precedence."""
    o = overrides or ShowtimeContextOverrides()
    hall = showtime.cinema_hall
    show_date = o.show_date or showtime.show_date
    show_time = o.show_time or showtime.start_time
    return ShowtimeContext(
        showtime_id=showtime.id,
        movie_title=o.movie_title or (showtime.movie.title if showtime.movie else ""),
        cinema_name=o.cinema_name or "",
        hall_name=o.hall_name or (hall.hall_name if hall and hall.hall_name else ""),
        show_date=show_date,
        show_time=show_time,
        default_price=o.price if o.price is not None else (showtime.price or 0),
        display_date=format_show_date(show_date),
        display_time=format_show_time(show_time),
    )


class SeatCatalogFetcher:
    """
    Loads showtime detail, hall seats and available seats as a single barrier.

    Either all three succeed and a ``SeatCatalog`` comes back, or ``FetchFailure`` is
    raised and the caller keeps whatever it had before. No automatic retries.
    """

    def __init__(self, showtimes: ShowtimeClient):
        self.showtimes = showtimes

    def load(
        self,
        showtime_id: int,
        overrides: Optional[ShowtimeContextOverrides] = None,
    ) -> SeatCatalog:
        logger.info("Loading showtime %s and seats", showtime_id)
        try:
            showtime = self.showtimes.get_showtime(showtime_id)
            all_seats = self.showtimes.get_all_seats(showtime_id)
            available = self.showtimes.get_available_seats(showtime_id)
        except CineBookError as exc:
            logger.error("Could not load seats for showtime %s: %s", showtime_id, exc.message)
            raise FetchFailure(exc.message or "Could not load the seat list", showtime_id) from exc
        except ValidationError as exc:
            logger.error("Malformed seat data for showtime %s: %s", showtime_id, exc)
            raise FetchFailure("Unexpected seat data from server", showtime_id) from exc

        hall_id = showtime.cinema_hall_id or (showtime.cinema_hall.id if showtime.cinema_hall else None)
        seats = merge_seat_status(all_seats, available, hall_id=hall_id)
        return SeatCatalog(
            showtime_id=showtime_id,
            context=build_context(showtime, overrides),
            seats=seats,
        )

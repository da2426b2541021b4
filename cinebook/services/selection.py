import logging
import threading
from typing import Dict, Iterable, List

from cinebook.core.exceptions import SeatAlreadyBooked, UnknownSeat
from cinebook.schemas.seat import SeatWithStatus

logger = logging.getLogger(__name__)


class SelectionTracker:
    """
    Client-local seat selection for one showtime.

    Booked seats can never be selected. Nothing here talks to the server: there is
    no seat hold, so a selected seat can still be lost to another user until the
    booking is submitted.
    """

    def __init__(self, seats: Iterable[SeatWithStatus]):
        self._seats: Dict[int, SeatWithStatus] = {s.id: s for s in seats}
        self._selected: List[int] = []
        self._lock = threading.Lock()
        # Flags coming in are only trusted when they respect the booked rule
        for seat in self._seats.values():
            if seat.is_selected and not seat.is_booked:
                self._selected.append(seat.id)
            else:
                seat.is_selected = False

    @property
    def seats(self) -> List[SeatWithStatus]:
        return list(self._seats.values())

    @property
    def selected_ids(self) -> List[int]:
        return list(self._selected)

    def selected_seats(self) -> List[SeatWithStatus]:
        return [self._seats[seat_id] for seat_id in self._selected]

    def is_selected(self, seat_id: int) -> bool:
        return seat_id in self._selected

    def get(self, seat_id: int) -> SeatWithStatus:
        seat = self._seats.get(seat_id)
        if seat is None:
            raise UnknownSeat(seat_id)
        return seat

    def toggle(self, seat_id: int) -> bool:
        """Flip the seat's selection and return whether it is now selected."""
        seat = self.get(seat_id)
        if seat.is_booked:
            logger.info("Rejected toggle on booked seat %s", seat.label or seat_id)
            raise SeatAlreadyBooked(seat_id, seat.label)

        # Check and flip under one lock
        with self._lock:
            if seat.is_selected:
                seat.is_selected = False
                self._selected.remove(seat_id)
            else:
                seat.is_selected = True
                self._selected.append(seat_id)
            return seat.is_selected

    def reset(self) -> None:
        with self._lock:
            for seat_id in self._selected:
                self._seats[seat_id].is_selected = False
            self._selected.clear()

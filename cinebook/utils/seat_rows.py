import logging
import re
from typing import Dict, Iterable, List, TypeVar

from cinebook.schemas.seat import Seat

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Seat)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def seat_number_key(seat_number: str) -> int:
    """Numeric value of a seat number ("10" -> 10, "7B" -> 7). Non-numeric sorts as 0."""
    match = _LEADING_INT.match(seat_number or "")
    return int(match.group(1)) if match else 0


def group_seats_by_row(seats: Iterable[S]) -> Dict[str, List[S]]:
    """
    Group seats by row label.

    Rows come back in ascending label order (A, B, C...), seats within a row by
    numeric seat number so that A2 sits before A10. Seats without a row are dropped.
    """
    grouped: Dict[str, List[S]] = {}
    for seat in seats:
        if not seat.seat_row:
            logger.warning("Seat %s has no row label; left out of the seat map", seat.id)
            continue
        grouped.setdefault(seat.seat_row, []).append(seat)

    return {
        row: sorted(grouped[row], key=lambda s: seat_number_key(s.seat_number))
        for row in sorted(grouped)
    }

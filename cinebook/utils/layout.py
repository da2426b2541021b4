import math
from typing import List, Mapping, Optional

from cinebook.core.config import settings
from cinebook.schemas.seat import Seat, SeatLayout, SeatType


def compute_layout(
    row_count: int,
    max_seats_in_row: int,
    viewport_width: float,
    viewport_height: float,
    widest_row_units: Optional[float] = None,
    *,
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
    gap: Optional[int] = None,
    label_width: Optional[int] = None,
    padding: Optional[int] = None,
    couple_factor: Optional[float] = None,
) -> SeatLayout:
    """
    Size seats so a typical hall fits the viewport, never below a usable touch target.

    ``widest_row_units`` is the width of the widest row in seat units (a couple seat
    counts as ``couple_factor`` units); it defaults to ``max_seats_in_row``. Row height
    only depends on seat height, so couple seats never change it.
    """
    min_size = settings.SEAT_MIN_SIZE if min_size is None else min_size
    max_size = settings.SEAT_MAX_SIZE if max_size is None else max_size
    gap = settings.SEAT_GAP if gap is None else gap
    label_width = settings.ROW_LABEL_WIDTH if label_width is None else label_width
    padding = settings.GRID_PADDING if padding is None else padding
    couple_factor = settings.COUPLE_WIDTH_FACTOR if couple_factor is None else couple_factor

    units = widest_row_units if widest_row_units is not None else max_seats_in_row

    if row_count <= 0 or units <= 0:
        seat_size = min_size
        return SeatLayout(
            seat_size=seat_size,
            row_height=seat_size + gap,
            couple_width=round(seat_size * couple_factor, 2),
            content_width=viewport_width,
            content_height=viewport_height,
        )

    usable_width = viewport_width - label_width - 2 * padding
    fit_width = usable_width / units - gap
    fit_height = viewport_height / row_count - gap
    seat_size = max(min_size, min(max_size, math.floor(min(fit_width, fit_height))))

    row_height = seat_size + gap
    grid_width = label_width + 2 * padding + units * (seat_size + gap)
    grid_height = row_count * row_height

    return SeatLayout(
        seat_size=seat_size,
        row_height=row_height,
        couple_width=round(seat_size * couple_factor, 2),
        content_width=max(grid_width, viewport_width),
        content_height=max(grid_height, viewport_height),
    )


def row_units(seats: List[Seat], couple_factor: Optional[float] = None) -> float:
    couple_factor = settings.COUPLE_WIDTH_FACTOR if couple_factor is None else couple_factor
    return sum(couple_factor if s.seat_type == SeatType.COUPLE else 1 for s in seats)


def layout_for_rows(
    rows: Mapping[str, List[Seat]],
    viewport_width: float,
    viewport_height: float,
) -> SeatLayout:
    """Layout for an already grouped seat map."""
    max_seats = max((len(seats) for seats in rows.values()), default=0)
    widest = max((row_units(seats) for seats in rows.values()), default=0)
    return compute_layout(len(rows), max_seats, viewport_width, viewport_height, widest_row_units=widest)

from typing import Iterable, List, Mapping, Optional, Tuple

from cinebook.core.config import settings
from cinebook.schemas.seat import PriceLine, PriceSource, Seat


def resolve_price(
    seat: Seat,
    showtime_default: Optional[int] = 0,
    type_prices: Optional[Mapping[str, int]] = None,
) -> Tuple[int, PriceSource]:
    """
    Unit price of a seat and the tier it came from.

    Tiers, first positive value wins:
      1. the seat's own base price (or the legacy ``price`` field)
      2. the default for its seat type
      3. the showtime's default price
    Falls through to 0 when all three are missing or zero.
    """
    type_prices = settings.seat_type_prices() if type_prices is None else type_prices

    own = seat.base_price if seat.base_price else seat.price
    if own and own > 0:
        return int(own), PriceSource.seat

    if seat.seat_type is not None:
        by_type = type_prices.get(seat.seat_type.value)
        if by_type and by_type > 0:
            return int(by_type), PriceSource.seat_type

    if showtime_default and showtime_default > 0:
        return int(showtime_default), PriceSource.showtime

    return 0, PriceSource.none


def resolve_unit_price(
    seat: Seat,
    showtime_default: Optional[int] = 0,
    type_prices: Optional[Mapping[str, int]] = None,
) -> int:
    return resolve_price(seat, showtime_default, type_prices)[0]


def price_breakdown(
    selection: Iterable[int],
    catalog: Iterable[Seat],
    showtime_default: Optional[int] = 0,
    type_prices: Optional[Mapping[str, int]] = None,
) -> List[PriceLine]:
    """One line per selected seat, in selection order. Unknown ids are skipped."""
    by_id = {s.id: s for s in catalog}
    lines = []
    for seat_id in selection:
        seat = by_id.get(seat_id)
        if seat is None:
            continue
        unit_price, source = resolve_price(seat, showtime_default, type_prices)
        lines.append(PriceLine(
            seat_id=seat.id,
            label=seat.label,
            seat_type=seat.seat_type,
            unit_price=unit_price,
            source=source,
        ))
    return lines


def total_price(
    selection: Iterable[int],
    catalog: Iterable[Seat],
    showtime_default: Optional[int] = 0,
    type_prices: Optional[Mapping[str, int]] = None,
) -> int:
    """Sum of the selected seats' unit prices; 0 for an empty selection."""
    return sum(
        line.unit_price
        for line in price_breakdown(selection, catalog, showtime_default, type_prices)
    )

import logging
from typing import List

from cinebook.clients.api import ApiClient
from cinebook.schemas.booking import Booking, BookingCreate

logger = logging.getLogger(__name__)

# Booking creation answers with either code
CREATED_CODES = frozenset({200, 201})


class BookingClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def create_booking(self, data: BookingCreate) -> Booking:
        payload = data.model_dump(by_alias=True, exclude_none=True)
        logger.info(
            "Creating booking: showtime %s, %d seat(s)", data.showtime_id, len(data.seat_ids)
        )
        result = self.api.post("/bookings", json=payload, success_codes=CREATED_CODES)
        return Booking.model_validate(result)

    def get_user_bookings(self) -> List[Booking]:
        return [Booking.model_validate(b) for b in self.api.get("/bookings") or []]

    def get_booking(self, booking_id: int) -> Booking:
        return Booking.model_validate(self.api.get(f"/bookings/{booking_id}"))

    def cancel_booking(self, booking_id: int) -> None:
        self.api.delete(f"/bookings/{booking_id}")

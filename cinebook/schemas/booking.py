from typing import Annotated, Optional, List
from pydantic import BaseModel, Field

from cinebook.schemas.seat import Seat
from cinebook.schemas.showtime import ShowtimeContext


# Booking create (POST /bookings on the remote API)
class BookingCreate(BaseModel):
    showtime_id: int = Field(alias="showtimeId")
    seat_ids: Annotated[List[int], Field(min_length=1, alias="seatIds")]
    promotion_code: Optional[str] = Field(None, alias="promotionCode")
    payment_method: str = Field("CASH", alias="paymentMethod")

    class Config:
        populate_by_name = True


class BookingSeat(BaseModel):
    id: Optional[int] = None
    booking_id: Optional[int] = Field(None, alias="bookingId")
    seat_id: Optional[int] = Field(None, alias="seatId")
    seat: Optional[Seat] = None

    class Config:
        populate_by_name = True


# Booking as returned by the remote API
class Booking(BaseModel):
    id: int
    user_id: Optional[int] = Field(None, alias="userId")
    showtime_id: Optional[int] = Field(None, alias="showtimeId")
    total_amount: Optional[int] = Field(None, alias="totalAmount")
    booking_date: Optional[str] = Field(None, alias="bookingDate")
    status: Optional[str] = None
    seats: List[BookingSeat] = []

    class Config:
        populate_by_name = True


# What the seat screen hands to the booking/payment screen
class BookingDraft(BaseModel):
    showtime_id: int
    context: ShowtimeContext
    seat_ids: List[int]
    seat_labels: str
    total_amount: int


class BookingSubmit(BaseModel):
    promotion_code: Optional[str] = None
    payment_method: str = "CASH"

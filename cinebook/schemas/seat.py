from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from cinebook.schemas.common import whole_currency
from cinebook.schemas.showtime import ShowtimeContext


class SeatType(str, Enum):
    NORMAL = "NORMAL"
    VIP = "VIP"
    COUPLE = "COUPLE"


# Seat as returned by GET /showtimes/{id}/seats and /available-seats
class Seat(BaseModel):
    id: int
    cinema_hall_id: Optional[int] = Field(None, alias="cinemaHallId")
    seat_row: Optional[str] = Field(None, alias="seatRow")
    seat_number: str = Field("", alias="seatNumber")
    seat_type: Optional[SeatType] = Field(None, alias="seatType")
    base_price: Optional[int] = Field(None, alias="basePrice")
    # Older payloads carry the price here instead of basePrice
    price: Optional[int] = None

    class Config:
        populate_by_name = True

    @field_validator("seat_number", mode="before")
    @classmethod
    def stringify_seat_number(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator("seat_row", mode="before")
    @classmethod
    def strip_row(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("seat_type", mode="before")
    @classmethod
    def unknown_type_to_none(cls, v):
        if isinstance(v, str) and v.upper() in SeatType.__members__:
            return v.upper()
        return None

    @field_validator("base_price", "price", mode="before")
    @classmethod
    def coerce_price(cls, v):
        return whole_currency(v)

    @property
    def label(self) -> str:
        return f"{self.seat_row or ''}{self.seat_number}"


class SeatWithStatus(Seat):
    is_booked: bool = Field(False, alias="isBooked")
    is_selected: bool = Field(False, alias="isSelected")


# --- Seat map (local service views) ---

class SeatDisplayState(str, Enum):
    booked = "booked"
    selected = "selected"
    vip = "vip"
    couple = "couple"
    normal = "normal"


class SeatView(BaseModel):
    id: int
    label: str
    row: str
    number: str
    seat_type: Optional[SeatType] = None
    is_booked: bool
    is_selected: bool
    display_state: SeatDisplayState
    width: float
    unit_price: int


class SeatRowView(BaseModel):
    label: str
    seats: List[SeatView]


class SeatLayout(BaseModel):
    seat_size: int
    row_height: int
    couple_width: float
    content_width: float
    content_height: float


class ZoomView(BaseModel):
    scale: float
    percent: int


class SelectionView(BaseModel):
    selected_ids: List[int]
    selected_labels: List[str]
    count: int
    total: int
    total_display: str


class SeatMapView(BaseModel):
    session_id: str
    showtime_id: int
    context: ShowtimeContext
    rows: List[SeatRowView]
    layout: SeatLayout
    zoom: ZoomView
    selection: SelectionView
    available_count: int
    booked_count: int


# --- Pricing ---

class PriceSource(str, Enum):
    seat = "seat"
    seat_type = "seat_type"
    showtime = "showtime"
    none = "none"


class PriceLine(BaseModel):
    seat_id: int
    label: str
    seat_type: Optional[SeatType] = None
    unit_price: int
    source: PriceSource


class PriceView(BaseModel):
    total: int
    lines: List[PriceLine]

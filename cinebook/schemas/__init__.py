from cinebook.schemas.common import ApiEnvelope, ErrorResponse, FetchFailureResponse
from cinebook.schemas.showtime import (
    Movie, Cinema, CinemaHall, Showtime,
    ShowtimeContext, ShowtimeContextOverrides,
    CinemaShowtimes, ShowtimesByCinema,
)
from cinebook.schemas.seat import (
    SeatType, Seat, SeatWithStatus,
    SeatDisplayState, SeatView, SeatRowView, SeatLayout, SeatMapView,
    ZoomView, SelectionView, PriceSource, PriceLine, PriceView,
)
from cinebook.schemas.booking import (
    BookingCreate, BookingSeat, Booking, BookingDraft, BookingSubmit,
)
from cinebook.schemas.session import (
    SessionCreate, SessionSummary, ZoomAction, ZoomRequest,
)

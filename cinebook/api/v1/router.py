from fastapi import APIRouter

# Seat selection sessions
from cinebook.api.v1.seat_selection import router as seat_selection_router

# Showtime discovery
from cinebook.api.v1.showtimes import router as showtimes_router

api_router = APIRouter()

api_router.include_router(seat_selection_router)
api_router.include_router(showtimes_router)

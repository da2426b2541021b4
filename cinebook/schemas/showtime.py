from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from cinebook.schemas.common import whole_currency


class Movie(BaseModel):
    id: int
    title: str = ""
    duration: Optional[int] = None
    genre: Optional[str] = None
    age_rating: Optional[str] = Field(None, alias="ageRating")
    poster_url: Optional[str] = Field(None, alias="posterUrl")

    class Config:
        populate_by_name = True


class CinemaHall(BaseModel):
    id: int
    cinema_id: Optional[int] = Field(None, alias="cinemaId")
    hall_name: Optional[str] = Field(None, alias="hallName")
    total_seats: Optional[int] = Field(None, alias="totalSeats")

    class Config:
        populate_by_name = True


class Cinema(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    # Only some payloads embed the halls
    halls: Optional[List[CinemaHall]] = None

    class Config:
        populate_by_name = True


class Showtime(BaseModel):
    id: int
    movie_id: Optional[int] = Field(None, alias="movieId")
    cinema_hall_id: Optional[int] = Field(None, alias="cinemaHallId")
    show_date: Optional[str] = Field(None, alias="showDate")
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")
    price: Optional[int] = None
    movie: Optional[Movie] = None
    cinema_hall: Optional[CinemaHall] = Field(None, alias="cinemaHall")

    class Config:
        populate_by_name = True

    @field_validator("cinema_hall", mode="before")
    @classmethod
    def drop_partial_hall(cls, v):
        # Some payloads send a bare id or a back-reference stub here
        if isinstance(v, dict) and v.get("id") is not None:
            return v
        if isinstance(v, CinemaHall):
            return v
        return None

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v):
        return whole_currency(v)


# --- Read-only reference data shown above the seat map ---

class ShowtimeContextOverrides(BaseModel):
    """Values the caller already knows (navigation params); they win over fetched ones."""
    movie_title: Optional[str] = None
    cinema_name: Optional[str] = None
    hall_name: Optional[str] = None
    show_date: Optional[str] = None
    show_time: Optional[str] = None
    price: Optional[int] = None


class ShowtimeContext(BaseModel):
    showtime_id: int
    movie_title: str = ""
    cinema_name: str = ""
    hall_name: str = ""
    show_date: Optional[str] = None
    show_time: Optional[str] = None
    default_price: int = 0
    # Header strings, e.g. "07/03/2025" and "19:30"
    display_date: str = "--/--"
    display_time: str = "--:--"


# --- Showtimes grouped by cinema (cinema / showtime picker) ---

class CinemaShowtimes(BaseModel):
    cinema: Cinema
    showtimes: List[Showtime]


class ShowtimesByCinema(BaseModel):
    groups: List[CinemaShowtimes]
    # Showtimes whose hall could not be tied to a cinema
    unmapped: List[Showtime] = []

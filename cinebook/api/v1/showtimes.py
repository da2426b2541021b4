from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from cinebook.api.deps import get_showtime_directory
from cinebook.schemas.showtime import ShowtimesByCinema
from cinebook.services.hall_mapping import ShowtimeDirectory

router = APIRouter(prefix="/showtimes", tags=["Showtimes"])


@router.get("/movie/{movie_id}/by-cinema", response_model=ShowtimesByCinema)
def showtimes_by_cinema(
    movie_id: int,
    date: Optional[date] = Query(None, description="Filter by show date (YYYY-MM-DD)"),
    directory: ShowtimeDirectory = Depends(get_showtime_directory),
):
    """
    Showtimes of a movie grouped by cinema.
    Showtimes whose hall cannot be tied to a cinema are listed under ``unmapped``.
    """
    return directory.showtimes_by_cinema(movie_id, date)

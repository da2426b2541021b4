from typing import Optional

import requests
from fastapi import Depends, Header

from cinebook.clients.api import ApiClient
from cinebook.clients.bookings import BookingClient
from cinebook.clients.cinemas import CinemaClient
from cinebook.clients.showtimes import ShowtimeClient
from cinebook.core.context import ClientContext, Language, Theme
from cinebook.services.hall_mapping import ShowtimeDirectory
from cinebook.services.seat_catalog import SeatCatalogFetcher
from cinebook.services.seat_selection import SessionStore

# Shared for the process lifetime
_http_session = requests.Session()
_session_store = SessionStore()


def get_http_session() -> requests.Session:
    return _http_session


def get_session_store() -> SessionStore:
    return _session_store


def get_client_context(
    authorization: Optional[str] = Header(None),
    x_theme: Optional[str] = Header(None),
    accept_language: Optional[str] = Header(None),
) -> ClientContext:
    """Build the caller's context from request headers."""
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip() or None

    theme = Theme.dark if (x_theme or "").strip().lower() == "dark" else Theme.light
    language = Language.en if (accept_language or "").strip().lower().startswith("en") else Language.vi
    return ClientContext(theme=theme, language=language, auth_token=token)


def get_api_client(
    http: requests.Session = Depends(get_http_session),
    context: ClientContext = Depends(get_client_context),
) -> ApiClient:
    return ApiClient(http, context=context)


def get_showtime_client(api: ApiClient = Depends(get_api_client)) -> ShowtimeClient:
    return ShowtimeClient(api)


def get_cinema_client(api: ApiClient = Depends(get_api_client)) -> CinemaClient:
    return CinemaClient(api)


def get_booking_client(api: ApiClient = Depends(get_api_client)) -> BookingClient:
    return BookingClient(api)


def get_catalog_fetcher(showtimes: ShowtimeClient = Depends(get_showtime_client)) -> SeatCatalogFetcher:
    return SeatCatalogFetcher(showtimes)


def get_showtime_directory(
    showtimes: ShowtimeClient = Depends(get_showtime_client),
    cinemas: CinemaClient = Depends(get_cinema_client),
) -> ShowtimeDirectory:
    return ShowtimeDirectory(showtimes, cinemas)

from typing import Any, List, Optional


class CineBookError(Exception):
    """Base error. Carries the HTTP status the local service answers with."""

    status_code = 400
    error = "cinebook_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


# ---------------------------------------------------------------------------
# Remote API
# ---------------------------------------------------------------------------


class RemoteApiError(CineBookError):
    """The remote API answered, but with an HTTP error or a non-success envelope code."""

    status_code = 502
    error = "remote_api_error"

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        # status_code here is the remote one, not the one we answer with
        self.remote_status = status_code
        self.payload = payload


class RemoteUnavailableError(CineBookError):
    """Connection refused, DNS failure or timeout talking to the remote API."""

    status_code = 503
    error = "remote_unavailable"


# ---------------------------------------------------------------------------
# Seat selection flow
# ---------------------------------------------------------------------------


class FetchFailure(CineBookError):
    status_code = 503
    error = "fetch_failure"
    retryable = True

    def __init__(self, message: str, showtime_id: Optional[int] = None):
        super().__init__(message)
        self.showtime_id = showtime_id


class SeatAlreadyBooked(CineBookError):
    status_code = 409
    error = "seat_already_booked"

    def __init__(self, seat_id: int, label: str = ""):
        super().__init__(f"Seat {label or seat_id} is already booked")
        self.seat_id = seat_id


class UnknownSeat(CineBookError):
    status_code = 404
    error = "unknown_seat"

    def __init__(self, seat_id: int):
        super().__init__(f"Seat {seat_id} is not part of this showtime")
        self.seat_id = seat_id


class EmptySelectionSubmit(CineBookError):
    status_code = 422
    error = "empty_selection"

    def __init__(self, message: str = "Please select at least one seat"):
        super().__init__(message)


class SeatsUnavailable(CineBookError):
    """Seats were taken by someone else between selection and booking submission."""

    status_code = 409
    error = "seats_unavailable"

    def __init__(self, message: str, seat_ids: Optional[List[int]] = None):
        super().__init__(message)
        self.seat_ids = seat_ids or []


class SessionNotFound(CineBookError):
    status_code = 404
    error = "session_not_found"

    def __init__(self, session_id: str):
        super().__init__(f"Seat selection session {session_id} not found or expired")
        self.session_id = session_id


class SessionNotLoaded(CineBookError):
    status_code = 409
    error = "session_not_loaded"

    def __init__(self, message: str = "Seat map has not been loaded yet, retry the fetch"):
        super().__init__(message)

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from cinebook.api.deps import (
    get_booking_client,
    get_catalog_fetcher,
    get_session_store,
)
from cinebook.clients.bookings import BookingClient
from cinebook.schemas.booking import Booking, BookingDraft, BookingSubmit
from cinebook.schemas.common import ErrorResponse, FetchFailureResponse
from cinebook.schemas.seat import PriceView, SeatMapView, SelectionView, ZoomView
from cinebook.schemas.session import SessionCreate, SessionSummary, ZoomAction, ZoomRequest
from cinebook.services.seat_catalog import SeatCatalogFetcher
from cinebook.services.seat_selection import SeatSelectionSession, SessionStore

router = APIRouter(prefix="/seat-selection", tags=["Seat Selection"])

# Typical phone viewport, used when the caller does not send one
DEFAULT_VIEWPORT_WIDTH = 390
DEFAULT_VIEWPORT_HEIGHT = 420


def _summary(session: SeatSelectionSession) -> SessionSummary:
    catalog = session.catalog
    return SessionSummary(
        session_id=session.session_id,
        showtime_id=session.showtime_id,
        context=catalog.context,
        seat_count=len(catalog.seats),
        available_count=catalog.available_count,
        booked_count=catalog.booked_count,
    )


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------


@router.post(
    "/sessions",
    response_model=SessionSummary,
    status_code=status.HTTP_201_CREATED,
    responses={503: {"model": FetchFailureResponse}},
)
def open_session(
    body: SessionCreate,
    store: SessionStore = Depends(get_session_store),
    fetcher: SeatCatalogFetcher = Depends(get_catalog_fetcher),
):
    """
    Open the seat screen for a showtime.

    Showtime detail, hall seats and available seats are fetched together; if any of
    them fails the call answers 503 with ``retryable`` and no session is created.
    """
    session = store.open(body.showtime_id, fetcher, body.overrides)
    return _summary(session)


@router.post(
    "/sessions/{session_id}/reload",
    response_model=SessionSummary,
    responses={503: {"model": FetchFailureResponse}},
)
def reload_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    fetcher: SeatCatalogFetcher = Depends(get_catalog_fetcher),
):
    """Retry the seat fetch. Selection is cleared on success, kept on failure."""
    session = store.get(session_id)
    session.fetcher = fetcher
    session.reload()
    return _summary(session)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    store.discard(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Seat map & selection
# ---------------------------------------------------------------------------


@router.get("/sessions/{session_id}/seat-map", response_model=SeatMapView)
def get_seat_map(
    session_id: str,
    width: float = Query(DEFAULT_VIEWPORT_WIDTH, gt=0, description="Viewport width"),
    height: float = Query(DEFAULT_VIEWPORT_HEIGHT, gt=0, description="Viewport height"),
    store: SessionStore = Depends(get_session_store),
):
    """Seats grouped by row with status, sizes, zoom and current selection."""
    return store.get(session_id).seat_map(width, height)


@router.post(
    "/sessions/{session_id}/seats/{seat_id}/toggle",
    response_model=SelectionView,
    responses={409: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def toggle_seat(session_id: str, seat_id: int, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).toggle(seat_id)


@router.get("/sessions/{session_id}/selection", response_model=SelectionView)
def get_selection(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).selection_view()


@router.delete("/sessions/{session_id}/selection", response_model=SelectionView)
def clear_selection(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).reset()


@router.get("/sessions/{session_id}/price", response_model=PriceView)
def get_price(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Total for the current selection with the price tier used for each seat."""
    return store.get(session_id).breakdown()


# ---------------------------------------------------------------------------
# Zoom
# ---------------------------------------------------------------------------


@router.post("/sessions/{session_id}/zoom", response_model=ZoomView)
def zoom(session_id: str, body: ZoomRequest, store: SessionStore = Depends(get_session_store)):
    if body.action == ZoomAction.pinch and body.factor is None:
        raise HTTPException(status_code=422, detail="factor is required for pinch")
    return store.get(session_id).apply_zoom(body.action, body.factor)


# ---------------------------------------------------------------------------
# Booking hand-off
# ---------------------------------------------------------------------------


@router.post(
    "/sessions/{session_id}/confirm",
    response_model=BookingDraft,
    responses={422: {"model": ErrorResponse}},
)
def confirm_selection(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Draft for the booking screen; refuses an empty selection."""
    return store.get(session_id).confirm()


@router.post(
    "/sessions/{session_id}/book",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def book_selection(
    session_id: str,
    body: BookingSubmit,
    store: SessionStore = Depends(get_session_store),
    bookings: BookingClient = Depends(get_booking_client),
):
    """
    Submit the selection to the remote booking API.

    Seats are not held during selection, so a 409 here means someone else booked
    one of them first; reload the seat map and pick again.
    """
    session = store.get(session_id)
    return session.submit(bookings, body.promotion_code, body.payment_method)

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Mapping, Optional

from cinebook.clients.bookings import BookingClient
from cinebook.core.config import settings
from cinebook.core.exceptions import (
    EmptySelectionSubmit,
    RemoteApiError,
    SeatsUnavailable,
    SessionNotFound,
    SessionNotLoaded,
)
from cinebook.schemas.booking import Booking, BookingCreate, BookingDraft
from cinebook.schemas.seat import (
    PriceView,
    SeatDisplayState,
    SeatMapView,
    SeatRowView,
    SeatType,
    SeatView,
    SeatWithStatus,
    SelectionView,
    ZoomView,
)
from cinebook.schemas.session import ZoomAction
from cinebook.schemas.showtime import ShowtimeContextOverrides
from cinebook.services.seat_catalog import SeatCatalog, SeatCatalogFetcher
from cinebook.services.selection import SelectionTracker
from cinebook.utils.display import format_vnd
from cinebook.utils.layout import layout_for_rows
from cinebook.utils.pricing import price_breakdown, resolve_unit_price
from cinebook.utils.seat_rows import group_seats_by_row
from cinebook.utils.zoom import ZoomController

logger = logging.getLogger(__name__)


def display_state(seat: SeatWithStatus) -> SeatDisplayState:
    if seat.is_booked:
        return SeatDisplayState.booked
    if seat.is_selected:
        return SeatDisplayState.selected
    if seat.seat_type == SeatType.VIP:
        return SeatDisplayState.vip
    if seat.seat_type == SeatType.COUPLE:
        return SeatDisplayState.couple
    return SeatDisplayState.normal


class SeatSelectionSession:
    """
    State behind one seat selection screen: catalog, selection and zoom.

    The catalog is only replaced by a complete, successful fetch. Selection and
    pricing are synchronous and local. Requests for one session may arrive on
    different worker threads, so every read and write of its state holds
    ``self._lock``.
    """

    def __init__(
        self,
        showtime_id: int,
        fetcher: SeatCatalogFetcher,
        overrides: Optional[ShowtimeContextOverrides] = None,
        *,
        type_prices: Optional[Mapping[str, int]] = None,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.showtime_id = showtime_id
        self.fetcher = fetcher
        self.overrides = overrides
        self.type_prices = type_prices
        self.catalog: Optional[SeatCatalog] = None
        self.tracker: Optional[SelectionTracker] = None
        self.zoom = ZoomController()
        self.last_active = datetime.now(timezone.utc)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self.catalog is not None

    def load(self) -> SeatCatalog:
        """Run the fetch barrier. On failure the previous state is left untouched."""
        catalog = self.fetcher.load(self.showtime_id, self.overrides)
        with self._lock:
            self.catalog = catalog
            self.tracker = SelectionTracker(catalog.seats)
            self.touch()
        return catalog

    def reload(self) -> SeatCatalog:
        """Fetch fresh seat status; a successful reload clears the selection."""
        return self.load()

    def touch(self) -> None:
        self.last_active = datetime.now(timezone.utc)

    def _require_loaded(self) -> SelectionTracker:
        if self.tracker is None or self.catalog is None:
            raise SessionNotLoaded()
        return self.tracker

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle(self, seat_id: int) -> SelectionView:
        with self._lock:
            self._require_loaded().toggle(seat_id)
            return self.selection_view()

    def reset(self) -> SelectionView:
        with self._lock:
            self._require_loaded().reset()
            return self.selection_view()

    def selection_view(self) -> SelectionView:
        with self._lock:
            tracker = self._require_loaded()
            total = self.total()
            return SelectionView(
                selected_ids=tracker.selected_ids,
                selected_labels=[s.label for s in tracker.selected_seats()],
                count=len(tracker.selected_ids),
                total=total,
                total_display=format_vnd(total),
            )

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def breakdown(self) -> PriceView:
        with self._lock:
            tracker = self._require_loaded()
            lines = price_breakdown(
                tracker.selected_ids,
                tracker.seats,
                self.catalog.context.default_price,
                self.type_prices,
            )
        return PriceView(total=sum(line.unit_price for line in lines), lines=lines)

    def total(self) -> int:
        return self.breakdown().total

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------

    def apply_zoom(self, action: ZoomAction, factor: Optional[float] = None) -> ZoomView:
        with self._lock:
            controller = self.zoom
            if action == ZoomAction.zoom_in:
                controller.zoom_in()
            elif action == ZoomAction.zoom_out:
                controller.zoom_out()
            elif action == ZoomAction.reset:
                controller.reset()
            elif action == ZoomAction.pinch_start:
                controller.begin_pinch()
            elif action == ZoomAction.pinch:
                controller.pinch(factor)
            elif action == ZoomAction.pinch_end:
                controller.end_pinch()
            return ZoomView(scale=controller.scale, percent=controller.percent)

    # ------------------------------------------------------------------
    # Seat map
    # ------------------------------------------------------------------

    def seat_map(self, viewport_width: float, viewport_height: float) -> SeatMapView:
        with self._lock:
            tracker = self._require_loaded()
            rows = group_seats_by_row(tracker.seats)
            layout = layout_for_rows(rows, viewport_width, viewport_height)
            default_price = self.catalog.context.default_price

            row_views = []
            for label, seats in rows.items():
                row_views.append(SeatRowView(
                    label=label,
                    seats=[
                        SeatView(
                            id=s.id,
                            label=s.label,
                            row=label,
                            number=s.seat_number,
                            seat_type=s.seat_type,
                            is_booked=s.is_booked,
                            is_selected=s.is_selected,
                            display_state=display_state(s),
                            width=layout.couple_width if s.seat_type == SeatType.COUPLE else layout.seat_size,
                            unit_price=resolve_unit_price(s, default_price, self.type_prices),
                        )
                        for s in seats
                    ],
                ))

            return SeatMapView(
                session_id=self.session_id,
                showtime_id=self.showtime_id,
                context=self.catalog.context,
                rows=row_views,
                layout=layout,
                zoom=ZoomView(scale=self.zoom.scale, percent=self.zoom.percent),
                selection=self.selection_view(),
                available_count=self.catalog.available_count,
                booked_count=self.catalog.booked_count,
            )

    # ------------------------------------------------------------------
    # Booking hand-off
    # ------------------------------------------------------------------

    def confirm(self) -> BookingDraft:
        with self._lock:
            tracker = self._require_loaded()
            if not tracker.selected_ids:
                raise EmptySelectionSubmit()

            selected = tracker.selected_seats()
            return BookingDraft(
                showtime_id=self.showtime_id,
                context=self.catalog.context,
                seat_ids=[s.id for s in selected],
                seat_labels=", ".join(s.label for s in selected),
                total_amount=self.total(),
            )

    def submit(
        self,
        bookings: BookingClient,
        promotion_code: Optional[str] = None,
        payment_method: str = "CASH",
    ) -> Booking:
        """
        Send the selection to the remote booking endpoint.

        Seats are not held while selecting; a seat taken in the meantime comes
        back from the server as a conflict and surfaces as ``SeatsUnavailable``.
        """
        draft = self.confirm()
        request = BookingCreate(
            showtime_id=draft.showtime_id,
            seat_ids=draft.seat_ids,
            promotion_code=promotion_code,
            payment_method=payment_method,
        )
        try:
            return bookings.create_booking(request)
        except RemoteApiError as exc:
            if exc.remote_status == 409:
                raise SeatsUnavailable(
                    exc.message or "Some of the selected seats were just booked by someone else",
                    seat_ids=draft.seat_ids,
                ) from exc
            raise


class SessionStore:
    """In-memory registry of open seat selection sessions."""

    def __init__(self, ttl_minutes: Optional[int] = None):
        self.ttl = timedelta(minutes=settings.SESSION_TTL_MINUTES if ttl_minutes is None else ttl_minutes)
        self._sessions: Dict[str, SeatSelectionSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def open(
        self,
        showtime_id: int,
        fetcher: SeatCatalogFetcher,
        overrides: Optional[ShowtimeContextOverrides] = None,
    ) -> SeatSelectionSession:
        """Create and load a session. Nothing is stored if the fetch fails."""
        session = SeatSelectionSession(showtime_id, fetcher, overrides)
        session.load()
        with self._lock:
            self._purge_expired_locked()
            self._sessions[session.session_id] = session
        logger.info("Opened seat selection session %s for showtime %s", session.session_id, showtime_id)
        return session

    def get(self, session_id: str) -> SeatSelectionSession:
        with self._lock:
            self._purge_expired_locked()
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        session.touch()
        return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFound(session_id)
        logger.info("Closed seat selection session %s", session_id)

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge_expired_locked()

    def _purge_expired_locked(self) -> int:
        cutoff = datetime.now(timezone.utc) - self.ttl
        expired = [sid for sid, s in self._sessions.items() if s.last_active < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Expired %d idle seat selection session(s).", len(expired))
        return len(expired)

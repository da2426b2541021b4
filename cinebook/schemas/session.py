from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from cinebook.schemas.showtime import ShowtimeContext, ShowtimeContextOverrides


class SessionCreate(BaseModel):
    showtime_id: int
    overrides: Optional[ShowtimeContextOverrides] = None


class SessionSummary(BaseModel):
    session_id: str
    showtime_id: int
    context: ShowtimeContext
    seat_count: int
    available_count: int
    booked_count: int


class ZoomAction(str, Enum):
    zoom_in = "in"
    zoom_out = "out"
    reset = "reset"
    pinch_start = "pinch_start"
    pinch = "pinch"
    pinch_end = "pinch_end"


class ZoomRequest(BaseModel):
    action: ZoomAction
    factor: Optional[float] = Field(None, gt=0)

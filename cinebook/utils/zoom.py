from typing import Optional

from cinebook.core.config import settings

# Release snapping: zoomed-out maps spring back to 100%, deep zoom settles at 150%
SNAP_FLOOR = 1.0
SNAP_CEILING = 1.5


class ZoomController:
    """
    Scale factor for the seat map, driven by pinch gestures and +/- buttons.

    Purely visual: holds nothing but the scale.
    """

    def __init__(
        self,
        scale: float = 1.0,
        *,
        min_scale: Optional[float] = None,
        max_scale: Optional[float] = None,
        step: Optional[float] = None,
    ):
        self.min_scale = settings.ZOOM_MIN if min_scale is None else min_scale
        self.max_scale = settings.ZOOM_MAX if max_scale is None else max_scale
        self.step = settings.ZOOM_STEP if step is None else step
        self.scale = self._clamp(scale)
        self._pinch_origin: Optional[float] = None

    def _clamp(self, value: float) -> float:
        return round(max(self.min_scale, min(self.max_scale, value)), 4)

    @property
    def percent(self) -> int:
        return round(self.scale * 100)

    @property
    def pinching(self) -> bool:
        return self._pinch_origin is not None

    # --- pinch ---

    def begin_pinch(self) -> None:
        self._pinch_origin = self.scale

    def pinch(self, factor: float) -> float:
        """Apply the gesture's cumulative factor relative to where the pinch started."""
        if self._pinch_origin is None:
            self.begin_pinch()
        self.scale = self._clamp(self._pinch_origin * factor)
        return self.scale

    def end_pinch(self) -> float:
        self._pinch_origin = None
        if self.scale < SNAP_FLOOR:
            self.scale = SNAP_FLOOR
        elif self.scale > SNAP_CEILING:
            self.scale = SNAP_CEILING
        return self.scale

    # --- buttons ---

    def zoom_in(self) -> float:
        self.scale = self._clamp(self.scale + self.step)
        return self.scale

    def zoom_out(self) -> float:
        self.scale = self._clamp(self.scale - self.step)
        return self.scale

    def reset(self) -> float:
        self._pinch_origin = None
        self.scale = 1.0
        return self.scale

"""Geometry of the weekly editor grid: pixels to quantised wall-clock minutes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..core.constants import (
    GRID_END_MINUTES,
    GRID_START_MINUTES,
    HOUR_HEIGHT_PX,
    MINUTES_PER_HOUR,
    SNAP_MINUTES,
)
from .time_interval import TimeInterval, TimeOfDay, round_half_up, snap

if TYPE_CHECKING:
    from ..core.config import Settings


@dataclass(frozen=True)
class GridConfig:
    """
    Editable grid range and pixel scale.

    Pixel offsets are measured from the top of a day column; conversion is
    linear at `hour_height_px` pixels per 60 minutes.
    """

    start_minutes: TimeOfDay = GRID_START_MINUTES
    end_minutes: TimeOfDay = GRID_END_MINUTES
    quantum_minutes: int = SNAP_MINUTES
    hour_height_px: float = HOUR_HEIGHT_PX

    def __post_init__(self) -> None:
        if not 0 <= self.start_minutes < self.end_minutes:
            raise ValueError("grid start must be before grid end")
        if self.quantum_minutes <= 0 or self.hour_height_px <= 0:
            raise ValueError("grid quantum and hour height must be positive")

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None) -> "GridConfig":
        if settings is None:
            from ..core.config import settings as app_settings

            settings = app_settings
        return cls(**settings.grid_kwargs())

    @property
    def total_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def height_px(self) -> float:
        return self.total_minutes / MINUTES_PER_HOUR * self.hour_height_px

    def snap(self, minutes: float) -> TimeOfDay:
        return snap(
            minutes,
            self.quantum_minutes,
            grid_start=self.start_minutes,
            grid_end=self.end_minutes,
        )

    def pixel_to_minutes(self, y_px: float) -> TimeOfDay:
        """Column-relative pixel offset to a snapped, clamped time of day."""
        raw = self.start_minutes + (y_px / self.hour_height_px) * MINUTES_PER_HOUR
        return self.snap(raw)

    def minutes_to_pixel(self, minutes: TimeOfDay) -> float:
        return (minutes - self.start_minutes) / MINUTES_PER_HOUR * self.hour_height_px

    def snap_delta(self, delta_px: float) -> int:
        """Pixel displacement to a whole number of grid quanta, in minutes (unclamped)."""
        raw = (delta_px / self.hour_height_px) * MINUTES_PER_HOUR
        return round_half_up(raw / self.quantum_minutes) * self.quantum_minutes

    def clamp_shift(self, interval: TimeInterval) -> TimeInterval:
        """Shift an interval as a unit so it sits inside the grid; duration is kept."""
        start, end = interval.start, interval.end
        if start < self.start_minutes:
            diff = self.start_minutes - start
            start += diff
            end += diff
        if end > self.end_minutes:
            diff = end - self.end_minutes
            start -= diff
            end -= diff
        return TimeInterval(start, end)

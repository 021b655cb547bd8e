"""Tests for editor grid geometry."""

import pytest

from app.core.config import Settings
from app.domain.grid import GridConfig
from app.domain.time_interval import TimeInterval


@pytest.fixture
def grid() -> GridConfig:
    return GridConfig()


@pytest.mark.unit
class TestGridConfig:
    def test_defaults(self, grid: GridConfig) -> None:
        assert (grid.start_minutes, grid.end_minutes) == (360, 1320)
        assert grid.quantum_minutes == 15
        assert grid.total_minutes == 960
        assert grid.height_px == 768

    @pytest.mark.parametrize(
        "y_px, minutes",
        [
            (0, 360),
            (144, 540),  # three hours down at 48px per hour
            (150, 555),  # 547.5 minutes rounds half up
            (149, 540),
            (-40, 360),
            (5000, 1320),
        ],
    )
    def test_pixel_to_minutes(self, grid: GridConfig, y_px: float, minutes: int) -> None:
        assert grid.pixel_to_minutes(y_px) == minutes

    def test_minutes_to_pixel(self, grid: GridConfig) -> None:
        assert grid.minutes_to_pixel(540) == 144
        assert grid.minutes_to_pixel(360) == 0

    @pytest.mark.parametrize(
        "delta_px, minutes",
        [(48, 60), (6, 15), (5, 0), (-12, -15), (-48, -60)],
    )
    def test_snap_delta(self, grid: GridConfig, delta_px: float, minutes: int) -> None:
        assert grid.snap_delta(delta_px) == minutes

    def test_clamp_shift_keeps_duration(self, grid: GridConfig) -> None:
        assert grid.clamp_shift(TimeInterval(330, 420)) == TimeInterval(360, 450)
        assert grid.clamp_shift(TimeInterval(1290, 1380)) == TimeInterval(1230, 1320)
        assert grid.clamp_shift(TimeInterval(540, 600)) == TimeInterval(540, 600)

    def test_snap_uses_grid_bounds(self, grid: GridConfig) -> None:
        assert grid.snap(100) == 360
        assert grid.snap(1339) == 1320

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start_minutes": 600, "end_minutes": 600},
            {"start_minutes": -15},
            {"quantum_minutes": 0},
            {"hour_height_px": 0},
        ],
    )
    def test_rejects_invalid_geometry(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            GridConfig(**kwargs)

    def test_from_settings(self) -> None:
        custom = Settings(
            availability_grid_start_minutes=420,
            availability_grid_end_minutes=1200,
            availability_snap_minutes=30,
            availability_hour_height_px=60,
        )
        grid = GridConfig.from_settings(custom)
        assert grid == GridConfig(
            start_minutes=420, end_minutes=1200, quantum_minutes=30, hour_height_px=60
        )


@pytest.mark.unit
class TestGridSettingsValidation:
    def test_grid_end_must_stay_within_the_day(self) -> None:
        with pytest.raises(ValueError):
            Settings(availability_grid_start_minutes=360, availability_grid_end_minutes=1440)

    def test_grid_start_before_end(self) -> None:
        with pytest.raises(ValueError):
            Settings(availability_grid_start_minutes=900, availability_grid_end_minutes=600)

    def test_snap_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            Settings(availability_snap_minutes=0)

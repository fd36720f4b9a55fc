"""
Тесты для модели FrameWindow и TimeFrame.frame_window

Проверяет:
1. Построение frame для момента времени
2. Полуинтервал [start, end) в contains
3. Валидацию Pydantic и immutability
4. Сериализацию JSON
"""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.core.time import D1, M30, FrameWindow, TimeFrameCode, TimestampRangeExceeded

UTC = timezone.utc


class TestFrameWindow:
    """Тесты для модели FrameWindow"""

    @pytest.fixture
    def m30_window(self) -> FrameWindow:
        """Frame M30, содержащий 2104-10-10 03:29:47Z"""
        return M30.frame_window(datetime(2104, 10, 10, 3, 29, 47, tzinfo=UTC))

    def test_bounds(self, m30_window: FrameWindow) -> None:
        assert m30_window.time_frame == TimeFrameCode.M30
        assert m30_window.start == datetime(2104, 10, 10, 3, 0, tzinfo=UTC)
        assert m30_window.end == datetime(2104, 10, 10, 3, 30, tzinfo=UTC)
        assert m30_window.duration_ms == 30 * 60 * 1000

    def test_contains_is_half_open(self, m30_window: FrameWindow) -> None:
        assert m30_window.contains(datetime(2104, 10, 10, 3, 0, tzinfo=UTC))
        assert m30_window.contains(datetime(2104, 10, 10, 3, 29, 59, 999000, tzinfo=UTC))
        assert not m30_window.contains(datetime(2104, 10, 10, 3, 30, tzinfo=UTC))
        assert not m30_window.contains(datetime(2104, 10, 10, 2, 59, 59, tzinfo=UTC))

    def test_consecutive_windows_touch(self) -> None:
        first = M30.frame_window(datetime(2047, 11, 24, 4, 10, tzinfo=UTC))
        second = M30.frame_window(first.end)
        assert second.start_ts_utc_ms == first.end_ts_utc_ms

    def test_d1_window(self) -> None:
        window = D1.frame_window(datetime(2004, 2, 29, 13, 0, tzinfo=UTC))
        assert window.start == datetime(2004, 2, 29, tzinfo=UTC)
        assert window.end == datetime(2004, 3, 1, tzinfo=UTC)

    def test_window_at_max_raises(self) -> None:
        with pytest.raises(TimestampRangeExceeded):
            M30.frame_window(datetime(9999, 12, 31, 23, 45, tzinfo=UTC))

    def test_end_must_be_after_start(self) -> None:
        with pytest.raises(ValidationError, match="must be >"):
            FrameWindow(time_frame=TimeFrameCode.M30, start_ts_utc_ms=1000, end_ts_utc_ms=1000)

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FrameWindow(time_frame="W1", start_ts_utc_ms=0, end_ts_utc_ms=1)

    def test_immutable(self, m30_window: FrameWindow) -> None:
        with pytest.raises(ValidationError):
            m30_window.start_ts_utc_ms = 0  # type: ignore[misc]

    def test_json_roundtrip(self, m30_window: FrameWindow) -> None:
        payload = json.loads(m30_window.model_dump_json())
        assert payload["time_frame"] == "M30"
        assert FrameWindow.model_validate(payload) == m30_window

"""
Time modules для ATS

Классификация моментов времени по time frames и безопасная арифметика UTC.
"""

# Timestamps
from src.core.time.timestamps import (
    EPOCH_UTC,
    MAX_TIMESTAMP_UTC,
    MIN_TIMESTAMP_UTC,
    UTC,
    TimestampRangeExceeded,
    from_utc_ms,
    shift_utc,
    to_utc,
    to_utc_ms,
)

# Frame Window
from src.core.time.frame_window import FrameWindow, TimeFrameCode

# Time Frames
from src.core.time.timeframes import (
    D1,
    H1,
    H4,
    M1,
    M5,
    M15,
    M30,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    TIME_FRAMES,
    MinuteAlignedTimeFrame,
    TimeFrame,
    get_time_frame,
)

__all__ = [
    # Timestamps — Constants
    "EPOCH_UTC",
    "MAX_TIMESTAMP_UTC",
    "MIN_TIMESTAMP_UTC",
    "UTC",
    # Timestamps — Exceptions
    "TimestampRangeExceeded",
    # Timestamps — Functions
    "from_utc_ms",
    "shift_utc",
    "to_utc",
    "to_utc_ms",
    # Frame Window
    "FrameWindow",
    "TimeFrameCode",
    # Time Frames — Constants
    "MINUTES_PER_DAY",
    "MINUTES_PER_HOUR",
    "TIME_FRAMES",
    # Time Frames — Variants
    "M1",
    "M5",
    "M15",
    "M30",
    "H1",
    "H4",
    "D1",
    # Time Frames — Types
    "MinuteAlignedTimeFrame",
    "TimeFrame",
    # Time Frames — Functions
    "get_time_frame",
]

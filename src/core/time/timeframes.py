"""
Time Frames — Классификация моментов времени по календарным окнам фиксированной длины

Модуль разбивает ось времени UTC на непересекающиеся frames одинаковой длины,
выровненные по полуночи UTC:
- M30: окна по 30 минут, начинаются в минуты 0 и 30 каждого часа
- M1, M5, M15, H1, H4, D1: аналогичные варианты (длина делит сутки)

Используется для группировки тиков и баров по периодам.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Начало frame для момента T единственно: T с обнулёнными секундами и
   микросекундами и минутами суток, округлёнными вниз до кратного длины frame
2. Граничный момент принадлежит frame, который с него начинается
3. instant_of_next_frame(T) > T строго, даже если T уже на границе
4. Выход за диапазон datetime → TimestampRangeExceeded (никогда не wrap)
5. Все варианты stateless и immutable → thread-safe без синхронизации
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

from src.core.time.frame_window import FrameWindow, TimeFrameCode
from src.core.time.timestamps import shift_utc, to_utc, to_utc_ms

MINUTES_PER_HOUR: Final[int] = 60
MINUTES_PER_DAY: Final[int] = 24 * MINUTES_PER_HOUR


# =============================================================================
# CAPABILITY INTERFACE
# =============================================================================


class TimeFrame(ABC):
    """
    Политика разбиения времени на frames.

    Все методы — чистые функции над моментами времени. Naive datetime
    трактуется как UTC, возвращаемые datetime всегда timezone-aware UTC.
    """

    code: TimeFrameCode

    @abstractmethod
    def frame_start(self, ts: datetime) -> datetime:
        """Граница frame, содержащего ts (начало frame, <= ts)."""

    @abstractmethod
    def are_in_same_time_frame(self, a: datetime, b: datetime) -> bool:
        """True если a и b лежат в одном frame (порядок аргументов не важен)."""

    @abstractmethod
    def instant_of_next_frame(self, reference: datetime) -> datetime:
        """Ближайшая граница frame строго позже reference."""

    def frame_window(self, ts: datetime) -> FrameWindow:
        """
        Frame, содержащий ts, в виде полуинтервала [start, end) в UTC ms.

        Raises:
            TimestampRangeExceeded: Если конец frame вне диапазона datetime
        """
        return FrameWindow(
            time_frame=self.code,
            start_ts_utc_ms=to_utc_ms(self.frame_start(ts)),
            end_ts_utc_ms=to_utc_ms(self.instant_of_next_frame(ts)),
        )


# =============================================================================
# MINUTE-ALIGNED FRAMES
# =============================================================================


@dataclass(frozen=True)
class MinuteAlignedTimeFrame(TimeFrame):
    """
    Frame фиксированной длины, выровненный по полуночи UTC.

    Для frame_minutes=30 (M30):
    - a и b в одном frame ⇔ совпадают год, месяц, день, час и minute // 30
    - instant_of_next_frame: minute < 30 → тот же час, :30:00;
      minute >= 30 → следующий час, :00:00 (с календарным переносом)
    """

    code: TimeFrameCode
    frame_minutes: int

    def __post_init__(self) -> None:
        if self.frame_minutes <= 0:
            raise ValueError(f"frame_minutes must be positive, got {self.frame_minutes}")
        if MINUTES_PER_DAY % self.frame_minutes != 0:
            raise ValueError(
                f"frame_minutes must divide {MINUTES_PER_DAY}, got {self.frame_minutes}"
            )

    @property
    def step(self) -> timedelta:
        """Длина frame."""
        return timedelta(minutes=self.frame_minutes)

    def frame_start(self, ts: datetime) -> datetime:
        start = to_utc(ts)
        minute_of_day = start.hour * MINUTES_PER_HOUR + start.minute
        floored = minute_of_day - minute_of_day % self.frame_minutes
        return start.replace(
            hour=floored // MINUTES_PER_HOUR,
            minute=floored % MINUTES_PER_HOUR,
            second=0,
            microsecond=0,
        )

    def are_in_same_time_frame(self, a: datetime, b: datetime) -> bool:
        # Секунды и микросекунды не влияют: сравниваются только начала frames
        return self.frame_start(a) == self.frame_start(b)

    def instant_of_next_frame(self, reference: datetime) -> datetime:
        # Начало текущего frame <= reference < начало + step, поэтому
        # результат строго больше reference даже на границе
        return shift_utc(self.frame_start(reference), self.step)


# =============================================================================
# ЗАКРЫТЫЙ НАБОР ВАРИАНТОВ
# =============================================================================

M1: Final[MinuteAlignedTimeFrame] = MinuteAlignedTimeFrame(TimeFrameCode.M1, 1)
M5: Final[MinuteAlignedTimeFrame] = MinuteAlignedTimeFrame(TimeFrameCode.M5, 5)
M15: Final[MinuteAlignedTimeFrame] = MinuteAlignedTimeFrame(TimeFrameCode.M15, 15)
M30: Final[MinuteAlignedTimeFrame] = MinuteAlignedTimeFrame(TimeFrameCode.M30, 30)
H1: Final[MinuteAlignedTimeFrame] = MinuteAlignedTimeFrame(TimeFrameCode.H1, 60)
H4: Final[MinuteAlignedTimeFrame] = MinuteAlignedTimeFrame(TimeFrameCode.H4, 240)
D1: Final[MinuteAlignedTimeFrame] = MinuteAlignedTimeFrame(TimeFrameCode.D1, MINUTES_PER_DAY)

TIME_FRAMES: Final[dict[TimeFrameCode, TimeFrame]] = {
    tf.code: tf for tf in (M1, M5, M15, M30, H1, H4, D1)
}


def get_time_frame(code: TimeFrameCode | str) -> TimeFrame:
    """
    Выбор варианта TimeFrame по коду.

    Args:
        code: TimeFrameCode или строка ("M30", "m30", " h1 ")

    Returns:
        Соответствующий вариант TimeFrame

    Raises:
        ValueError: Если код неизвестен

    Examples:
        >>> get_time_frame("m30") is M30
        True
    """
    if isinstance(code, TimeFrameCode):
        key = code
    else:
        try:
            key = TimeFrameCode(str(code).strip().upper())
        except ValueError as e:
            supported = ", ".join(c.value for c in TimeFrameCode)
            raise ValueError(
                f"Unsupported time frame {code!r}, expected one of: {supported}"
            ) from e
    return TIME_FRAMES[key]

"""
Timestamps — UTC-нормализация и безопасная арифметика моментов времени

Модуль обеспечивает единое представление моментов времени для time frames:
- Нормализация datetime к UTC (naive datetime трактуется как UTC)
- Конверсия datetime <-> UTC миллисекунды (*_ts_utc_ms)
- Сдвиг момента времени с проверкой диапазона

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все возвращаемые datetime — timezone-aware UTC
2. Выход за диапазон [datetime.min, datetime.max] → TimestampRangeExceeded
   (никогда не wrap и не clamp)
3. Все операции детерминированы и не имеют side effects
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Final

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

UTC: Final[timezone] = timezone.utc

# Начало отсчёта для *_ts_utc_ms
EPOCH_UTC: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)

# Границы представимого диапазона
MIN_TIMESTAMP_UTC: Final[datetime] = datetime.min.replace(tzinfo=UTC)
MAX_TIMESTAMP_UTC: Final[datetime] = datetime.max.replace(tzinfo=UTC)

_ONE_MS: Final[timedelta] = timedelta(milliseconds=1)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class TimestampRangeExceeded(OverflowError):
    """
    Результат операции выходит за диапазон представимых моментов времени.

    Возникает при сдвиге за datetime.max / datetime.min (например, расчёт
    следующего frame для 9999-12-31 23:30 UTC) или при конверсии
    миллисекунд вне диапазона.
    """

    pass


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def to_utc(ts: datetime) -> datetime:
    """
    Нормализация момента времени к timezone-aware UTC.

    Args:
        ts: Момент времени (naive трактуется как UTC)

    Returns:
        Тот же момент времени с tzinfo=UTC

    Raises:
        TypeError: Если ts не datetime
        TimestampRangeExceeded: Если перевод в UTC выходит за диапазон

    Examples:
        >>> to_utc(datetime(2041, 2, 7, 0, 29))
        datetime.datetime(2041, 2, 7, 0, 29, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(ts, datetime):
        raise TypeError(f"ts must be datetime, got {type(ts).__name__}")

    if ts.tzinfo is None or ts.utcoffset() is None:
        return ts.replace(tzinfo=UTC)

    try:
        return ts.astimezone(UTC)
    except OverflowError as e:
        logger.warning("Timestamp range exceeded converting %s to UTC", ts.isoformat())
        raise TimestampRangeExceeded(
            f"Timestamp range exceeded: {ts.isoformat()} has no UTC representation"
        ) from e


def shift_utc(ts: datetime, delta: timedelta) -> datetime:
    """
    Сдвиг момента времени с проверкой диапазона.

    Календарный перенос (час → день → месяц → год, високосные годы)
    выполняет datetime.

    Args:
        ts: Исходный момент времени
        delta: Сдвиг (может быть отрицательным)

    Returns:
        UTC datetime ts + delta

    Raises:
        TimestampRangeExceeded: Если результат вне [MIN_TIMESTAMP_UTC, MAX_TIMESTAMP_UTC]
    """
    base = to_utc(ts)
    try:
        return base + delta
    except OverflowError as e:
        logger.warning("Timestamp range exceeded: %s + %s", base.isoformat(), delta)
        raise TimestampRangeExceeded(
            f"Timestamp range exceeded: {base.isoformat()} + {delta} is outside "
            f"[{MIN_TIMESTAMP_UTC.isoformat()}, {MAX_TIMESTAMP_UTC.isoformat()}]"
        ) from e


# =============================================================================
# КОНВЕРСИЯ МИЛЛИСЕКУНД
# =============================================================================


def to_utc_ms(ts: datetime) -> int:
    """
    Конверсия datetime → миллисекунды с начала эпохи (UTC).

    Микросекунды отбрасываются (floor, в том числе для дат до 1970).
    """
    return (to_utc(ts) - EPOCH_UTC) // _ONE_MS


def from_utc_ms(ts_ms: int) -> datetime:
    """
    Конверсия миллисекунд с начала эпохи (UTC) → datetime.

    Args:
        ts_ms: Миллисекунды с 1970-01-01T00:00:00Z (могут быть отрицательными)

    Returns:
        Timezone-aware UTC datetime

    Raises:
        TypeError: Если ts_ms не int (bool не принимается)
        TimestampRangeExceeded: Если ts_ms вне диапазона datetime
    """
    if isinstance(ts_ms, bool) or not isinstance(ts_ms, int):
        raise TypeError(f"ts_ms must be int, got {type(ts_ms).__name__}")

    try:
        delta = timedelta(milliseconds=ts_ms)
    except OverflowError as e:
        logger.warning("Timestamp range exceeded: ts_ms=%d", ts_ms)
        raise TimestampRangeExceeded(f"Timestamp range exceeded: ts_ms={ts_ms}") from e

    return shift_utc(EPOCH_UTC, delta)

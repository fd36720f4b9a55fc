"""
FrameWindow — Модель одного time frame

Immutable Pydantic модель полуинтервала [start, end) в UTC миллисекундах.
Формат *_ts_utc_ms совпадает с остальными моделями (opened_ts_utc_ms и т.д.).
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from src.core.time.timestamps import from_utc_ms, to_utc_ms


# =============================================================================
# ENUMS
# =============================================================================


class TimeFrameCode(str, Enum):
    """Код поддерживаемого time frame"""

    M1 = "M1"
    M5 = "M5"
    M15 = "M15"
    M30 = "M30"
    H1 = "H1"
    H4 = "H4"
    D1 = "D1"


# =============================================================================
# FRAME WINDOW MODEL
# =============================================================================


class FrameWindow(BaseModel):
    """
    Один frame: начало включительно, конец исключительно.

    Immutable модель (frozen=True). end_ts_utc_ms — начало следующего frame.
    """

    time_frame: TimeFrameCode = Field(..., description="Код time frame (например, 'M30')")
    start_ts_utc_ms: int = Field(..., description="Начало frame (UTC, миллисекунды)")
    end_ts_utc_ms: int = Field(
        ..., description="Начало следующего frame (UTC, миллисекунды, исключительно)"
    )

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_bounds(self) -> "FrameWindow":
        """Конец frame строго позже начала."""
        if self.end_ts_utc_ms <= self.start_ts_utc_ms:
            raise ValueError(
                f"end_ts_utc_ms {self.end_ts_utc_ms} must be > "
                f"start_ts_utc_ms {self.start_ts_utc_ms}"
            )
        return self

    @property
    def start(self) -> datetime:
        return from_utc_ms(self.start_ts_utc_ms)

    @property
    def end(self) -> datetime:
        return from_utc_ms(self.end_ts_utc_ms)

    @property
    def duration_ms(self) -> int:
        return self.end_ts_utc_ms - self.start_ts_utc_ms

    def contains(self, ts: datetime) -> bool:
        """
        Проверка принадлежности момента времени frame.

        Args:
            ts: Момент времени (naive трактуется как UTC)

        Returns:
            True если start <= ts < end (с точностью до миллисекунд)
        """
        return self.start_ts_utc_ms <= to_utc_ms(ts) < self.end_ts_utc_ms

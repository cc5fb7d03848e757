"""Pydantic models for data structures."""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class InvalidRange(Exception):
    """Граница диапазона задана в неверном порядке (начало позже конца)."""


class DisplayMode(str, Enum):
    """Режим отображения календаря."""
    ONE_DAY = "one_day"
    FIVE_DAYS = "five_days"
    SEVEN_DAYS = "seven_days"
    MONTH_OVERLAY = "month_overlay"

    @property
    def is_overlay(self) -> bool:
        return self is DisplayMode.MONTH_OVERLAY


class SwipeDirection(str, Enum):
    """Направление горизонтального жеста."""
    LEFT = "left"    # к следующему периоду
    RIGHT = "right"  # к предыдущему периоду


class DateRange(BaseModel):
    """
    Включительный диапазон дат [start, end_inclusive].

    Итерация ленивая и перезапускаемая: каждый вызов iter() начинает с start.
    """
    model_config = ConfigDict(frozen=True)

    start: date
    end_inclusive: date

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.end_inclusive < self.start:
            raise InvalidRange(
                f"start ({self.start}) must not be after end_inclusive ({self.end_inclusive})"
            )
        return self

    def __iter__(self) -> Iterator[date]:  # type: ignore[override]
        current = self.start
        while current <= self.end_inclusive:
            yield current
            current += timedelta(days=1)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, date):
            return False
        if isinstance(value, datetime):
            value = value.date()
        return self.start <= value <= self.end_inclusive

    def __len__(self) -> int:
        return (self.end_inclusive - self.start).days + 1

    def shift(self, days: int) -> "DateRange":
        """Возвращает диапазон той же длины, сдвинутый на days дней."""
        delta = timedelta(days=days)
        return DateRange(start=self.start + delta, end_inclusive=self.end_inclusive + delta)


class TimeInterval(BaseModel):
    """
    Временной интервал события [start, end) с непрозрачным идентификатором.

    Порядок start < end здесь не проверяется: интервалы нулевой длины
    допустимы как объекты предметной области, но не участвуют в раскладке.
    """
    model_config = ConfigDict(frozen=True)

    id: Any
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_positive(self) -> bool:
        return self.start < self.end

    def overlaps(self, other: "TimeInterval") -> bool:
        """Касание (self.end == other.start) пересечением не считается."""
        return self.start < other.end and other.start < self.end


class EventLayout(BaseModel):
    """Горизонтальное положение события внутри колонки дня."""
    model_config = ConfigDict(frozen=True)

    width_fraction: float = Field(gt=0.0, le=1.0)
    offset_fraction: float = Field(ge=0.0, lt=1.0)
    cluster_id: int = Field(ge=0)
    column_index: int = Field(default=0, ge=0)
    columns_used: int = Field(default=1, gt=0)


class NavigationState(BaseModel):
    """Состояние навигации экрана календаря."""
    model_config = ConfigDict(frozen=True)

    active_mode: DisplayMode
    visible_range: DateRange
    remembered_mode: DisplayMode
    overlay_visible: bool = False

    @field_validator("remembered_mode")
    @classmethod
    def remembered_mode_is_concrete(cls, value: DisplayMode) -> DisplayMode:
        if value is DisplayMode.MONTH_OVERLAY:
            raise ValueError("remembered_mode не может быть MONTH_OVERLAY")
        return value


class TimeWindow(BaseModel):
    """Видимое окно часов колонки дня [start, end_exclusive)."""
    model_config = ConfigDict(frozen=True)

    start: time = time(8, 0)
    end_exclusive: time = time(23, 0)

    @model_validator(mode="after")
    def check_order(self) -> "TimeWindow":
        if not self.start < self.end_exclusive:
            raise InvalidRange(
                f"Start time {self.start} must be before end time {self.end_exclusive}"
            )
        return self

    @property
    def duration(self) -> timedelta:
        anchor = date(2000, 1, 1)
        return datetime.combine(anchor, self.end_exclusive) - datetime.combine(anchor, self.start)

    def hourly_times(self) -> Iterator[time]:
        """
        Метки целых часов, покрывающие окно, включая час начала и час конца.

        Например, для 08:30–12:15 это 08:00, 09:00, 10:00, 11:00, 12:00.
        """
        for hour in range(self.start.hour, self.end_exclusive.hour + 1):
            yield time(hour, 0)

    @classmethod
    def of(cls, start: time, duration: timedelta) -> "TimeWindow":
        """
        Создает окно по началу и длительности.

        Окно не может переходить через полночь, иначе InvalidRange.
        """
        end = datetime.combine(date(2000, 1, 1), start) + duration
        if end.date() != date(2000, 1, 1):
            raise InvalidRange(f"Window starting at {start} with duration {duration} crosses midnight")
        return cls(start=start, end_exclusive=end.time())


class VerticalSegment(BaseModel):
    """Видимая часть события в колонке дня, в минутах от начала окна."""
    model_config = ConfigDict(frozen=True)

    offset_minutes: int = Field(default=0, ge=0)
    duration_minutes: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        return self.duration_minutes == 0

"""Геометрия сетки календаря: колонки дней и видимые части событий."""

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import get_timezone
from .layout import compute_layouts
from .schemas import DateRange, EventLayout, TimeInterval, TimeWindow, VerticalSegment

logger = logging.getLogger(__name__)


def _localize(naive: datetime, tz: tzinfo) -> datetime:
    """Привязывает naive datetime к часовому поясу (pytz или стандартному tzinfo)."""
    localize = getattr(tz, "localize", None)
    if localize is not None:
        return localize(naive)
    return naive.replace(tzinfo=tz)


def _aware(value: datetime, tz: tzinfo) -> datetime:
    """Naive datetime считается локальным временем в tz; aware возвращается как есть."""
    if value.tzinfo is None:
        return _localize(value, tz)
    return value


def day_bounds(day: date, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """
    Границы колонки дня в абсолютном времени.

    Args:
        day: Дата колонки
        tz: Часовой пояс (по умолчанию из конфигурации)

    Returns:
        Кортеж (начало дня, начало следующего дня); конец исключается
    """
    if tz is None:
        tz = get_timezone()
    start = _localize(datetime.combine(day, time.min), tz)
    end = _localize(datetime.combine(day + timedelta(days=1), time.min), tz)
    return start, end


def intervals_for_day(
    intervals: Iterable[TimeInterval],
    day: date,
    tz: Optional[tzinfo] = None,
) -> List[TimeInterval]:
    """
    Отбирает интервалы, попадающие в колонку дня, и обрезает их по границам дня.

    Интервалы, переходящие через полночь, появляются в каждой задетой колонке.
    Интервалы без пересечения с днем и интервалы с start >= end отбрасываются.
    Naive datetime трактуются как локальное время в tz.
    """
    if tz is None:
        tz = get_timezone()
    day_start, day_end = day_bounds(day, tz)
    clipped = []
    for interval in intervals:
        start = max(_aware(interval.start, tz), day_start)
        end = min(_aware(interval.end, tz), day_end)
        if end <= start:
            continue
        clipped.append(TimeInterval(id=interval.id, start=start, end=end))
    return clipped


def vertical_segment(
    interval: TimeInterval,
    day: date,
    window: TimeWindow,
    tz: Optional[tzinfo] = None,
) -> VerticalSegment:
    """
    Вычисляет смещение и длину видимой части интервала в колонке дня, в минутах.

    Видимое окно [day + window.start, day + window.end_exclusive) строится в
    абсолютном времени, поэтому переходы на летнее время и события через
    полночь обрабатываются корректно. Naive datetime трактуются как локальное
    время в tz.

    Returns:
        VerticalSegment; пустой сегмент (0, 0), если видимой части нет
    """
    if tz is None:
        tz = get_timezone()
    visible_start = _localize(datetime.combine(day, window.start), tz)
    visible_end = _localize(datetime.combine(day, window.end_exclusive), tz)

    segment_start = max(_aware(interval.start, tz), visible_start)
    segment_end = min(_aware(interval.end, tz), visible_end)
    if segment_end <= segment_start:
        return VerticalSegment()

    offset = int((segment_start - visible_start).total_seconds() // 60)
    duration = int((segment_end - segment_start).total_seconds() // 60)
    return VerticalSegment(offset_minutes=offset, duration_minutes=duration)


def compute_range_layouts(
    intervals: Iterable[TimeInterval],
    date_range: DateRange,
    tz: Optional[tzinfo] = None,
) -> Dict[date, Dict[Any, EventLayout]]:
    """
    Раскладка событий для каждой колонки видимого диапазона.

    Колонки независимы: каждая раскладывается отдельно по обрезанным интервалам.

    Returns:
        Словарь дата -> (id интервала -> EventLayout); дни без событий дают пустой словарь
    """
    if tz is None:
        tz = get_timezone()
    intervals = list(intervals)

    result: Dict[date, Dict[Any, EventLayout]] = {}
    for day in date_range:
        result[day] = compute_layouts(intervals_for_day(intervals, day, tz))

    logger.debug(
        f"Раскладка диапазона {date_range.start}..{date_range.end_inclusive}: "
        f"{len(intervals)} интервалов"
    )
    return result

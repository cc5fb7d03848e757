"""Вспомогательные функции для работы с днями недели и последовательностями дат."""

from datetime import date, timedelta
from typing import List, Optional

from . import config
from .schemas import DateRange

# Понедельник = 0 ... Воскресенье = 6 (как в date.weekday())
SATURDAY = 5


def is_weekend(day: date) -> bool:
    """Суббота или воскресенье."""
    return day.weekday() >= SATURDAY


def week_monday(day: date) -> date:
    """Понедельник недели, содержащей day."""
    return day - timedelta(days=day.weekday())


def week_range(day: date, length: int) -> DateRange:
    """
    Диапазон из length дней, начинающийся с понедельника недели, содержащей day.

    Args:
        day: Любая дата внутри нужной недели
        length: Количество дней (1, 5 или 7 для режимов календаря)

    Returns:
        DateRange [понедельник, понедельник + length - 1]
    """
    monday = week_monday(day)
    return DateRange(start=monday, end_inclusive=monday + timedelta(days=length - 1))


def days_between(start: date, end_inclusive: date) -> List[date]:
    """Все даты от start до end_inclusive включительно (пустой список, если end_inclusive < start)."""
    result = []
    current = start
    while current <= end_inclusive:
        result.append(current)
        current += timedelta(days=1)
    return result


def next_days(start: date, count: int) -> List[date]:
    """
    Возвращает count последовательных дат начиная с start.

    Raises:
        ValueError: если count отрицательный
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return [start + timedelta(days=offset) for offset in range(count)]


def work_week_days(today: Optional[date] = None) -> List[date]:
    """
    Рабочие дни (понедельник..пятница) недели, содержащей today.

    Args:
        today: Любая дата внутри недели (по умолчанию сегодня в настроенном часовом поясе)
    """
    if today is None:
        today = config.today()
    return list(week_range(today, 5))

"""Calendar core configuration loaded from environment variables."""

import math
import os
import logging
from datetime import date, datetime, time, tzinfo
from typing import Optional

import pytz
from dotenv import load_dotenv

from .schemas import InvalidRange, TimeWindow

load_dotenv()

logger = logging.getLogger(__name__)

# Часовой пояс по умолчанию
DEFAULT_TIMEZONE_NAME = "Europe/Moscow"

# Минимальная горизонтальная длина жеста; жест ровно такой длины не срабатывает
DEFAULT_SWIPE_THRESHOLD = 100.0

DEFAULT_DAY_START = time(8, 0)
DEFAULT_DAY_END = time(23, 0)


def get_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Получает часовой пояс из аргумента или переменной окружения CALENDAR_TIMEZONE.

    Args:
        name: Имя часового пояса IANA (например, "Europe/Moscow")

    Returns:
        pytz timezone; при неизвестном имени возвращается часовой пояс по умолчанию
    """
    tz_name = name or os.getenv("CALENDAR_TIMEZONE") or DEFAULT_TIMEZONE_NAME
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning(
            f"Неизвестный часовой пояс {tz_name!r}, используется {DEFAULT_TIMEZONE_NAME}"
        )
        return pytz.timezone(DEFAULT_TIMEZONE_NAME)


def get_swipe_threshold() -> float:
    """
    Получает порог срабатывания свайпа из переменной окружения CALENDAR_SWIPE_THRESHOLD.

    Returns:
        Неотрицательный порог; при некорректном значении DEFAULT_SWIPE_THRESHOLD
    """
    raw = os.getenv("CALENDAR_SWIPE_THRESHOLD")
    if not raw:
        return DEFAULT_SWIPE_THRESHOLD

    try:
        threshold = float(raw)
    except ValueError:
        logger.warning(
            f"Некорректный CALENDAR_SWIPE_THRESHOLD={raw!r}, используется {DEFAULT_SWIPE_THRESHOLD}"
        )
        return DEFAULT_SWIPE_THRESHOLD

    if not math.isfinite(threshold) or threshold < 0:
        logger.warning(
            f"Недопустимый CALENDAR_SWIPE_THRESHOLD={raw!r}, используется {DEFAULT_SWIPE_THRESHOLD}"
        )
        return DEFAULT_SWIPE_THRESHOLD

    return threshold


def _parse_time(raw: Optional[str], default: time, variable: str) -> time:
    if not raw:
        return default
    try:
        return datetime.strptime(raw.strip(), "%H:%M").time()
    except ValueError:
        logger.warning(
            f"Некорректный {variable}={raw!r} (ожидается HH:MM), используется {default:%H:%M}"
        )
        return default


def get_default_time_window() -> TimeWindow:
    """
    Видимое окно часов из CALENDAR_DAY_START / CALENDAR_DAY_END (формат HH:MM).

    Если конец окна не позже начала, используется окно по умолчанию 08:00-23:00.
    """
    start = _parse_time(os.getenv("CALENDAR_DAY_START"), DEFAULT_DAY_START, "CALENDAR_DAY_START")
    end = _parse_time(os.getenv("CALENDAR_DAY_END"), DEFAULT_DAY_END, "CALENDAR_DAY_END")
    try:
        return TimeWindow(start=start, end_exclusive=end)
    except InvalidRange as e:
        logger.warning(
            f"Некорректное окно дня: {e}; "
            f"используется {DEFAULT_DAY_START:%H:%M}-{DEFAULT_DAY_END:%H:%M}"
        )
        return TimeWindow(start=DEFAULT_DAY_START, end_exclusive=DEFAULT_DAY_END)


def today(tz: Optional[tzinfo] = None) -> date:
    """Текущая дата в заданном (или настроенном) часовом поясе."""
    if tz is None:
        tz = get_timezone()
    return datetime.now(tz).date()

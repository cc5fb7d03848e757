"""Тесты для schemas.py - DateRange, TimeWindow и инварианты моделей."""

from datetime import date, datetime, time, timedelta

import pytest
from pydantic import ValidationError

from calendar_core.schemas import (
    DateRange,
    DisplayMode,
    EventLayout,
    InvalidRange,
    NavigationState,
    TimeWindow,
)

BASE = date(2025, 1, 1)


class TestDateRange:
    """Тесты для DateRange."""

    def test_single_day_iteration(self):
        """Тест: диапазон из одного дня дает ровно одну дату."""
        iterator = iter(DateRange(start=BASE, end_inclusive=BASE))
        assert next(iterator) == BASE
        with pytest.raises(StopIteration):
            next(iterator)

    def test_seven_days_in_order(self):
        """Тест: семь последовательных дат по возрастанию."""
        date_range = DateRange(start=BASE, end_inclusive=BASE + timedelta(days=6))
        assert list(date_range) == [BASE + timedelta(days=i) for i in range(7)]
        assert len(date_range) == 7

    def test_iteration_is_restartable(self):
        """Тест: повторная итерация начинается заново."""
        date_range = DateRange(start=BASE, end_inclusive=BASE + timedelta(days=2))
        assert list(date_range) == list(date_range)

    def test_end_before_start_raises(self):
        """Тест: конец раньше начала - InvalidRange."""
        with pytest.raises(InvalidRange):
            DateRange(start=date(2025, 10, 10), end_inclusive=date(2025, 10, 5))

    def test_contains(self):
        """Тест: проверка принадлежности включает обе границы."""
        date_range = DateRange(start=BASE, end_inclusive=BASE + timedelta(days=4))
        assert BASE in date_range
        assert BASE + timedelta(days=4) in date_range
        assert BASE + timedelta(days=5) not in date_range
        assert BASE - timedelta(days=1) not in date_range
        assert datetime(2025, 1, 2, 12, 0) in date_range
        assert "2025-01-02" not in date_range

    def test_shift_keeps_length(self):
        """Тест: сдвиг сохраняет длину диапазона."""
        date_range = DateRange(start=BASE, end_inclusive=BASE + timedelta(days=4))
        shifted = date_range.shift(-7)
        assert shifted.start == BASE - timedelta(days=7)
        assert len(shifted) == len(date_range)

    def test_immutable(self):
        """Тест: диапазон неизменяем и хешируем."""
        date_range = DateRange(start=BASE, end_inclusive=BASE)
        with pytest.raises(ValidationError):
            date_range.start = BASE + timedelta(days=1)
        assert hash(date_range) == hash(DateRange(start=BASE, end_inclusive=BASE))


class TestTimeWindow:
    """Тесты для TimeWindow."""

    def test_default_window(self):
        """Тест: окно по умолчанию 08:00-23:00."""
        window = TimeWindow()
        assert window.duration == timedelta(hours=15)

    def test_start_not_before_end_raises(self):
        """Тест: пустое окно недопустимо."""
        with pytest.raises(InvalidRange):
            TimeWindow(start=time(9, 0), end_exclusive=time(9, 0))

    def test_hourly_times(self):
        """Тест: метки часов включают час начала и час конца."""
        window = TimeWindow(start=time(8, 30), end_exclusive=time(12, 15))
        assert list(window.hourly_times()) == [time(h, 0) for h in range(8, 13)]

    def test_of(self):
        """Тест: создание окна по началу и длительности."""
        window = TimeWindow.of(time(8, 0), timedelta(hours=2, minutes=30))
        assert window.end_exclusive == time(10, 30)

    def test_of_crossing_midnight_raises(self):
        """Тест: окно через полночь недопустимо."""
        with pytest.raises(InvalidRange):
            TimeWindow.of(time(22, 0), timedelta(hours=3))


class TestModelInvariants:
    """Тесты для инвариантов EventLayout и NavigationState."""

    def test_layout_bounds(self):
        """Тест: доли ширины и смещения проверяются."""
        with pytest.raises(ValidationError):
            EventLayout(width_fraction=0.0, offset_fraction=0.0, cluster_id=0)
        with pytest.raises(ValidationError):
            EventLayout(width_fraction=0.5, offset_fraction=1.0, cluster_id=0)

    def test_remembered_mode_cannot_be_overlay(self):
        """Тест: запомненный режим не может быть MONTH_OVERLAY."""
        with pytest.raises(ValidationError):
            NavigationState(
                active_mode=DisplayMode.MONTH_OVERLAY,
                visible_range=DateRange(start=BASE, end_inclusive=BASE),
                remembered_mode=DisplayMode.MONTH_OVERLAY,
                overlay_visible=True,
            )

    def test_display_mode_overlay_flag(self):
        """Тест: только MONTH_OVERLAY является оверлеем."""
        assert [mode for mode in DisplayMode if mode.is_overlay] == [DisplayMode.MONTH_OVERLAY]

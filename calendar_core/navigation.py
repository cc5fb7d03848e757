"""Чистые функции переходов состояния навигации календаря (framework-agnostic).

Каждая функция принимает текущее NavigationState и возвращает новое; ни одна
функция не изменяет входное состояние и не завершается ошибкой.
"""

import logging
from datetime import date, datetime
from typing import Optional

from . import config
from .days import is_weekend, week_monday, week_range
from .schemas import DateRange, DisplayMode, NavigationState, SwipeDirection

logger = logging.getLogger(__name__)

# Количество видимых дней для конкретных (не оверлейных) режимов
DAYS_IN_MODE = {
    DisplayMode.ONE_DAY: 1,
    DisplayMode.FIVE_DAYS: 5,
    DisplayMode.SEVEN_DAYS: 7,
}


def default_mode(today: date) -> DisplayMode:
    """FIVE_DAYS в будни, SEVEN_DAYS в выходные."""
    if is_weekend(today):
        return DisplayMode.SEVEN_DAYS
    return DisplayMode.FIVE_DAYS


def initial_state(today: Optional[date] = None) -> NavigationState:
    """
    Начальное состояние экрана: режим по умолчанию и неделя, содержащая today.

    Args:
        today: Текущая дата (по умолчанию сегодня в настроенном часовом поясе)
    """
    if today is None:
        today = config.today()
    mode = default_mode(today)
    return NavigationState(
        active_mode=mode,
        visible_range=week_range(today, DAYS_IN_MODE[mode]),
        remembered_mode=mode,
        overlay_visible=False,
    )


def select_mode(state: NavigationState, new_mode: DisplayMode, today: date) -> NavigationState:
    """
    Переход при выборе режима в переключателе.

    MONTH_OVERLAY только открывает выбор месяца: диапазон и запомненный режим
    не меняются. Конкретный режим пересчитывает диапазон от понедельника недели,
    содержащей начало текущего диапазона, и становится запомненным режимом.

    Args:
        state: Текущее состояние
        new_mode: Выбранный режим
        today: Текущая дата; в режиме ONE_DAY показывается today, если он
               входил в прежний диапазон

    Returns:
        Новое состояние
    """
    if new_mode is DisplayMode.MONTH_OVERLAY:
        logger.debug(f"Открыт выбор месяца из режима {state.active_mode.value}")
        return NavigationState(
            active_mode=DisplayMode.MONTH_OVERLAY,
            visible_range=state.visible_range,
            remembered_mode=state.remembered_mode,
            overlay_visible=True,
        )

    anchor = week_monday(state.visible_range.start)
    if new_mode is DisplayMode.ONE_DAY:
        day = today if today in state.visible_range else anchor
        new_range = DateRange(start=day, end_inclusive=day)
    else:
        new_range = week_range(anchor, DAYS_IN_MODE[new_mode])

    logger.debug(
        f"Режим {state.active_mode.value} -> {new_mode.value}, "
        f"диапазон {new_range.start}..{new_range.end_inclusive}"
    )
    return NavigationState(
        active_mode=new_mode,
        visible_range=new_range,
        remembered_mode=new_mode,
        overlay_visible=False,
    )


def month_date_selected(state: NavigationState, selected_date: Optional[date]) -> NavigationState:
    """
    Переход при закрытии выбора месяца.

    Без выбранной даты возвращается запомненный режим с прежним диапазоном.
    С выбранной датой строится диапазон запомненного режима, содержащий эту дату.
    Выходной день при запомненном FIVE_DAYS временно показывается в SEVEN_DAYS,
    при этом запомненный режим остается FIVE_DAYS.

    Args:
        state: Текущее состояние
        selected_date: Выбранная дата или None, если пользователь ничего не выбрал

    Returns:
        Новое состояние; оверлей всегда скрыт
    """
    remembered = state.remembered_mode

    if selected_date is None:
        return NavigationState(
            active_mode=remembered,
            visible_range=state.visible_range,
            remembered_mode=remembered,
            overlay_visible=False,
        )

    if isinstance(selected_date, datetime):
        selected_date = selected_date.date()

    if remembered is DisplayMode.ONE_DAY:
        active = DisplayMode.ONE_DAY
        new_range = DateRange(start=selected_date, end_inclusive=selected_date)
    elif remembered is DisplayMode.FIVE_DAYS and not is_weekend(selected_date):
        active = DisplayMode.FIVE_DAYS
        new_range = week_range(selected_date, 5)
    else:
        # SEVEN_DAYS или выходной день при FIVE_DAYS
        active = DisplayMode.SEVEN_DAYS
        new_range = week_range(selected_date, 7)

    logger.debug(
        f"Выбрана дата {selected_date}: режим {active.value}, запомненный {remembered.value}"
    )
    return NavigationState(
        active_mode=active,
        visible_range=new_range,
        remembered_mode=remembered,
        overlay_visible=False,
    )


def dismiss_month_overlay(state: NavigationState) -> NavigationState:
    """Закрытие выбора месяца без выбора даты."""
    return month_date_selected(state, None)


def swipe(state: NavigationState, direction: SwipeDirection) -> NavigationState:
    """
    Сдвигает видимый диапазон на один период.

    В режиме ONE_DAY период равен одному дню, во всех остальных (включая
    открытый выбор месяца) неделе. LEFT сдвигает вперед, RIGHT назад.
    Режим, длина диапазона и выравнивание по дням недели сохраняются.
    """
    step = 1 if state.active_mode is DisplayMode.ONE_DAY else 7
    if direction is SwipeDirection.RIGHT:
        step = -step

    return NavigationState(
        active_mode=state.active_mode,
        visible_range=state.visible_range.shift(step),
        remembered_mode=state.remembered_mode,
        overlay_visible=state.overlay_visible,
    )


def classify_drag(dx: float, dy: float, threshold: float) -> Optional[SwipeDirection]:
    """
    Определяет, является ли жест свайпом.

    Свайп засчитывается, только если горизонтальная составляющая строго больше
    порога и преобладает над вертикальной.

    Args:
        dx: Суммарное горизонтальное смещение (положительное вправо)
        dy: Суммарное вертикальное смещение
        threshold: Порог срабатывания

    Returns:
        Направление свайпа или None
    """
    if abs(dx) <= threshold or abs(dx) <= abs(dy):
        return None
    return SwipeDirection.RIGHT if dx > 0 else SwipeDirection.LEFT


def handle_drag(
    state: NavigationState,
    dx: float,
    dy: float,
    threshold: Optional[float] = None,
) -> NavigationState:
    """
    Обрабатывает завершенный жест перетаскивания.

    Args:
        state: Текущее состояние
        dx: Суммарное горизонтальное смещение
        dy: Суммарное вертикальное смещение
        threshold: Порог (по умолчанию из конфигурации)

    Returns:
        Новое состояние или state без изменений, если жест не является свайпом
    """
    if threshold is None:
        threshold = config.get_swipe_threshold()

    direction = classify_drag(dx, dy, threshold)
    if direction is None:
        return state
    return swipe(state, direction)

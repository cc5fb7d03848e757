"""Раскладка пересекающихся событий внутри одной колонки дня.

Каждое событие получает долю ширины колонки и смещение от ее левого края,
так что пересекающиеся по времени события рисуются рядом и не накладываются.
Результат не зависит от порядка входных интервалов.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Tuple

from .schemas import TimeInterval, EventLayout

logger = logging.getLogger(__name__)


def intervals_overlap(first: TimeInterval, second: TimeInterval) -> bool:
    """Пересечение открытых диапазонов; интервалы, которые только касаются, не пересекаются."""
    return first.start < second.end and second.start < first.end


def _ordered(intervals: List[TimeInterval]) -> List[TimeInterval]:
    """
    Детерминированный порядок: по началу, затем по концу, затем по id.

    Если id несравнимы между собой, последним ключом служит индекс во входном списке.
    """
    try:
        return sorted(intervals, key=lambda iv: (iv.start, iv.end, iv.id))
    except TypeError:
        logger.debug("Идентификаторы интервалов несравнимы, используется порядок входного списка")
        indexed = sorted(
            enumerate(intervals), key=lambda pair: (pair[1].start, pair[1].end, pair[0])
        )
        return [interval for _, interval in indexed]


def _valid_intervals(intervals: Iterable[TimeInterval]) -> List[TimeInterval]:
    valid = []
    seen_ids = set()
    for interval in intervals:
        if not interval.is_positive:
            logger.warning(
                f"Интервал {interval.id!r} пропущен: start ({interval.start}) >= end ({interval.end})"
            )
            continue
        if interval.id in seen_ids:
            logger.warning(
                f"Повторяющийся id интервала {interval.id!r}: останется раскладка интервала, "
                f"последнего в порядке (start, end, id)"
            )
        seen_ids.add(interval.id)
        valid.append(interval)
    return valid


def cluster_intervals(intervals: Iterable[TimeInterval]) -> List[List[TimeInterval]]:
    """
    Разбивает интервалы на кластеры: компоненты связности графа пересечений.

    Интервалы, связанные только транзитивно (A пересекает B, B пересекает C),
    попадают в один кластер. Кластеры возвращаются в хронологическом порядке,
    интервалы внутри кластера в детерминированном порядке (см. _ordered).

    Интервалы с start >= end пропускаются.
    """
    ordered = _ordered(_valid_intervals(intervals))
    clusters: List[List[TimeInterval]] = []
    cluster_end = None

    # После сортировки по началу компонента заканчивается там, где очередной
    # интервал начинается не раньше максимального конца текущей компоненты.
    for interval in ordered:
        if cluster_end is not None and interval.start < cluster_end:
            clusters[-1].append(interval)
            cluster_end = max(cluster_end, interval.end)
        else:
            clusters.append([interval])
            cluster_end = interval.end

    return clusters


def _assign_columns(cluster: List[TimeInterval]) -> List[int]:
    """Жадная раскраска интервального графа: самая левая свободная колонка."""
    column_ends: List[datetime] = []
    assigned: List[int] = []

    for interval in cluster:
        for index, column_end in enumerate(column_ends):
            if column_end <= interval.start:
                column_ends[index] = interval.end
                assigned.append(index)
                break
        else:
            column_ends.append(interval.end)
            assigned.append(len(column_ends) - 1)

    return assigned


def compute_layouts(intervals: Iterable[TimeInterval]) -> Dict[Any, EventLayout]:
    """
    Вычисляет ширину и смещение каждого интервала в колонке дня.

    Все интервалы кластера делят один набор колонок: ширина равна
    1 / (число использованных колонок), что совпадает с максимальным числом
    одновременно активных интервалов кластера. Смещение считается как
    column_index / columns_used, поэтому offset_fraction + width_fraction <= 1
    выполняется точно, без допуска.

    Args:
        intervals: Интервалы одной колонки дня в любом порядке

    Returns:
        Словарь id интервала -> EventLayout. Интервалы с start >= end в него не попадают.
        При повторяющихся id остается раскладка интервала, последнего
        в порядке сортировки (start, end, id).

    Examples:
        Два интервала [8:00, 9:00) и [8:30, 9:30) получают ширину 0.5
        и смещения 0.0 и 0.5 в одном кластере.
    """
    layouts: Dict[Any, EventLayout] = {}
    clusters = cluster_intervals(intervals)

    for cluster_id, cluster in enumerate(clusters):
        columns = _assign_columns(cluster)
        columns_used = max(columns) + 1
        width = 1.0 / columns_used

        for interval, column_index in zip(cluster, columns):
            layouts[interval.id] = EventLayout(
                width_fraction=width,
                offset_fraction=column_index / columns_used,
                cluster_id=cluster_id,
                column_index=column_index,
                columns_used=columns_used,
            )

    logger.debug(f"Раскладка: {len(layouts)} интервалов, {len(clusters)} кластеров")
    return layouts


def max_concurrency(intervals: Iterable[TimeInterval]) -> int:
    """
    Максимальное число одновременно активных интервалов (sweep line).

    В момент касания конец одного интервала обрабатывается раньше начала другого.
    """
    points: List[Tuple[datetime, int]] = []
    for interval in intervals:
        if not interval.is_positive:
            continue
        points.append((interval.start, 1))
        points.append((interval.end, -1))
    points.sort()

    active = 0
    best = 0
    for _, delta in points:
        active += delta
        best = max(best, active)
    return best

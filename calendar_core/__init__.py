"""Calendar scheduling core - framework-agnostic pure Python functions."""

from .schemas import (
    InvalidRange,
    DisplayMode,
    SwipeDirection,
    DateRange,
    TimeInterval,
    EventLayout,
    NavigationState,
    TimeWindow,
    VerticalSegment,
)

from .layout import (
    intervals_overlap,
    cluster_intervals,
    compute_layouts,
    max_concurrency,
)

from .navigation import (
    default_mode,
    initial_state,
    select_mode,
    month_date_selected,
    dismiss_month_overlay,
    swipe,
    classify_drag,
    handle_drag,
)

from .grid import (
    day_bounds,
    intervals_for_day,
    vertical_segment,
    compute_range_layouts,
)

__all__ = [
    # Schemas
    "InvalidRange",
    "DisplayMode",
    "SwipeDirection",
    "DateRange",
    "TimeInterval",
    "EventLayout",
    "NavigationState",
    "TimeWindow",
    "VerticalSegment",
    # Layout engine
    "intervals_overlap",
    "cluster_intervals",
    "compute_layouts",
    "max_concurrency",
    # Navigation
    "default_mode",
    "initial_state",
    "select_mode",
    "month_date_selected",
    "dismiss_month_overlay",
    "swipe",
    "classify_drag",
    "handle_drag",
    # Day column grid
    "day_bounds",
    "intervals_for_day",
    "vertical_segment",
    "compute_range_layouts",
]

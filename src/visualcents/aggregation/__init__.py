"""Calendar-aligned aggregation of transactions.

This package groups transactions into day, week, month and year buckets for
calendar grids, timelines and statistics.
"""

from .aggregator import PeriodAggregator
from .buckets import CategoryTotal, MonthData, PeriodBucket
from .calendar_config import CalendarConfig, Granularity

__all__ = [
    "CalendarConfig",
    "CategoryTotal",
    "Granularity",
    "MonthData",
    "PeriodAggregator",
    "PeriodBucket",
]

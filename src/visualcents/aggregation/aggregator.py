"""Calendar-aligned grouping and totals over transaction lists.

All operations are pure: they read the transaction list and the calendar and
return fresh result objects. An empty transaction list is a normal input.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import Decimal

import structlog

from visualcents.aggregation.buckets import CategoryTotal, MonthData, PeriodBucket
from visualcents.aggregation.calendar_config import CalendarConfig, Granularity
from visualcents.models import Transaction

logger = structlog.get_logger()


class PeriodAggregator:
    """Groups transactions into day/week/month/year buckets."""

    def __init__(self, calendar: CalendarConfig | None = None) -> None:
        """Create an aggregator.

        Args:
            calendar: Calendar to bucket with. If None, built from settings.
        """

        self.calendar = calendar or CalendarConfig.from_settings()

    def _bucket(
        self,
        start: datetime,
        granularity: Granularity,
        transactions: Iterable[Transaction] = (),
    ) -> PeriodBucket:
        return PeriodBucket(
            period_start=start,
            period_end=self.calendar.period_end(start, granularity),
            granularity=granularity,
            transactions=tuple(transactions),
        )

    def _group(
        self,
        transactions: Iterable[Transaction],
        granularity: Granularity,
    ) -> dict[datetime, list[Transaction]]:
        grouped: dict[datetime, list[Transaction]] = defaultdict(list)
        for txn in transactions:
            grouped[self.calendar.period_start(txn.date, granularity)].append(txn)
        return dict(grouped)

    def group_by_day(self, transactions: Iterable[Transaction]) -> dict[datetime, list[Transaction]]:
        """Partition transactions by the start of their local day.

        Input order is preserved within each day.
        """
        return self._group(transactions, Granularity.DAY)

    def group_by(
        self,
        transactions: Iterable[Transaction],
        granularity: Granularity,
    ) -> list[PeriodBucket]:
        """Buckets for every period that has activity, oldest first."""
        grouped = self._group(transactions, granularity)
        return [self._bucket(start, granularity, grouped[start]) for start in sorted(grouped)]

    def month_data(self, year: int, month: int, transactions: Iterable[Transaction]) -> list[PeriodBucket]:
        """One bucket per day of the month, including days without activity.

        Args:
            year: Calendar year.
            month: Calendar month, 1-12.
            transactions: Any transactions; those outside the month are ignored.

        Returns:
            Day buckets in ascending day order.

        Raises:
            InvalidPeriodError: If ``month`` or ``year`` is out of range.
        """

        day_count = self.calendar.days_in_month(year, month)

        in_month = []
        for txn in transactions:
            local = self.calendar.local_date(txn.date)
            if local.year == year and local.month == month:
                in_month.append(txn)
        grouped = self.group_by_day(in_month)

        days = []
        for day in range(1, day_count + 1):
            start = self.calendar.start_of(date(year, month, day))
            days.append(self._bucket(start, Granularity.DAY, grouped.get(start, ())))

        logger.debug(
            "month_data_built",
            year=year,
            month=month,
            day_count=day_count,
            transaction_count=len(in_month),
        )
        return days

    def month_summary(self, year: int, month: int, transactions: Iterable[Transaction]) -> MonthData:
        """Month grid plus month-level totals."""
        return MonthData(year=year, month=month, days=tuple(self.month_data(year, month, transactions)))

    def timeline(self, transactions: Iterable[Transaction]) -> list[PeriodBucket]:
        """Days that have activity, most recent first.

        Transactions inside each day are also ordered most recent first.
        """
        grouped = self.group_by_day(transactions)
        localize = self.calendar.localize

        buckets = [
            self._bucket(
                start,
                Granularity.DAY,
                sorted(txns, key=lambda t: localize(t.date), reverse=True),
            )
            for start, txns in grouped.items()
        ]
        buckets.sort(key=lambda b: b.period_start, reverse=True)
        return buckets

    def week_dates(self, anchor: date | datetime) -> list[date]:
        """The seven dates of the week containing ``anchor``, in order."""
        first = self.calendar.week_start(self.calendar.local_date(anchor))
        return [first + timedelta(days=offset) for offset in range(7)]

    def period_summary(
        self,
        transactions: Iterable[Transaction],
        granularity: Granularity,
        anchor: date | datetime | None = None,
    ) -> PeriodBucket:
        """Bucket for the single period containing ``anchor`` (default: now)."""
        start = self.calendar.period_start(anchor if anchor is not None else self.calendar.now(), granularity)
        end = self.calendar.period_end(start, granularity)
        selected = [t for t in transactions if start <= self.calendar.localize(t.date) < end]
        return self._bucket(start, granularity, selected)

    def category_breakdown(self, transactions: Iterable[Transaction]) -> list[CategoryTotal]:
        """Expense totals per category, largest first.

        Uncategorized expenses are reported under ``category_id=None``.
        """
        totals: dict[str | None, Decimal] = defaultdict(lambda: Decimal("0"))
        counts: dict[str | None, int] = defaultdict(int)
        for txn in transactions:
            if not txn.is_expense:
                continue
            totals[txn.category_id] += txn.amount
            counts[txn.category_id] += 1

        breakdown = [
            CategoryTotal(category_id=key, amount=amount, transaction_count=counts[key])
            for key, amount in totals.items()
        ]
        breakdown.sort(key=lambda c: c.amount, reverse=True)
        return breakdown

"""Aggregate result types produced by the period aggregator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from visualcents.aggregation.calendar_config import Granularity
from visualcents.models import Transaction


def _sum_amounts(transactions: tuple[Transaction, ...], *, expense: bool) -> Decimal:
    return sum((t.amount for t in transactions if t.is_expense is expense), Decimal("0"))


@dataclass(frozen=True)
class PeriodBucket:
    """Transactions falling in ``[period_start, period_end)``."""

    period_start: datetime
    period_end: datetime
    granularity: Granularity
    transactions: tuple[Transaction, ...] = ()

    @property
    def total_expense(self) -> Decimal:
        return _sum_amounts(self.transactions, expense=True)

    @property
    def total_income(self) -> Decimal:
        return _sum_amounts(self.transactions, expense=False)

    @property
    def net(self) -> Decimal:
        return self.total_income - self.total_expense

    @property
    def has_transactions(self) -> bool:
        return bool(self.transactions)

    @property
    def day_number(self) -> int:
        return self.period_start.day


@dataclass(frozen=True)
class MonthData:
    """One calendar month rendered as a complete grid of day buckets."""

    year: int
    month: int
    days: tuple[PeriodBucket, ...]

    @property
    def total_expense(self) -> Decimal:
        return sum((d.total_expense for d in self.days), Decimal("0"))

    @property
    def total_income(self) -> Decimal:
        return sum((d.total_income for d in self.days), Decimal("0"))

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense

    @property
    def label(self) -> str:
        return f"{self.year}年{self.month}月"


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for one category."""

    category_id: str | None
    amount: Decimal
    transaction_count: int

"""Budget-vs-spend calculation for the current budget period."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

import structlog

from visualcents.aggregation.calendar_config import CalendarConfig, Granularity
from visualcents.models import Budget, BudgetPeriod, Transaction

logger = structlog.get_logger()


_PERIOD_GRANULARITY: dict[BudgetPeriod, Granularity] = {
    BudgetPeriod.WEEKLY: Granularity.WEEK,
    BudgetPeriod.MONTHLY: Granularity.MONTH,
    BudgetPeriod.YEARLY: Granularity.YEAR,
}


class BudgetStatus(str, Enum):
    """Coarse health of a budget."""

    OK = "ok"
    WARNING = "warning"
    EXCEEDED = "exceeded"


@dataclass(frozen=True)
class BudgetProgress:
    """Spending measured against a budget for one period.

    ``progress`` is the raw ``spent / limit`` ratio and may exceed 1.0.
    """

    period_start: datetime
    limit: Decimal
    spent: Decimal
    remaining: Decimal
    progress: float
    status: BudgetStatus

    @property
    def clamped_progress(self) -> float:
        """Progress capped to ``[0, 1]`` for progress bars and rings."""
        return max(0.0, min(self.progress, 1.0))


def current_period_start(
    period: BudgetPeriod,
    calendar: CalendarConfig,
    now: datetime | None = None,
) -> datetime:
    """First instant of the budget period containing ``now``."""
    anchor = now if now is not None else calendar.now()
    return calendar.period_start(anchor, _PERIOD_GRANULARITY[period])


def calculate_spent(
    budget: Budget,
    transactions: Iterable[Transaction],
    period_start: datetime,
    calendar: CalendarConfig,
) -> Decimal:
    """Sum of expenses on or after ``period_start`` that count towards ``budget``."""
    spent = Decimal("0")
    for txn in transactions:
        if not txn.is_expense:
            continue
        if budget.category_id is not None and txn.category_id != budget.category_id:
            continue
        if calendar.localize(txn.date) >= period_start:
            spent += txn.amount
    return spent


def calculate_budget_progress(
    budget: Budget,
    transactions: Iterable[Transaction],
    calendar: CalendarConfig | None = None,
    now: datetime | None = None,
) -> BudgetProgress:
    """Measure spending against a budget for its current period.

    Args:
        budget: Budget to evaluate.
        transactions: Transactions to consider; income is ignored.
        calendar: Calendar to find the period start with. If None, built from settings.
        now: Reference instant. If None, the current time.

    Returns:
        BudgetProgress with a never-negative ``remaining`` and an unclamped ``progress``.
    """

    calendar = calendar or CalendarConfig.from_settings()
    period_start = current_period_start(budget.period, calendar, now)
    spent = calculate_spent(budget, transactions, period_start, calendar)

    limit = budget.limit_amount
    remaining = max(Decimal("0"), limit - spent)
    progress = float(spent / limit) if limit > 0 else 0.0

    if progress >= 1.0:
        status = BudgetStatus.EXCEEDED
    elif limit > 0 and progress >= budget.warning_threshold:
        status = BudgetStatus.WARNING
    else:
        status = BudgetStatus.OK

    logger.debug(
        "budget_progress_calculated",
        budget_id=budget.id,
        period=budget.period.value,
        spent=str(spent),
        limit=str(limit),
        status=status.value,
    )

    return BudgetProgress(
        period_start=period_start,
        limit=limit,
        spent=spent,
        remaining=remaining,
        progress=progress,
        status=status,
    )

"""Budget and savings goal models."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class BudgetPeriod(str, Enum):
    """Recurring window a budget limit applies to."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Budget(BaseModel):
    """A spending limit for one period, optionally scoped to a category.

    A budget without ``category_id`` counts every expense.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique budget ID")
    limit_amount: Decimal = Field(ge=0, description="Spending limit for one period")
    period: BudgetPeriod = Field(default=BudgetPeriod.MONTHLY, description="Budget period type")
    notifications_enabled: bool = Field(
        default=True,
        description="Whether to notify when approaching the limit",
    )
    warning_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Progress ratio at which the budget is reported as a warning",
    )
    category_id: str | None = Field(default=None, description="Category this budget applies to")


class GoalStatus(str, Enum):
    """Lifecycle state of a savings goal."""

    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class SavingsGoal(BaseModel):
    """Money being set aside towards a target amount."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique goal ID")
    title: str = Field(description="Goal title")
    target_amount: Decimal = Field(ge=0, description="Amount to reach")
    current_amount: Decimal = Field(default=Decimal("0"), ge=0, description="Amount saved so far")
    deadline: date | None = Field(default=None, description="Optional target date")
    status: GoalStatus = Field(default=GoalStatus.ACTIVE, description="Goal status")
    notes: str | None = Field(default=None, description="Optional notes")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")
    completed_at: datetime | None = Field(default=None, description="When the target was reached")

    @property
    def progress(self) -> float:
        """Saved fraction of the target, capped at 1.0."""
        if self.target_amount <= 0:
            return 0.0
        return min(1.0, float(self.current_amount / self.target_amount))

    @property
    def remaining_amount(self) -> Decimal:
        return max(Decimal("0"), self.target_amount - self.current_amount)

    def days_remaining(self, today: date | None = None) -> int | None:
        """Whole days until the deadline, never negative; None without a deadline."""
        if self.deadline is None:
            return None
        today = today or date.today()
        return max(0, (self.deadline - today).days)

    def daily_savings_needed(self, today: date | None = None) -> Decimal | None:
        """Amount to save per day to hit the target by the deadline."""
        days = self.days_remaining(today)
        if not days:
            return None
        return self.remaining_amount / Decimal(days)

    def deposit(self, amount: Decimal, now: datetime | None = None) -> None:
        """Add money to the goal, completing it once the target is reached."""
        self.current_amount += amount
        if self.current_amount >= self.target_amount and self.status != GoalStatus.COMPLETED:
            self.status = GoalStatus.COMPLETED
            self.completed_at = now or datetime.now()

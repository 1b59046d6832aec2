"""Budget progress calculation."""

from .progress import BudgetProgress, BudgetStatus, calculate_budget_progress, current_period_start

__all__ = ["BudgetProgress", "BudgetStatus", "calculate_budget_progress", "current_period_start"]

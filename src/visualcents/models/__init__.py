"""Data models for VisualCents.

This module contains Pydantic models for data validation and serialization.
"""

from .accounts import Asset, AssetType, Category, default_assets, default_categories, total_balance
from .planning import Budget, BudgetPeriod, GoalStatus, SavingsGoal
from .receipt import ExtractedReceipt
from .transaction import Transaction, TransactionSource

__all__ = [
    "Asset",
    "AssetType",
    "Budget",
    "BudgetPeriod",
    "Category",
    "ExtractedReceipt",
    "GoalStatus",
    "SavingsGoal",
    "Transaction",
    "TransactionSource",
    "default_assets",
    "default_categories",
    "total_balance",
]

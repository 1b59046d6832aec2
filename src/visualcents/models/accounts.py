"""Categories and assets (the accounts money moves through)."""

from __future__ import annotations

import uuid
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class Category(BaseModel):
    """Spending or income category."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique category ID")
    name: str = Field(description="Display name")
    icon_name: str = Field(default="ellipsis.circle.fill", description="Icon identifier")
    color_hex: str = Field(default="95A5A6", description="Color as hex RGB")
    sort_order: int = Field(default=0, description="Position in category lists")
    is_default: bool = Field(default=False, description="Whether this is a built-in category")


def default_categories() -> list[Category]:
    """Built-in categories seeded for a new ledger."""
    seeds = [
        ("Food & Dining", "fork.knife", "FF9F68"),
        ("Transport", "car.fill", "5DADE2"),
        ("Shopping", "bag.fill", "AF7AC5"),
        ("Entertainment", "gamecontroller.fill", "45B7D1"),
        ("Health", "heart.fill", "E74C3C"),
        ("Income", "arrow.down.circle.fill", "58D68D"),
        ("Other", "ellipsis.circle.fill", "95A5A6"),
    ]
    return [
        Category(name=name, icon_name=icon, color_hex=color, sort_order=i, is_default=True)
        for i, (name, icon, color) in enumerate(seeds)
    ]


class AssetType(str, Enum):
    """Kind of account."""

    CASH = "cash"
    DEBIT = "debit"
    CREDIT = "credit"
    VIRTUAL = "virtual"
    INVESTMENT = "investment"


class Asset(BaseModel):
    """An account holding a balance, e.g. cash, a bank card or a payment wallet."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique asset ID")
    name: str = Field(description="Display name")
    type: AssetType = Field(default=AssetType.CASH, description="Account kind")
    balance: Decimal = Field(default=Decimal("0"), description="Current balance")
    currency: str = Field(default="CNY", description="ISO-4217 currency code")
    included_in_total: bool = Field(
        default=True,
        description="Whether the balance counts towards the net total",
    )
    sort_order: int = Field(default=0, description="Position in account lists")


def default_assets(currency: str = "CNY") -> list[Asset]:
    """Accounts seeded for a new ledger."""
    seeds = [
        ("现金", AssetType.CASH),
        ("微信支付", AssetType.VIRTUAL),
        ("支付宝", AssetType.VIRTUAL),
        ("银行卡", AssetType.DEBIT),
    ]
    return [
        Asset(name=name, type=kind, currency=currency, sort_order=i)
        for i, (name, kind) in enumerate(seeds)
    ]


def total_balance(assets: list[Asset]) -> Decimal:
    """Sum of balances over assets included in the total."""
    return sum((a.balance for a in assets if a.included_in_total), Decimal("0"))

"""Transaction record shared by the receipt and aggregation modules."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class TransactionSource(str, Enum):
    """How a transaction entered the ledger."""

    MANUAL = "manual"
    OCR = "ocr"
    IMPORTED = "imported"


class Transaction(BaseModel):
    """A single expense or income entry.

    The amount is always non-negative; direction is carried by ``is_expense``.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique transaction ID")
    amount: Decimal = Field(ge=0, description="Non-negative monetary amount")
    date: datetime = Field(description="Date and time of the transaction")
    is_expense: bool = Field(default=True, description="True for outflows, False for inflows")
    category_id: str | None = Field(default=None, description="Category reference, if any")

    merchant_name: str = Field(default="", description="Merchant or income source name")
    notes: str | None = Field(default=None, description="Optional user notes")
    source: TransactionSource = Field(
        default=TransactionSource.MANUAL,
        description="How the transaction was created",
    )
    asset_id: str | None = Field(default=None, description="Account the money moved through")

    @property
    def signed_amount(self) -> Decimal:
        """Negative for expenses, positive for income."""
        return -self.amount if self.is_expense else self.amount

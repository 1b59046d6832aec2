"""Structured fields recovered from OCR receipt text.

Every field is independently optional: OCR text is noisy and a partial result
is the normal case. Callers are expected to ask the user to fill the gaps
before turning the receipt into a transaction.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from visualcents.exceptions import ValidationError
from visualcents.models.transaction import Transaction, TransactionSource


class ExtractedReceipt(BaseModel):
    """Best-effort receipt fields plus the text they were read from."""

    merchant_name: str | None = Field(default=None, description="First non-empty line of the text")
    amount: Decimal | None = Field(default=None, description="First monetary value found")
    date: dt.date | None = Field(default=None, description="First calendar date found")
    raw_text: str = Field(default="", description="Unmodified OCR text")

    @property
    def is_complete(self) -> bool:
        """Whether every extractable field was found."""
        return self.merchant_name is not None and self.amount is not None and self.date is not None

    def to_transaction(
        self,
        *,
        amount: Decimal | None = None,
        merchant_name: str | None = None,
        on: dt.date | None = None,
        is_expense: bool = True,
        category_id: str | None = None,
        notes: str | None = None,
        now: dt.datetime | None = None,
    ) -> Transaction:
        """Build a transaction from the extracted fields and user corrections.

        Explicit arguments override what was extracted. When no date is known
        the transaction is dated ``now``.

        Raises:
            ValidationError: If neither the receipt nor the caller supplies an amount.
        """

        final_amount = amount if amount is not None else self.amount
        if final_amount is None:
            raise ValidationError("Receipt has no amount; one must be supplied")

        final_day = on or self.date
        if final_day is not None:
            when = dt.datetime.combine(final_day, dt.time())
        else:
            when = now or dt.datetime.now()

        return Transaction(
            amount=final_amount,
            date=when,
            is_expense=is_expense,
            category_id=category_id,
            merchant_name=merchant_name or self.merchant_name or "",
            notes=notes,
            source=TransactionSource.OCR,
        )

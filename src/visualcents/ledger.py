"""Reading transaction lists exported as JSON.

The ledger file is a JSON array of transaction objects, e.g.::

    [{"amount": "32.00", "date": "2024-01-15T12:30:00", "is_expense": true}]
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from visualcents.exceptions import ValidationError
from visualcents.models import Transaction

logger = structlog.get_logger()

_TRANSACTIONS = TypeAdapter(list[Transaction])


def parse_transactions(data: str | bytes) -> list[Transaction]:
    """Validate a JSON array of transactions.

    Raises:
        ValidationError: If the document is not a valid transaction list.
    """
    try:
        return _TRANSACTIONS.validate_json(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid transaction data: {exc}") from exc


def load_transactions(path: Path) -> list[Transaction]:
    """Load transactions from a JSON ledger file."""
    transactions = parse_transactions(Path(path).read_bytes())
    logger.info("ledger_loaded", path=str(path), transaction_count=len(transactions))
    return transactions

"""Pytest configuration and shared fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def mock_settings():
    """Provide mock settings for testing."""
    from visualcents.config import Settings

    return Settings(
        timezone="Asia/Shanghai",
        first_weekday=0,
        log_level="DEBUG",
        debug=True,
    )


@pytest.fixture
def calendar():
    """Provide a Monday-first calendar in China Standard Time."""
    from visualcents.aggregation import CalendarConfig

    return CalendarConfig(timezone="Asia/Shanghai", first_weekday=0)


@pytest.fixture
def aggregator(calendar):
    from visualcents.aggregation import PeriodAggregator

    return PeriodAggregator(calendar)


@pytest.fixture
def sample_receipt_text() -> str:
    """Provide OCR text from a mobile payment screenshot."""
    return "星巴克\n¥32.00\n2024-01-15"


@pytest.fixture
def sample_transactions():
    """Provide a small ledger spanning two months."""
    from visualcents.models import Transaction

    return [
        Transaction(amount=Decimal("32.00"), date=datetime(2024, 1, 15, 9, 30), merchant_name="星巴克", category_id="food"),
        Transaction(amount=Decimal("18.50"), date=datetime(2024, 1, 15, 19, 5), merchant_name="地铁", category_id="transport"),
        Transaction(
            amount=Decimal("8000"),
            date=datetime(2024, 1, 10, 10, 0),
            is_expense=False,
            merchant_name="Salary",
            category_id="income",
        ),
        Transaction(amount=Decimal("120"), date=datetime(2024, 1, 31, 23, 59), merchant_name="超市", category_id="food"),
        Transaction(amount=Decimal("45"), date=datetime(2024, 2, 1, 0, 0), merchant_name="午餐", category_id="food"),
    ]

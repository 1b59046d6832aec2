"""Heuristic field extraction from OCR'd receipt and payment screenshots.

Extraction is a small rule engine: each field has an ordered tuple of
``ExtractionRule`` objects and the first rule that yields a value wins. Rule
order is the priority; an earlier rule wins even when a later rule would match
earlier in the text.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Generic, TypeVar

import structlog

from visualcents.aggregation.calendar_config import CalendarConfig
from visualcents.config import Settings
from visualcents.models import ExtractedReceipt

logger = structlog.get_logger()

T = TypeVar("T")

_NUMBER = r"([0-9]+\.?[0-9]*)"


@dataclass(frozen=True)
class ExtractionRule(Generic[T]):
    """A named pattern plus the parser for its first capture group.

    ``parse`` returns None when the matched text is not a usable value.
    """

    name: str
    pattern: re.Pattern[str]
    parse: Callable[[re.Match[str]], T | None]


def _parse_decimal(match: re.Match[str]) -> Decimal | None:
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def _labeled_amount(name: str, label: str) -> ExtractionRule[Decimal]:
    return ExtractionRule(name, re.compile(label + r"[：:]?\s*" + _NUMBER), _parse_decimal)


AMOUNT_RULES: tuple[ExtractionRule[Decimal], ...] = (
    ExtractionRule("yen_sign", re.compile("¥" + _NUMBER), _parse_decimal),
    ExtractionRule("fullwidth_yen_sign", re.compile("￥" + _NUMBER), _parse_decimal),
    _labeled_amount("amount_label", "金额"),
    _labeled_amount("total_label", "合计"),
    _labeled_amount("grand_total_label", "总计"),
    _labeled_amount("paid_label", "实付"),
)

_FULL_DATE = re.compile(r"([0-9]{4})([-/])([0-9]{1,2})([-/])([0-9]{1,2})")
_MONTH_DAY = re.compile(r"([0-9]{1,2})月([0-9]{1,2})日")
_LINE_BREAK = re.compile(r"[\n\r\x0b\x0c\x85\u2028\u2029]")


def _parse_full_date(match: re.Match[str]) -> date | None:
    year, sep1, month, sep2, day = match.groups()
    # 2024-01/15 is not a date in either accepted format.
    if sep1 != sep2:
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def infer_year(month: int, day: int, today: date, policy: str = "current_year") -> date | None:
    """Resolve a month/day pair without a year.

    Args:
        month: Month number.
        day: Day of month.
        today: Reference date.
        policy: ``current_year`` uses today's year. ``not_future`` uses the
            previous year when the date would otherwise fall after today.

    Returns:
        The resolved date, or None if the pair is not a valid date in the chosen year.
    """

    try:
        candidate = date(today.year, month, day)
    except ValueError:
        candidate = None

    if policy == "not_future" and (candidate is None or candidate > today):
        try:
            return date(today.year - 1, month, day)
        except ValueError:
            return candidate if candidate is not None and candidate <= today else None

    return candidate


class ReceiptTextExtractor:
    """Turns raw OCR text into best-effort receipt fields.

    ``extract`` never raises; a field that cannot be found is left as None.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        calendar: CalendarConfig | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            settings: Application settings. If None, uses default settings.
            calendar: Calendar used to decide "today" for year inference.
                If None, built from settings.
        """
        from visualcents.config import get_settings

        self.settings = settings or get_settings()
        self.calendar = calendar or CalendarConfig.from_settings(self.settings)
        self.year_policy = self.settings.partial_date_year_policy
        self.amount_rules = AMOUNT_RULES

    def date_rules(self, today: date) -> tuple[ExtractionRule[date], ...]:
        """Date rules in priority order, with month/day dates resolved against ``today``."""

        def parse_month_day(match: re.Match[str]) -> date | None:
            return infer_year(int(match.group(1)), int(match.group(2)), today, self.year_policy)

        return (
            ExtractionRule("full_date", _FULL_DATE, _parse_full_date),
            ExtractionRule("month_day", _MONTH_DAY, parse_month_day),
        )

    @staticmethod
    def extract_merchant_name(text: str) -> str | None:
        """First non-empty line, verbatim."""
        for line in _LINE_BREAK.split(text):
            if line:
                return line
        return None

    @staticmethod
    def extract_amount(text: str, rules: tuple[ExtractionRule[Decimal], ...] = AMOUNT_RULES) -> Decimal | None:
        """Amount from the first rule whose pattern matches anywhere in ``text``.

        The search stops at the first matching pattern even when its number
        cannot be parsed.
        """
        for rule in rules:
            match = rule.pattern.search(text)
            if match:
                return rule.parse(match)
        return None

    def extract_date(self, text: str, today: date | None = None) -> date | None:
        """Date from the first rule whose leftmost match parses.

        A match that is not a valid date falls through to the next rule.
        """
        for rule in self.date_rules(today or self.calendar.today()):
            match = rule.pattern.search(text)
            if not match:
                continue
            value = rule.parse(match)
            if value is not None:
                return value
        return None

    def extract(self, raw_text: str, today: date | None = None) -> ExtractedReceipt:
        """Extract merchant, amount and date from OCR text.

        Args:
            raw_text: Text returned by the OCR service; may be empty.
            today: Reference date for month/day-only dates. If None, today in
                the configured calendar.

        Returns:
            ExtractedReceipt with the unmodified input in ``raw_text``.
        """

        text = raw_text or ""
        receipt = ExtractedReceipt(
            merchant_name=self.extract_merchant_name(text),
            amount=self.extract_amount(text, self.amount_rules),
            date=self.extract_date(text, today),
            raw_text=text,
        )

        logger.debug(
            "receipt_extracted",
            text_length=len(text),
            has_merchant=receipt.merchant_name is not None,
            has_amount=receipt.amount is not None,
            has_date=receipt.date is not None,
        )
        return receipt

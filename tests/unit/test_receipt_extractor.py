"""Unit tests for receipt text extraction."""

from datetime import date
from decimal import Decimal

import pytest

from visualcents.config import Settings
from visualcents.receipt import ReceiptTextExtractor, infer_year


@pytest.fixture
def extractor(mock_settings, calendar) -> ReceiptTextExtractor:
    return ReceiptTextExtractor(mock_settings, calendar)


class TestMerchantName:
    """Test suite for merchant name extraction."""

    def test_first_line_is_merchant(self, extractor, sample_receipt_text) -> None:
        receipt = extractor.extract(sample_receipt_text)

        assert receipt.merchant_name == "星巴克"

    def test_leading_blank_lines_skipped(self, extractor) -> None:
        receipt = extractor.extract("\n\r\n瑞幸咖啡\n¥9.9")

        assert receipt.merchant_name == "瑞幸咖啡"

    def test_line_kept_verbatim(self, extractor) -> None:
        receipt = extractor.extract("  全家 FamilyMart  \n合计:12")

        assert receipt.merchant_name == "  全家 FamilyMart  "

    def test_separator_controls_are_not_line_breaks(self, extractor) -> None:
        assert extractor.extract_merchant_name("A\x1cB\nC") == "A\x1cB"
        assert extractor.extract_merchant_name("A\x1dB\x1eC") == "A\x1dB\x1eC"

    def test_unicode_line_separators_split(self, extractor) -> None:
        assert extractor.extract_merchant_name("\u2028全家\u2029¥12") == "全家"
        assert extractor.extract_merchant_name("\x0c\x85罗森\x0b合计:5") == "罗森"

    def test_empty_text(self, extractor) -> None:
        receipt = extractor.extract("")

        assert receipt.merchant_name is None
        assert receipt.amount is None
        assert receipt.date is None
        assert receipt.raw_text == ""


class TestAmount:
    """Test suite for amount extraction."""

    def test_yen_sign(self, extractor, sample_receipt_text) -> None:
        receipt = extractor.extract(sample_receipt_text)

        assert receipt.amount == Decimal("32.00")

    def test_fullwidth_yen_sign(self, extractor) -> None:
        receipt = extractor.extract("美团外卖\n￥45.5")

        assert receipt.amount == Decimal("45.5")

    def test_pattern_priority_beats_position(self, extractor) -> None:
        """The yen sign rule wins even though both rules match."""
        receipt = extractor.extract("合计:20 ¥10")

        assert receipt.amount == Decimal("10")

    def test_yen_before_label(self, extractor) -> None:
        receipt = extractor.extract("¥10 合计:20")

        assert receipt.amount == Decimal("10")

    def test_leftmost_match_within_pattern(self, extractor) -> None:
        receipt = extractor.extract("单价 ¥3.50\n¥7.00")

        assert receipt.amount == Decimal("3.50")

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("金额：88.80", Decimal("88.80")),
            ("合计 156", Decimal("156")),
            ("总计:1024.00", Decimal("1024.00")),
            ("实付12.5", Decimal("12.5")),
        ],
    )
    def test_labeled_amounts(self, extractor, text, expected) -> None:
        assert extractor.extract(text).amount == expected

    def test_label_order_is_priority(self, extractor) -> None:
        """An earlier label in the rule list wins over one earlier in the text."""
        receipt = extractor.extract("实付 30\n金额 35")

        assert receipt.amount == Decimal("35")

    def test_trailing_decimal_point(self, extractor) -> None:
        receipt = extractor.extract("¥32.")

        assert receipt.amount == Decimal("32")

    def test_no_amount(self, extractor) -> None:
        receipt = extractor.extract("no amount here")

        assert receipt.amount is None


class TestDate:
    """Test suite for date extraction."""

    def test_iso_date(self, extractor, sample_receipt_text) -> None:
        receipt = extractor.extract(sample_receipt_text)

        assert receipt.date == date(2024, 1, 15)

    def test_slash_date(self, extractor) -> None:
        receipt = extractor.extract("2024/03/05")

        assert receipt.date == date(2024, 3, 5)

    def test_single_digit_components(self, extractor) -> None:
        receipt = extractor.extract("交易时间 2024-3-5 12:01")

        assert receipt.date == date(2024, 3, 5)

    def test_month_day_uses_current_year(self, extractor, calendar) -> None:
        receipt = extractor.extract("3月5日")

        assert receipt.date == date(calendar.today().year, 3, 5)

    def test_month_day_with_explicit_today(self, extractor) -> None:
        receipt = extractor.extract("12月31日 消费", today=date(2025, 1, 2))

        assert receipt.date == date(2025, 12, 31)

    def test_full_date_preferred_over_month_day(self, extractor) -> None:
        receipt = extractor.extract("1月2日\n2023-11-20", today=date(2024, 6, 1))

        assert receipt.date == date(2023, 11, 20)

    def test_invalid_full_date_falls_through(self, extractor) -> None:
        receipt = extractor.extract("2024-02-30 2月28日", today=date(2024, 6, 1))

        assert receipt.date == date(2024, 2, 28)

    def test_mixed_separators_not_a_date(self, extractor) -> None:
        receipt = extractor.extract("2024-01/15")

        assert receipt.date is None

    def test_no_date(self, extractor) -> None:
        assert extractor.extract("星巴克 ¥32").date is None

    def test_not_future_policy(self, calendar) -> None:
        extractor = ReceiptTextExtractor(Settings(partial_date_year_policy="not_future"), calendar)

        receipt = extractor.extract("12月31日", today=date(2025, 1, 2))

        assert receipt.date == date(2024, 12, 31)


class TestInferYear:
    """Test suite for month/day year inference."""

    def test_current_year(self) -> None:
        assert infer_year(3, 5, date(2026, 10, 19)) == date(2026, 3, 5)

    def test_not_future_keeps_past_dates(self) -> None:
        assert infer_year(3, 5, date(2026, 10, 19), "not_future") == date(2026, 3, 5)

    def test_not_future_keeps_today(self) -> None:
        assert infer_year(10, 19, date(2026, 10, 19), "not_future") == date(2026, 10, 19)

    def test_leap_day_in_common_year(self) -> None:
        assert infer_year(2, 29, date(2025, 6, 1)) is None
        assert infer_year(2, 29, date(2025, 6, 1), "not_future") == date(2024, 2, 29)

    def test_invalid_month(self) -> None:
        assert infer_year(13, 1, date(2025, 6, 1)) is None


class TestExtract:
    """Test suite for the whole extraction pass."""

    def test_raw_text_preserved(self, extractor) -> None:
        text = "星巴克\r\n¥32.00\n\n2024-01-15  "
        receipt = extractor.extract(text)

        assert receipt.raw_text == text

    def test_idempotent(self, extractor, sample_receipt_text) -> None:
        first = extractor.extract(sample_receipt_text, today=date(2024, 2, 1))
        second = extractor.extract(sample_receipt_text, today=date(2024, 2, 1))

        assert first == second

    def test_payment_screenshot(self, extractor) -> None:
        text = "肯德基(人民广场店)\n支付成功\n实付 ¥39.50\n支付时间 2024年1月15日 12:30\n1月15日"
        receipt = extractor.extract(text, today=date(2024, 3, 1))

        assert receipt.merchant_name == "肯德基(人民广场店)"
        assert receipt.amount == Decimal("39.50")
        assert receipt.date == date(2024, 1, 15)
        assert receipt.is_complete is True

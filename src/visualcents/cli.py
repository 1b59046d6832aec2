"""Command-line interface for VisualCents.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

import structlog

from visualcents import __version__
from visualcents.aggregation import CalendarConfig, Granularity, PeriodAggregator
from visualcents.budget import calculate_budget_progress
from visualcents.config import get_settings
from visualcents.entry import evaluate_expression
from visualcents.exceptions import VisualCentsError
from visualcents.ledger import load_transactions
from visualcents.models import Budget, BudgetPeriod
from visualcents.receipt import ReceiptTextExtractor, decode_ocr_response

logger = structlog.get_logger()


def _decimal_arg(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a decimal amount: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise argparse.ArgumentTypeError(f"amount must be a non-negative number: {value!r}")
    return amount


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="visualcents", description="VisualCents bookkeeping tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser("extract", help="Extract receipt fields from OCR text")
    extract_parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File holding the OCR text (default: stdin)",
    )
    extract_parser.add_argument(
        "--ocr-json",
        action="store_true",
        help="Treat the input as a raw OCR service JSON response",
    )
    extract_parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference date for month/day-only receipt dates (YYYY-MM-DD)",
    )

    month_parser = subparsers.add_parser("month", help="Show a month as a day-by-day grid")
    month_parser.add_argument("ledger", type=Path, help="JSON file with transactions")
    month_parser.add_argument("--year", type=int, required=True)
    month_parser.add_argument("--month", type=int, required=True)
    month_parser.add_argument(
        "--active-only",
        action="store_true",
        help="Only print days that have transactions",
    )

    timeline_parser = subparsers.add_parser("timeline", help="List days with activity, newest first")
    timeline_parser.add_argument("ledger", type=Path, help="JSON file with transactions")
    timeline_parser.add_argument("--limit", type=int, default=None, help="Max days to show")

    week_parser = subparsers.add_parser("week", help="Show the dates of a week")
    week_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Any date in the week (default: today)",
    )

    budget_parser = subparsers.add_parser("budget", help="Show spending against a budget")
    budget_parser.add_argument("ledger", type=Path, help="JSON file with transactions")
    budget_parser.add_argument("--limit", type=_decimal_arg, required=True, help="Budget limit")
    budget_parser.add_argument(
        "--period",
        choices=[p.value for p in BudgetPeriod],
        default=BudgetPeriod.MONTHLY.value,
    )
    budget_parser.add_argument("--category", default=None, help="Restrict to one category ID")
    budget_parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Reference time (default: now)",
    )

    stats_parser = subparsers.add_parser("stats", help="Totals and category breakdown for a period")
    stats_parser.add_argument("ledger", type=Path, help="JSON file with transactions")
    stats_parser.add_argument(
        "--period",
        choices=[g.value for g in Granularity],
        default=Granularity.MONTH.value,
    )
    stats_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Any date in the period (default: today)",
    )

    calc_parser = subparsers.add_parser("calc", help="Evaluate a keypad amount expression")
    calc_parser.add_argument("expression", help="Expression such as 25+12.5-3")

    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _cmd_extract(args: argparse.Namespace) -> int:
    text = _read_input(args.input)
    if args.ocr_json:
        text = decode_ocr_response(text)

    receipt = ReceiptTextExtractor().extract(text, today=args.today)
    print(receipt.model_dump_json(indent=2))
    return 0


def _cmd_month(args: argparse.Namespace) -> int:
    aggregator = PeriodAggregator()
    summary = aggregator.month_summary(args.year, args.month, load_transactions(args.ledger))

    print(summary.label)
    for day in summary.days:
        if args.active_only and not day.has_transactions:
            continue
        print(
            f"{day.period_start.date().isoformat()}\t"
            f"-{day.total_expense}\t+{day.total_income}\t{len(day.transactions)} txn"
        )
    print(f"Expense: {summary.total_expense}  Income: {summary.total_income}  Balance: {summary.balance}")
    return 0


def _cmd_timeline(args: argparse.Namespace) -> int:
    aggregator = PeriodAggregator()
    days = aggregator.timeline(load_transactions(args.ledger))
    if args.limit is not None:
        days = days[: args.limit]

    for day in days:
        print(f"{day.period_start.date().isoformat()}\tnet {day.net}")
        for txn in day.transactions:
            sign = "-" if txn.is_expense else "+"
            name = txn.merchant_name or "(no merchant)"
            print(f"  {txn.date.strftime('%H:%M')}\t{sign}{txn.amount}\t{name}")
    return 0


def _cmd_week(args: argparse.Namespace) -> int:
    aggregator = PeriodAggregator()
    anchor = args.date or aggregator.calendar.today()
    for day in aggregator.week_dates(anchor):
        marker = "*" if day == anchor else " "
        print(f"{marker} {day.isoformat()} {day.strftime('%a')}")
    return 0


def _cmd_budget(args: argparse.Namespace) -> int:
    settings = get_settings()
    budget = Budget(
        limit_amount=args.limit,
        period=BudgetPeriod(args.period),
        warning_threshold=settings.budget_warning_threshold,
        category_id=args.category,
    )
    result = calculate_budget_progress(
        budget,
        load_transactions(args.ledger),
        CalendarConfig.from_settings(settings),
        now=args.now,
    )

    print(f"Period start: {result.period_start.isoformat()}")
    print(f"Spent: {result.spent} / {result.limit}")
    print(f"Remaining: {result.remaining}")
    print(f"Progress: {result.progress:.0%} ({result.status.value})")
    return 0


def _cmd_stats(args: argparse.Namespace) -> int:
    aggregator = PeriodAggregator()
    transactions = load_transactions(args.ledger)
    bucket = aggregator.period_summary(transactions, Granularity(args.period), anchor=args.date)

    print(f"Period: {bucket.period_start.date().isoformat()} -> {bucket.period_end.date().isoformat()}")
    print(f"Transactions: {len(bucket.transactions)}")
    print(f"Income: {bucket.total_income}")
    print(f"Expense: {bucket.total_expense}")
    print(f"Balance: {bucket.net}")

    breakdown = aggregator.category_breakdown(bucket.transactions)
    if breakdown:
        print("\nExpense by category:")
        for item in breakdown:
            print(f"- {item.category_id or 'uncategorized'}: {item.amount} ({item.transaction_count} txn)")
    return 0


def _cmd_calc(args: argparse.Namespace) -> int:
    print(evaluate_expression(args.expression))
    return 0


_COMMANDS = {
    "extract": _cmd_extract,
    "month": _cmd_month,
    "timeline": _cmd_timeline,
    "week": _cmd_week,
    "budget": _cmd_budget,
    "stats": _cmd_stats,
    "calc": _cmd_calc,
}


def main(args: list[str] | None = None) -> int:
    """Main entry point for the VisualCents CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, 1 for domain errors, 2 for usage errors).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()

    # Configure logging; stdout is reserved for command output.
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

    logger.debug("visualcents_started", version=__version__, debug=settings.debug)

    parser = _build_parser()
    parsed = parser.parse_args(args)

    handler = _COMMANDS.get(parsed.command)
    if handler is None:
        logger.error("unknown_command", command=parsed.command)
        return 2

    try:
        return handler(parsed)
    except (VisualCentsError, OSError) as exc:
        logger.error("command_failed", command=parsed.command, error=str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())

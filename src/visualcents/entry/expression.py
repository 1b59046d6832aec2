"""Running-total arithmetic for manual amount entry.

Amounts are typed on a keypad that only knows digits, a decimal point, ``+``
and ``-``. The expression is kept as a string (e.g. ``"25+12.5-3"``); the
functions here edit it key by key and evaluate it to a ``Decimal``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

MAX_EXPRESSION_LENGTH = 15

_OPERATORS = "+-"


def _last_number_segment(expression: str) -> str:
    segment = expression
    for op in _OPERATORS:
        segment = segment.replace(op, " ")
    return segment.split(" ")[-1]


def append_digit(expression: str, digit: str) -> str:
    """Append a digit, replacing a lone leading zero."""
    if expression == "0":
        return digit
    if len(expression) < MAX_EXPRESSION_LENGTH:
        return expression + digit
    return expression


def append_decimal(expression: str) -> str:
    """Append a decimal point unless the current number already has one."""
    if "." in _last_number_segment(expression):
        return expression
    if not expression or expression[-1] in _OPERATORS:
        return expression + "0."
    return expression + "."


def append_operator(expression: str, op: str) -> str:
    """Append ``+`` or ``-``.

    Only ``-`` may start an expression, and a trailing operator is replaced
    rather than stacked.
    """
    if op not in _OPERATORS:
        raise ValueError(f"Unsupported operator: {op!r}")
    if not expression:
        return "-" if op == "-" else ""
    if expression[-1] in _OPERATORS:
        expression = expression[:-1]
    return expression + op


def backspace(expression: str) -> str:
    return expression[:-1]


def _to_decimal(value: str) -> Decimal | None:
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def evaluate_expression(expression: str) -> Decimal:
    """Evaluate a ``+``/``-`` expression left to right.

    Trailing operators and decimal points are ignored. A sign at the start or
    directly after another operator belongs to the following number. Segments
    that are not numbers are skipped; an empty expression evaluates to zero.
    """

    expr = expression.rstrip("+-.")
    if not expr:
        return Decimal("0")

    result = Decimal("0")
    current = ""
    current_op = "+"

    def apply(number: str, op: str) -> None:
        nonlocal result
        value = _to_decimal(number)
        if value is None:
            return
        result = result + value if op == "+" else result - value

    for index, char in enumerate(expr):
        if char in _OPERATORS and index > 0 and expr[index - 1] not in _OPERATORS:
            apply(current, current_op)
            current = ""
            current_op = char
        else:
            current += char

    apply(current, current_op)
    return result

"""Manual amount entry helpers."""

from .expression import append_decimal, append_digit, append_operator, backspace, evaluate_expression

__all__ = ["append_decimal", "append_digit", "append_operator", "backspace", "evaluate_expression"]

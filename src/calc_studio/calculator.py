"""
Calculator for Calc Studio.

Provides the four basic arithmetic operations used by the demo page,
the JSON API and the CLI.
"""

import math
import operator
from typing import Callable, Union

import structlog

from calc_studio.models import Operation

logger = structlog.get_logger()

Number = Union[int, float]

DIVISION_BY_ZERO_MESSAGE = "Division by zero is not allowed"
OUT_OF_RANGE_MESSAGE = "Result is out of range"

# Calculations shown on the demo page and by `calc demo`
DEMO_CALCULATIONS: list[tuple[Operation, int, int]] = [
    (Operation.ADD, 5, 3),
    (Operation.SUBTRACT, 10, 4),
    (Operation.MULTIPLY, 7, 6),
    (Operation.DIVIDE, 20, 4),
]


class CalculatorError(Exception):
    """Base exception for calculator errors."""
    pass


class InvalidArgumentError(CalculatorError, ValueError):
    """Raised when an argument is outside the domain of an operation."""
    pass


def _check_operand(value: object, name: str) -> None:
    # bool is an int subclass but not a numeric operand here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be int or float, got {type(value).__name__}")


def _is_finite(value: Number) -> bool:
    return isinstance(value, int) or math.isfinite(value)


def _describe(value: Number) -> str:
    """Short form of an operand for log context."""
    if isinstance(value, int) and value.bit_length() > 64:
        return f"<int of {value.bit_length()} bits>"
    return repr(value)


def _compute(fn: Callable[[Number, Number], Number], a: Number, b: Number) -> Number:
    """
    Apply fn to two checked operands.

    Finite operands whose result does not fit in a float (int-to-float
    conversion overflow, or a float result of inf) raise
    InvalidArgumentError. Non-finite operands keep plain float semantics.
    """
    _check_operand(a, "a")
    _check_operand(b, "b")
    try:
        result = fn(a, b)
    except OverflowError:
        result = math.inf

    if (
        isinstance(result, float)
        and not math.isfinite(result)
        and _is_finite(a)
        and _is_finite(b)
    ):
        logger.warning("Result out of range", a=_describe(a), b=_describe(b))
        raise InvalidArgumentError(OUT_OF_RANGE_MESSAGE)
    return result


class Calculator:
    """A stateless calculator for the four elementary operations."""

    def add(self, a: Number, b: Number) -> Number:
        """Add two numbers."""
        return _compute(operator.add, a, b)

    def subtract(self, a: Number, b: Number) -> Number:
        """Subtract b from a."""
        return _compute(operator.sub, a, b)

    def multiply(self, a: Number, b: Number) -> Number:
        """Multiply two numbers."""
        return _compute(operator.mul, a, b)

    def divide(self, a: Number, b: Number) -> float:
        """
        Divide a by b.

        The quotient is always a float, even for two integer operands.

        Raises:
            InvalidArgumentError: If b is zero (integer or float), or the
                quotient of finite operands does not fit in a float.
        """
        _check_operand(a, "a")
        _check_operand(b, "b")
        if b == 0:
            logger.warning("Division by zero rejected", dividend=_describe(a))
            raise InvalidArgumentError(DIVISION_BY_ZERO_MESSAGE)
        return _compute(operator.truediv, a, b)

    def apply(self, operation: Operation | str, a: Number, b: Number) -> Number:
        """Run the named operation on a and b."""
        try:
            op = Operation(operation)
        except ValueError:
            raise InvalidArgumentError(f"Unknown operation: {operation}") from None
        return getattr(self, op.value)(a, b)


def parse_operand(text: str) -> Number:
    """
    Parse a textual operand.

    Integer literals become int and any other numeric literal becomes
    float, so results follow the same promotion rule as typed input.
    Literals that are not finite ("inf", "nan", "1e400") are rejected.
    """
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        raise InvalidArgumentError(f"Invalid operand: {text}") from None
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Invalid operand: {text}")
    return value


def format_result(value: Number) -> str:
    """Format a result for display; integral floats print without decimals."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# Shared instance; the calculator holds no state
calculator = Calculator()

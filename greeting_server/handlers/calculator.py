"""Four-operation calculator tool."""

import operator as op
from collections.abc import Callable

from greeting_server.types import DomainFailure

DIVISION_BY_ZERO = "division_by_zero"

OPERATIONS: dict[str, tuple[str, Callable[[float, float], float]]] = {
    "+": ("Addition", op.add),
    "-": ("Subtraction", op.sub),
    "*": ("Multiplication", op.mul),
    "/": ("Division", op.truediv),
}

OPERATORS: tuple[str, ...] = tuple(OPERATIONS)


def format_number(value: float) -> str:
    """Render a number without a trailing '.0' when it is integral."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def calculate(num1: float, num2: float, operator: str) -> str | DomainFailure:
    """Apply an arithmetic operator to two numbers.

    Division by zero is reported as a domain failure rather than producing
    an infinite or NaN result.
    """
    if operator == "/" and num2 == 0:
        return DomainFailure(
            "Error: division by zero is not allowed.",
            code=DIVISION_BY_ZERO,
            details={"num1": num1, "num2": num2},
        )

    name, fn = OPERATIONS[operator]
    result = fn(num1, num2)
    return (
        f"{name} result: {format_number(num1)} {operator} "
        f"{format_number(num2)} = {format_number(result)}"
    )


__all__ = ["DIVISION_BY_ZERO", "OPERATIONS", "OPERATORS", "calculate", "format_number"]

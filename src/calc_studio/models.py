"""
Core data models for Calc Studio.

Defines the request and response schemas shared by the API and the CLI.
"""

from enum import Enum
from typing import Annotated, Union

from pydantic import AllowInfNan, BaseModel, Field, Strict, StrictInt


# =============================================================================
# Enums
# =============================================================================

class Operation(str, Enum):
    """Binary arithmetic operations supported by the calculator."""
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        """Display symbol used in rendered expressions."""
        return _SYMBOLS[self]


_SYMBOLS = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "-",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}


# Strict types keep JSON ints as int and JSON floats as float; inf and nan are rejected
FiniteFloat = Annotated[float, Strict(), AllowInfNan(False)]
Operand = Union[StrictInt, FiniteFloat]


# =============================================================================
# Calculation Models
# =============================================================================

class CalculationRequest(BaseModel):
    """Request model for a single calculation."""
    operation: Operation
    a: Operand
    b: Operand


class Calculation(BaseModel):
    """Result of a single calculation."""
    operation: Operation
    a: Operand
    b: Operand
    result: Operand
    expression: str = Field(..., description="Rendered expression, e.g. '5 + 3'")

    @classmethod
    def build(cls, operation: Operation, a, b, result) -> "Calculation":
        return cls(
            operation=operation,
            a=a,
            b=b,
            result=result,
            expression=f"{a} {operation.symbol} {b}",
        )


# =============================================================================
# Greeting Models
# =============================================================================

class Greeting(BaseModel):
    """Greeting produced by the example helper."""
    name: str
    message: str

"""Module for creating errors raised while evaluating unit expressions.

Every failure is a single ``CalculatorError`` carrying a stable code, a
human-readable message and, where the failing stage knows it, the character
position in the input text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .units.dimension import Dimension
    from .units.table import Unit


class CalculatorError(Exception):
    """Represents a failed evaluation."""

    def __init__(self, code: str, message: str, position: int | None = None):
        """Initialise a new calculator error."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.position = position

    def __repr__(self) -> str:
        """Return a string representation of the error."""
        return (
            f"{type(self).__name__}"
            f"(code={self.code!r}, position={self.position!r}, "
            f"message={self.message!r})"
        )

    def __eq__(self, other: object) -> bool:
        """Errors are equal when kind, code, message and position match."""
        if not isinstance(other, CalculatorError):
            return NotImplemented
        return (type(self), self.code, self.message, self.position) == (
            type(other),
            other.code,
            other.message,
            other.position,
        )

    def __hash__(self) -> int:
        return hash((type(self), self.code, self.message, self.position))

    def at(self, position: int | None) -> CalculatorError:
        """Attach a position to an error raised before one was known."""
        if self.position is None:
            self.position = position
        return self


class LexError(CalculatorError):
    """Input text contains a character that starts no token."""

    def __init__(self, position: int, char: str):
        self.char = char
        super().__init__("E001", f"Unexpected character {char!r}", position)


class UnexpectedToken(CalculatorError):
    """Token stream does not match the expression grammar."""

    def __init__(self, expected: str, found: str, position: int):
        self.expected = expected
        self.found = found
        super().__init__("E002", f"Expected {expected}, found {found}", position)


class UnknownUnit(CalculatorError):
    """A unit name is not in the unit table."""

    def __init__(self, name: str, position: int | None = None):
        self.name = name
        super().__init__("E003", f"Unknown unit {name!r}", position)


class DimensionMismatch(CalculatorError):
    """Operands of an addition, subtraction or conversion differ in dimension."""

    def __init__(self, left: Unit, right: Unit, operation: str):
        self.left = left
        self.right = right
        self.operation = operation
        joiner = "to" if operation == "convert" else "and"
        super().__init__(
            "E004",
            f"Cannot {operation} {left.name} ({left.dimension.describe()}) "
            f"{joiner} {right.name} ({right.dimension.describe()})",
        )


class DivisionByZero(CalculatorError):
    """The divisor has a zero magnitude."""

    def __init__(self, position: int | None = None):
        super().__init__("E005", "Division by zero", position)


class UnrepresentableUnit(CalculatorError):
    """A product or quotient has a dimension with no unit in the table."""

    def __init__(self, dimension: Dimension, operation: str):
        self.dimension = dimension
        self.operation = operation
        super().__init__(
            "E006",
            f"No known unit for the result of {operation} (dimension {dimension})",
        )


class NestingTooDeep(CalculatorError):
    """Parentheses or signs are nested beyond the parser's limit."""

    def __init__(self, position: int, max_depth: int):
        self.max_depth = max_depth
        super().__init__(
            "E007", f"Expression nested deeper than {max_depth} levels", position
        )


def lex_error_factory(position: int, char: str) -> LexError:
    """Factory for E001: Unexpected character in the input text."""
    return LexError(position=position, char=char)


def unexpected_token_factory(
    expected: str, found: str, position: int
) -> UnexpectedToken:
    """Factory for E002: Token does not fit the grammar."""
    return UnexpectedToken(expected=expected, found=found, position=position)


def unknown_unit_factory(name: str, position: int | None = None) -> UnknownUnit:
    """Factory for E003: Unit name not found."""
    return UnknownUnit(name=name, position=position)


def dimension_mismatch_factory(
    left: Unit, right: Unit, operation: str
) -> DimensionMismatch:
    """Factory for E004: Operand units belong to different dimensions."""
    return DimensionMismatch(left=left, right=right, operation=operation)


def division_by_zero_factory(position: int | None = None) -> DivisionByZero:
    """Factory for E005: Divisor is zero."""
    return DivisionByZero(position=position)


def unrepresentable_unit_factory(
    dimension: Dimension, operation: str
) -> UnrepresentableUnit:
    """Factory for E006: Composed dimension has no unit in the table."""
    return UnrepresentableUnit(dimension=dimension, operation=operation)


def nesting_too_deep_factory(position: int, max_depth: int) -> NestingTooDeep:
    """Factory for E007: Nesting limit exceeded."""
    return NestingTooDeep(position=position, max_depth=max_depth)

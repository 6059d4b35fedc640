"""Concrete numbers: a magnitude bound to a unit, and the arithmetic over them.

Addition and subtraction require both operands to measure the same dimension
and convert the right operand into the left operand's unit. Multiplication and
division scale by bare scalars without changing the unit; between two unitful
operands the dimensions compose and the result is expressed in the table's
base unit for the composed dimension.
"""

import math
from dataclasses import dataclass

from .. import errors
from .table import DEFAULT_TABLE, DIMENSIONLESS, Unit, UnitTable


@dataclass(frozen=True)
class ConcreteNumber:
    """A signed magnitude paired with a unit from a unit table."""

    magnitude: float
    unit: Unit = DIMENSIONLESS

    @property
    def is_dimensionless(self) -> bool:
        """Whether this is a bare scalar."""
        return self.unit.dimension.is_dimensionless

    @property
    def base_magnitude(self) -> float:
        """The magnitude expressed in the base unit of its dimension."""
        return self.magnitude * self.unit.factor

    def to(self, target: Unit) -> "ConcreteNumber":
        """Return the same quantity expressed in ``target``."""
        return convert(self, target)

    def isclose(
        self, other: "ConcreteNumber", rel_tol: float = 1e-9, abs_tol: float = 0.0
    ) -> bool:
        """Whether ``other`` has the same unit and a magnitude within tolerance."""
        return self.unit == other.unit and math.isclose(
            self.magnitude, other.magnitude, rel_tol=rel_tol, abs_tol=abs_tol
        )

    def __add__(self, other: "ConcreteNumber") -> "ConcreteNumber":
        return add(self, other)

    def __sub__(self, other: "ConcreteNumber") -> "ConcreteNumber":
        return subtract(self, other)

    def __mul__(self, other: "ConcreteNumber") -> "ConcreteNumber":
        return multiply(self, other)

    def __truediv__(self, other: "ConcreteNumber") -> "ConcreteNumber":
        return divide(self, other)

    def __neg__(self) -> "ConcreteNumber":
        return negate(self)

    def __str__(self) -> str:
        if self.is_dimensionless:
            return f"{self.magnitude:g}"
        return f"{self.magnitude:g} {self.unit}"


def _convert_operand(a: ConcreteNumber, b: ConcreteNumber, operation: str) -> float:
    """Return ``b``'s magnitude in ``a``'s unit."""
    if a.unit.dimension != b.unit.dimension:
        raise errors.dimension_mismatch_factory(a.unit, b.unit, operation)
    return b.magnitude * UnitTable.conversion_factor(b.unit, a.unit)


def add(a: ConcreteNumber, b: ConcreteNumber) -> ConcreteNumber:
    """Sum two numbers of the same dimension, in ``a``'s unit."""
    return ConcreteNumber(a.magnitude + _convert_operand(a, b, "add"), a.unit)


def subtract(a: ConcreteNumber, b: ConcreteNumber) -> ConcreteNumber:
    """Subtract ``b`` from ``a``, in ``a``'s unit."""
    return ConcreteNumber(a.magnitude - _convert_operand(a, b, "subtract"), a.unit)


def negate(a: ConcreteNumber) -> ConcreteNumber:
    """Flip the sign of the magnitude."""
    return ConcreteNumber(-a.magnitude, a.unit)


_VERBS = {"multiply": "times", "divide": "divided by"}


def _compose(
    a: ConcreteNumber,
    b: ConcreteNumber,
    magnitude: float,
    operation: str,
    table: UnitTable,
) -> ConcreteNumber:
    """Label a base-unit magnitude with the base unit of the composed dimension."""
    if operation == "multiply":
        dimension = a.unit.dimension * b.unit.dimension
    else:
        dimension = a.unit.dimension / b.unit.dimension
    unit = table.base_unit(dimension)
    if unit is None:
        raise errors.unrepresentable_unit_factory(
            dimension, f"{a.unit.name} {_VERBS[operation]} {b.unit.name}"
        )
    return ConcreteNumber(magnitude, unit)


def multiply(
    a: ConcreteNumber, b: ConcreteNumber, table: UnitTable = DEFAULT_TABLE
) -> ConcreteNumber:
    """Multiply two numbers.

    A bare scalar scales the other operand and keeps its unit. Two unitful
    operands are multiplied in base units and labelled with the table's base
    unit for the product dimension.

    Raises:
        UnrepresentableUnit: if the table has no unit for the product dimension.
    """
    if b.is_dimensionless:
        return ConcreteNumber(a.magnitude * b.magnitude, a.unit)
    if a.is_dimensionless:
        return ConcreteNumber(a.magnitude * b.magnitude, b.unit)
    return _compose(a, b, a.base_magnitude * b.base_magnitude, "multiply", table)


def divide(
    a: ConcreteNumber, b: ConcreteNumber, table: UnitTable = DEFAULT_TABLE
) -> ConcreteNumber:
    """Divide ``a`` by ``b``.

    Dividing by a bare scalar keeps ``a``'s unit. Otherwise the quotient is
    taken in base units and labelled with the table's base unit for the
    quotient dimension, so that a scalar divided by a time is a frequency.
    A scalar divided by a unit whose inverse the table cannot name keeps the
    divisor's unit, like multiplication does.

    Raises:
        DivisionByZero: if ``b`` has a zero magnitude.
        UnrepresentableUnit: if neither operand is a scalar and the table has
            no unit for the quotient dimension.
    """
    if b.magnitude == 0:
        raise errors.division_by_zero_factory()
    if b.is_dimensionless:
        return ConcreteNumber(a.magnitude / b.magnitude, a.unit)
    if a.is_dimensionless and table.base_unit(b.unit.dimension**-1) is None:
        return ConcreteNumber(a.magnitude / b.magnitude, b.unit)
    return _compose(a, b, a.base_magnitude / b.base_magnitude, "divide", table)


def convert(a: ConcreteNumber, target: Unit) -> ConcreteNumber:
    """Express ``a`` in ``target``.

    Raises:
        DimensionMismatch: if ``target`` measures a different dimension.
    """
    return ConcreteNumber(
        a.magnitude * UnitTable.conversion_factor(a.unit, target), target
    )

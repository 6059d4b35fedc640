"""Units module."""

from .concrete import (
    ConcreteNumber,
    add,
    convert,
    divide,
    multiply,
    negate,
    subtract,
)
from .dimension import Dimension
from .table import DEFAULT_TABLE, DIMENSIONLESS, Unit, UnitTable

__all__ = [
    "ConcreteNumber",
    "DEFAULT_TABLE",
    "DIMENSIONLESS",
    "Dimension",
    "Unit",
    "UnitTable",
    "add",
    "convert",
    "divide",
    "multiply",
    "negate",
    "subtract",
]

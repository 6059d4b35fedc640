"""Dimension algebra over the seven SI base dimensions.

A Dimension maps base dimension symbols to integer exponents and is written
the same way it is parsed, e.g. ``M.L^2.T^-2`` for energy. Named dimensions
(LENGTH, FORCE, ENERGY, ...) are module constants used by the unit table.

Example:
    from .dimension import LENGTH, TIME

    speed = LENGTH / TIME
    str(speed)  # 'L.T^-1'
"""

import re
from collections import Counter
from collections.abc import Mapping
from types import MappingProxyType
from typing import Self

# Base dimension symbols in the order they are rendered.
BASE_SYMBOLS = ("M", "L", "T", "I", "Θ", "N", "J")

_FACTOR = re.compile(r"(?P<symbol>[^\W\d_]+)(?:\^(?P<exponent>-?\d+))?")


class Dimension:
    """A physical dimension: base dimension symbols raised to integer powers."""

    __slots__ = ("exponents",)

    def __init__(self, exponents: Mapping[str, int] | None = None):
        """Initialise a dimension.

        Args:
            exponents: Exponent of each base dimension symbol ('M', 'L', 'T',
                ...). Zero exponents are dropped; no mapping at all means
                dimensionless.

        Raises:
            ValueError: if a symbol is not a base dimension.
        """
        exponents = exponents or {}
        unknown = set(exponents).difference(BASE_SYMBOLS)
        if unknown:
            raise ValueError(f"Unknown base dimension(s): {sorted(unknown)}")
        self.exponents: Mapping[str, int] = MappingProxyType(
            {symbol: exp for symbol, exp in exponents.items() if exp}
        )

    @classmethod
    def parse(cls, text: str) -> Self:
        """Read a dimension written as ``.``-separated factors like ``L^2``.

        ``1`` is the dimensionless dimension and a repeated symbol accumulates,
        so ``L.L`` equals ``L^2``.

        Raises:
            ValueError: on a malformed factor or an unknown base symbol.
        """
        if text == "1":
            return cls()
        exponents: Counter[str] = Counter()
        for factor in text.split("."):
            match = _FACTOR.fullmatch(factor)
            if match is None:
                raise ValueError(f"Invalid dimension factor {factor!r} in {text!r}")
            exponents[match["symbol"]] += int(match["exponent"] or 1)
        return cls(exponents)

    def _combine(self, other: "Dimension", sign: int) -> "Dimension":
        exponents = Counter(self.exponents)
        for symbol, exp in other.exponents.items():
            exponents[symbol] += sign * exp
        return Dimension(exponents)

    def __mul__(self, other: "Dimension") -> "Dimension":
        return self._combine(other, 1)

    def __truediv__(self, other: "Dimension") -> "Dimension":
        return self._combine(other, -1)

    def __pow__(self, power: int) -> "Dimension":
        return Dimension(
            {symbol: exp * power for symbol, exp in self.exponents.items()}
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Dimension):
            return self.exponents == other.exponents
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.exponents.items()))

    @property
    def is_dimensionless(self) -> bool:
        """Whether every exponent is zero."""
        return not self.exponents

    def __str__(self) -> str:
        ordered = sorted(
            self.exponents.items(), key=lambda item: BASE_SYMBOLS.index(item[0])
        )
        factors = (
            symbol if exp == 1 else f"{symbol}^{exp}" for symbol, exp in ordered
        )
        return ".".join(factors) or "1"

    def __repr__(self) -> str:
        return f"Dimension({str(self)!r})"

    def describe(self) -> str:
        """Return the dimension's name when it has one, else its exponents."""
        return NAMED_DIMENSIONS.get(self, str(self))


DIMENSIONLESS = Dimension()

TIME = Dimension.parse("T")
LENGTH = Dimension.parse("L")
MASS = Dimension.parse("M")
CURRENT = Dimension.parse("I")
TEMPERATURE = Dimension.parse("Θ")
AMOUNT_OF_SUBSTANCE = Dimension.parse("N")
LUMINOUS_INTENSITY = Dimension.parse("J")

FREQUENCY = Dimension.parse("T^-1")
FORCE = Dimension.parse("M.L.T^-2")
PRESSURE = Dimension.parse("M.L^-1.T^-2")
ENERGY = Dimension.parse("M.L^2.T^-2")
POWER = Dimension.parse("M.L^2.T^-3")
ELECTRIC_CHARGE = Dimension.parse("T.I")
ELECTRIC_POTENTIAL = Dimension.parse("M.L^2.T^-3.I^-1")
CAPACITANCE = Dimension.parse("M^-1.L^-2.T^4.I^2")
RESISTANCE = Dimension.parse("M.L^2.T^-3.I^-2")
CONDUCTANCE = Dimension.parse("M^-1.L^-2.T^3.I^2")
MAGNETIC_FLUX = Dimension.parse("M.L^2.T^-2.I^-1")
MAGNETIC_FLUX_DENSITY = Dimension.parse("M.T^-2.I^-1")
INDUCTANCE = Dimension.parse("M.L^2.T^-2.I^-2")
CATALYTIC_ACTIVITY = Dimension.parse("T^-1.N")

NAMED_DIMENSIONS: dict[Dimension, str] = {
    DIMENSIONLESS: "dimensionless",
    TIME: "time",
    LENGTH: "length",
    MASS: "mass",
    CURRENT: "current",
    TEMPERATURE: "temperature",
    AMOUNT_OF_SUBSTANCE: "amount of substance",
    LUMINOUS_INTENSITY: "luminous intensity",
    FREQUENCY: "frequency",
    FORCE: "force",
    PRESSURE: "pressure",
    ENERGY: "energy",
    POWER: "power",
    ELECTRIC_CHARGE: "electric charge",
    ELECTRIC_POTENTIAL: "electric potential",
    CAPACITANCE: "capacitance",
    RESISTANCE: "resistance",
    CONDUCTANCE: "conductance",
    MAGNETIC_FLUX: "magnetic flux",
    MAGNETIC_FLUX_DENSITY: "magnetic flux density",
    INDUCTANCE: "inductance",
    CATALYTIC_ACTIVITY: "catalytic activity",
}

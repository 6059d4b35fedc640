"""Unit registry: the Unit type, the UnitTable lookup and the built-in units.

Units are defined once here and looked up by name during evaluation; nothing
constructs a Unit while an expression is being evaluated.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from types import MappingProxyType

from .. import errors
from . import dimension as dim
from .dimension import Dimension


@dataclass(frozen=True)
class Unit:
    """A named unit of measurement belonging to exactly one dimension.

    Attributes:
        name: Canonical singular name, e.g. 'metre'.
        symbol: Printed symbol, e.g. 'm'. Empty for the dimensionless unit.
        dimension: The dimension the unit measures.
        factor: Multiplier converting a magnitude in this unit into the
            dimension's base unit.
        aliases: Further accepted spellings (plurals, alternative spellings).
    """

    name: str
    symbol: str
    dimension: Dimension
    factor: float = 1.0
    aliases: frozenset[str] = field(default=frozenset(), compare=False)

    @property
    def names(self) -> frozenset[str]:
        """All spellings this unit is looked up by."""
        return frozenset({self.name, *self.aliases} | ({self.symbol} - {""}))

    @property
    def is_base(self) -> bool:
        """Whether this is the base unit of its dimension."""
        return self.factor == 1.0

    def __str__(self) -> str:
        return self.symbol or self.name


DIMENSIONLESS = Unit("dimensionless", "", dim.DIMENSIONLESS)


class UnitTable:
    """Immutable registry of units, indexed by every accepted spelling."""

    def __init__(self, units: Iterable[Unit]):
        """Build the table, validating names and base units.

        Args:
            units: Units in display order.

        Raises:
            ValueError: if two units share a spelling, or a dimension does not
                have exactly one base unit.
        """
        self._units = tuple(units)
        index: dict[str, Unit] = {}
        bases: dict[Dimension, Unit] = {}
        for unit in self._units:
            for name in unit.names:
                if name in index:
                    raise ValueError(
                        f"Unit name {name!r} used by both "
                        f"{index[name].name!r} and {unit.name!r}"
                    )
                index[name] = unit
            if unit.is_base:
                if unit.dimension in bases:
                    raise ValueError(
                        f"Dimension {unit.dimension} has two base units: "
                        f"{bases[unit.dimension].name!r} and {unit.name!r}"
                    )
                bases[unit.dimension] = unit
        missing = {unit.dimension for unit in self._units} - set(bases)
        if missing:
            raise ValueError(
                f"No base unit for dimension(s): {sorted(map(str, missing))}"
            )
        self._index = MappingProxyType(index)
        self._bases = MappingProxyType(bases)

    @property
    def units(self) -> tuple[Unit, ...]:
        """Units in definition order."""
        return self._units

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def lookup(self, name: str) -> Unit:
        """Return the unit spelled exactly ``name``.

        Raises:
            UnknownUnit: if no unit has that spelling.
        """
        try:
            return self._index[name]
        except KeyError:
            raise errors.unknown_unit_factory(name) from None

    def base_unit(self, dimension: Dimension) -> Unit | None:
        """Return the base unit of ``dimension``, if the table has one."""
        return self._bases.get(dimension)

    @staticmethod
    def conversion_factor(source: Unit, target: Unit) -> float:
        """Return the multiplier taking a magnitude in ``source`` into ``target``.

        Raises:
            DimensionMismatch: if the units measure different dimensions.
        """
        if source.dimension != target.dimension:
            raise errors.dimension_mismatch_factory(source, target, "convert")
        return source.factor / target.factor


def _unit(
    name: str,
    symbol: str,
    dimension: Dimension,
    factor: float = 1.0,
    *aliases: str,
    plural: str | None = None,
) -> Unit:
    """Define a unit with its regular plural and any extra aliases."""
    spellings = {plural or f"{name}s", *aliases}
    return Unit(name, symbol, dimension, factor, frozenset(spellings))


# Exact factors:
FOOT = 0.3048
POUND = 0.45359237
STANDARD_GRAVITY = 9.80665
POUND_FORCE = POUND * STANDARD_GRAVITY
INCH = FOOT / 12

DEFAULT_UNITS = (
    DIMENSIONLESS,
    # SI base units
    _unit("second", "s", dim.TIME, 1.0, "sec", "secs"),
    _unit("metre", "m", dim.LENGTH, 1.0, "meter", "meters"),
    _unit("kilogram", "kg", dim.MASS, 1.0),
    _unit("ampere", "A", dim.CURRENT, 1.0, "amp", "amps"),
    _unit("kelvin", "K", dim.TEMPERATURE, 1.0),
    _unit("mole", "mol", dim.AMOUNT_OF_SUBSTANCE, 1.0),
    _unit("candela", "cd", dim.LUMINOUS_INTENSITY, 1.0),
    # SI derived units
    _unit("hertz", "Hz", dim.FREQUENCY, 1.0, plural="hertz"),
    _unit("newton", "N", dim.FORCE, 1.0),
    _unit("pascal", "Pa", dim.PRESSURE, 1.0),
    _unit("joule", "J", dim.ENERGY, 1.0),
    _unit("watt", "W", dim.POWER, 1.0),
    _unit("coulomb", "C", dim.ELECTRIC_CHARGE, 1.0),
    _unit("volt", "V", dim.ELECTRIC_POTENTIAL, 1.0),
    _unit("farad", "F", dim.CAPACITANCE, 1.0),
    _unit("ohm", "Ω", dim.RESISTANCE, 1.0),
    _unit("siemens", "S", dim.CONDUCTANCE, 1.0, plural="siemens"),
    _unit("weber", "Wb", dim.MAGNETIC_FLUX, 1.0),
    _unit("tesla", "T", dim.MAGNETIC_FLUX_DENSITY, 1.0),
    _unit("henry", "H", dim.INDUCTANCE, 1.0, "henries", plural="henrys"),
    _unit("katal", "kat", dim.CATALYTIC_ACTIVITY, 1.0),
    # time
    _unit("minute", "min", dim.TIME, 60.0, "mins"),
    _unit("hour", "h", dim.TIME, 3600.0, "hr", "hrs"),
    _unit("day", "d", dim.TIME, 86400.0),
    _unit("week", "wk", dim.TIME, 604800.0),
    # length
    _unit("foot", "ft", dim.LENGTH, FOOT, plural="feet"),
    _unit("inch", "in", dim.LENGTH, INCH, plural="inches"),
    _unit("yard", "yd", dim.LENGTH, 3 * FOOT, "yds"),
    _unit("mile", "mi", dim.LENGTH, 5280 * FOOT),
    _unit("nauticalmile", "nmi", dim.LENGTH, 1852.0),
    # mass
    _unit("gram", "g", dim.MASS, 1e-3, "gramme", "grammes"),
    _unit("tonne", "t", dim.MASS, 1e3),
    _unit("pound", "lb", dim.MASS, POUND, "lbs"),
    _unit("ounce", "oz", dim.MASS, POUND / 16),
    # force
    _unit("poundforce", "lbf", dim.FORCE, POUND_FORCE),
    _unit("kip", "kip", dim.FORCE, 1000 * POUND_FORCE),
    # pressure
    _unit("bar", "bar", dim.PRESSURE, 1e5),
    _unit("atmosphere", "atm", dim.PRESSURE, 101325.0),
    _unit("psi", "psi", dim.PRESSURE, POUND_FORCE / INCH**2, plural="psi"),
    # energy and power
    _unit("calorie", "cal", dim.ENERGY, 4.184),
    _unit("watthour", "Wh", dim.ENERGY, 3600.0),
    _unit(
        "horsepower", "hp", dim.POWER, 550 * FOOT * POUND_FORCE, plural="horsepower"
    ),
)

DEFAULT_TABLE = UnitTable(DEFAULT_UNITS)

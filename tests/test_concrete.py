import itertools

import pytest

from unit_calculator.errors import (
    DimensionMismatch,
    DivisionByZero,
    UnrepresentableUnit,
)
from unit_calculator.units import (
    DEFAULT_TABLE,
    DIMENSIONLESS,
    ConcreteNumber,
    add,
    convert,
    divide,
    multiply,
    negate,
    subtract,
)
from unit_calculator.units import dimension as dim

metre = DEFAULT_TABLE.lookup("metre")
foot = DEFAULT_TABLE.lookup("foot")
inch = DEFAULT_TABLE.lookup("inch")
mile = DEFAULT_TABLE.lookup("mile")
newton = DEFAULT_TABLE.lookup("newton")
second = DEFAULT_TABLE.lookup("second")
hour = DEFAULT_TABLE.lookup("hour")
joule = DEFAULT_TABLE.lookup("joule")
watt = DEFAULT_TABLE.lookup("watt")
hertz = DEFAULT_TABLE.lookup("hertz")
kilogram = DEFAULT_TABLE.lookup("kilogram")
pound = DEFAULT_TABLE.lookup("pound")

SAMPLE_MAGNITUDES = (0.0, 1.0, -2.5, 3.75, 1234.5)


def units_by_dimension() -> dict[dim.Dimension, list]:
    """Group the default table's units by dimension."""
    groups: dict[dim.Dimension, list] = {}
    for unit in DEFAULT_TABLE:
        groups.setdefault(unit.dimension, []).append(unit)
    return groups


def test_add_same_unit():
    result = add(ConcreteNumber(3, metre), ConcreteNumber(2, metre))
    assert result.magnitude == 5
    assert result.unit is metre


def test_add_converts_into_left_unit():
    result = add(ConcreteNumber(1, foot), ConcreteNumber(12, inch))
    assert result.unit is foot
    assert result.magnitude == pytest.approx(2)


def test_subtract_converts_into_left_unit():
    result = subtract(ConcreteNumber(1, metre), ConcreteNumber(1, foot))
    assert result.unit is metre
    assert result.magnitude == pytest.approx(0.6952)


@pytest.mark.parametrize("operation", (add, subtract))
def test_add_subtract_dimension_mismatch(operation):
    with pytest.raises(DimensionMismatch) as excinfo:
        operation(ConcreteNumber(3, metre), ConcreteNumber(4, newton))
    assert excinfo.value.code == "E004"
    assert excinfo.value.left is metre
    assert excinfo.value.right is newton


def test_add_scalar_to_unitful_is_mismatch():
    with pytest.raises(DimensionMismatch):
        add(ConcreteNumber(2), ConcreteNumber(3, metre))


def test_mismatch_for_all_cross_dimension_pairs():
    groups = units_by_dimension()
    representatives = [units[0] for units in groups.values()]
    for left, right in itertools.permutations(representatives, 2):
        for operation in (add, subtract):
            with pytest.raises(DimensionMismatch):
                operation(ConcreteNumber(1, left), ConcreteNumber(1, right))
        with pytest.raises(DimensionMismatch):
            convert(ConcreteNumber(1, left), right)


def test_add_is_commutative_in_magnitude():
    a = ConcreteNumber(3.5, metre)
    b = ConcreteNumber(7.25, metre)
    assert add(a, b).magnitude == add(b, a).magnitude


def test_add_is_commutative_across_units():
    a = ConcreteNumber(3, metre)
    b = ConcreteNumber(7, foot)
    assert add(a, b).base_magnitude == pytest.approx(add(b, a).base_magnitude)


def test_subtract_undoes_add():
    for units in units_by_dimension().values():
        for left, right in itertools.product(units, repeat=2):
            a = ConcreteNumber(3.5, left)
            b = ConcreteNumber(-1.25, right)
            assert subtract(add(a, b), b).isclose(a, abs_tol=1e-9)


def test_convert_round_trip():
    for units in units_by_dimension().values():
        for u1, u2 in itertools.product(units, repeat=2):
            for magnitude in SAMPLE_MAGNITUDES:
                x = ConcreteNumber(magnitude, u1)
                assert convert(convert(x, u2), u1).isclose(x, abs_tol=1e-9)


def test_convert():
    result = convert(ConcreteNumber(1, mile), foot)
    assert result.unit is foot
    assert result.magnitude == pytest.approx(5280)
    assert ConcreteNumber(2, pound).to(kilogram).magnitude == pytest.approx(0.90718474)


def test_convert_dimension_mismatch():
    with pytest.raises(DimensionMismatch) as excinfo:
        convert(ConcreteNumber(1, metre), second)
    assert "to second" in excinfo.value.message


def test_multiply_by_scalar_keeps_unit():
    assert multiply(ConcreteNumber(3, foot), ConcreteNumber(2)) == ConcreteNumber(
        6, foot
    )
    assert multiply(ConcreteNumber(2), ConcreteNumber(3, foot)) == ConcreteNumber(
        6, foot
    )


def test_multiply_scalars():
    result = multiply(ConcreteNumber(5), ConcreteNumber(4))
    assert result == ConcreteNumber(20, DIMENSIONLESS)


def test_multiply_composes_to_known_unit():
    result = multiply(ConcreteNumber(2, newton), ConcreteNumber(3, metre))
    assert result.unit is joule
    assert result.magnitude == pytest.approx(6)


def test_multiply_converts_to_base_units():
    result = multiply(ConcreteNumber(1, watt), ConcreteNumber(1, hour))
    assert result.unit is joule
    assert result.magnitude == pytest.approx(3600)


def test_multiply_unrepresentable():
    with pytest.raises(UnrepresentableUnit) as excinfo:
        multiply(ConcreteNumber(3, metre), ConcreteNumber(4, metre))
    assert excinfo.value.dimension == dim.LENGTH**2
    assert excinfo.value.code == "E006"


def test_divide_by_scalar_keeps_unit():
    result = divide(ConcreteNumber(10, newton), ConcreteNumber(2))
    assert result == ConcreteNumber(5, newton)


def test_divide_same_dimension_is_dimensionless():
    result = divide(ConcreteNumber(6, foot), ConcreteNumber(2, foot))
    assert result.unit is DIMENSIONLESS
    assert result.magnitude == pytest.approx(3)


def test_divide_composes_to_known_unit():
    assert divide(ConcreteNumber(10, joule), ConcreteNumber(2, second)).isclose(
        ConcreteNumber(5, watt)
    )
    assert divide(ConcreteNumber(2), ConcreteNumber(4, second)).isclose(
        ConcreteNumber(0.5, hertz)
    )


def test_divide_scalar_by_unit_without_inverse_keeps_unit():
    result = divide(ConcreteNumber(2), ConcreteNumber(4, metre))
    assert result.unit is metre
    assert result.magnitude == pytest.approx(0.5)
    assert divide(ConcreteNumber(1), ConcreteNumber(2, foot)).unit is foot


def test_divide_unrepresentable():
    with pytest.raises(UnrepresentableUnit):
        divide(ConcreteNumber(1, newton), ConcreteNumber(2, metre))


@pytest.mark.parametrize("divisor_unit", (DIMENSIONLESS, metre, newton, second))
def test_divide_by_zero(divisor_unit):
    for numerator in (ConcreteNumber(1, metre), ConcreteNumber(0), ConcreteNumber(-3)):
        with pytest.raises(DivisionByZero):
            divide(numerator, ConcreteNumber(0.0, divisor_unit))


def test_negate():
    assert negate(ConcreteNumber(4, kilogram)) == ConcreteNumber(-4, kilogram)


def test_operators():
    a = ConcreteNumber(3, metre)
    b = ConcreteNumber(2, metre)
    assert a + b == ConcreteNumber(5, metre)
    assert a - b == ConcreteNumber(1, metre)
    assert a * ConcreteNumber(2) == ConcreteNumber(6, metre)
    assert a / ConcreteNumber(3) == ConcreteNumber(1, metre)
    assert -a == ConcreteNumber(-3, metre)


def test_str():
    assert str(ConcreteNumber(13, metre)) == "13 m"
    assert str(ConcreteNumber(2.5)) == "2.5"


def test_default_unit_is_dimensionless():
    assert ConcreteNumber(1).unit is DIMENSIONLESS
    assert ConcreteNumber(1).is_dimensionless

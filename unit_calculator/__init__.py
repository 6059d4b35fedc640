"""The main module for Unit Calculator."""

import argparse
import logging
import sys
from collections.abc import Sequence
from contextlib import suppress
from importlib.metadata import PackageNotFoundError, version
from itertools import groupby

from . import errors
from .evaluator import MAX_DEPTH, Parser, tokenize
from .units import DEFAULT_TABLE, ConcreteNumber, UnitTable, convert

__version__ = "0.0.0"
with suppress(PackageNotFoundError):
    __version__ = version("unit-calculator")

logger = logging.getLogger(__name__)


def format_result(
    number: ConcreteNumber, precision: int = 10, names: bool = False
) -> str:
    """Render a result as ``<magnitude> <unit symbol>``.

    Dimensionless results are rendered as the bare magnitude.

    Args:
        number: The result to render.
        precision: Significant digits of the magnitude.
        names: Render the unit's canonical name instead of its symbol.
    """
    magnitude = f"{number.magnitude:.{precision}g}"
    if number.is_dimensionless:
        return magnitude
    unit = number.unit.name if names else number.unit
    return f"{magnitude} {unit}"


def format_error(error: errors.CalculatorError, text: str) -> str:
    """Render an error, with a caret under its position when it has one."""
    lines = [f"error[{error.code}]: {error.message}"]
    if error.position is not None:
        lines.append(f"  {text}")
        lines.append("  " + " " * error.position + "^")
    return "\n".join(lines)


def format_unit_table(table: UnitTable) -> str:
    """List the units of ``table`` grouped by dimension."""
    units = sorted(
        (unit for unit in table if not unit.dimension.is_dimensionless),
        key=lambda unit: (unit.dimension.describe(), not unit.is_base),
    )
    lines = []
    for dimension_name, group in groupby(
        units, key=lambda unit: unit.dimension.describe()
    ):
        names = ", ".join(f"{unit.name} ({unit.symbol})" for unit in group)
        lines.append(f"{dimension_name}: {names}")
    return "\n".join(lines)


def _evaluate_one(
    text: str, table: UnitTable, target: str | None, max_depth: int
) -> ConcreteNumber:
    tokens = tokenize(text)
    logger.debug("Tokens for %r: %s", text, [token.text for token in tokens[:-1]])
    result = Parser(tokens, table, max_depth).parse()
    if target is not None:
        result = convert(result, table.lookup(target))
    logger.debug("Evaluated %r to %r", text, result)
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unit-calc",
        description="Unit Calculator: Evaluate arithmetic over numbers with units.",
    )
    parser.add_argument(
        "expressions",
        metavar="expression",
        nargs="*",
        help="Expressions to evaluate, e.g. '3 metres + 2 feet'",
    )
    parser.add_argument(
        "-t",
        "--to",
        metavar="UNIT",
        help="Convert every result into UNIT",
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        default=10,
        metavar="DIGITS",
        help="Significant digits of printed magnitudes (default: %(default)s)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=(
            "Deepest nesting of parentheses and signs accepted, "
            f"at most {MAX_DEPTH} (default: %(default)s)"
        ),
    )
    parser.add_argument(
        "-n",
        "--unit-names",
        action="store_true",
        help="Print unit names instead of symbols",
    )
    parser.add_argument(
        "-l",
        "--list-units",
        action="store_true",
        help="Show all known units grouped by dimension",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log evaluation steps to stderr",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Evaluate the expressions given on the command line.

    Returns:
        0 when every expression evaluated, 1 when any failed.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.precision < 1:
        parser.error("--precision must be at least 1")
    if not 1 <= args.max_depth <= MAX_DEPTH:
        parser.error(f"--max-depth must be between 1 and {MAX_DEPTH}")
    if not args.expressions and not args.list_units:
        parser.error("at least one expression is required")

    if args.list_units:
        print(format_unit_table(DEFAULT_TABLE))

    status = 0
    for text in args.expressions:
        try:
            result = _evaluate_one(text, DEFAULT_TABLE, args.to, args.max_depth)
        except errors.CalculatorError as error:
            logger.debug("Evaluation of %r failed: %r", text, error)
            print(format_error(error, text), file=sys.stderr)
            status = 1
        else:
            print(format_result(result, args.precision, args.unit_names))
    return status


def run() -> None:
    """Run the calculator on expressions given on the command line."""
    sys.exit(main())

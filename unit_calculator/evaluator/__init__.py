"""Evaluate unit expressions: lexer, parser and the public entry points."""

from .. import errors
from ..units.concrete import ConcreteNumber, convert
from ..units.table import DEFAULT_TABLE, UnitTable
from .lexer import Token, TokenKind, tokenize
from .parser import MAX_DEPTH, Parser

__all__ = [
    "MAX_DEPTH",
    "Parser",
    "Token",
    "TokenKind",
    "evaluate",
    "tokenize",
    "try_evaluate",
]


def evaluate(
    text: str,
    table: UnitTable = DEFAULT_TABLE,
    target: str | None = None,
    max_depth: int = MAX_DEPTH,
) -> ConcreteNumber:
    """Evaluate ``text`` to a single concrete number.

    Args:
        text: Expression such as ``"3 metres + 2 feet"``.
        table: Unit table resolving unit names.
        target: Optional unit name to express the result in.
        max_depth: Deepest nesting of parentheses and signs accepted.

    Raises:
        CalculatorError: the first lexing, parsing or arithmetic error met.
    """
    result = Parser(tokenize(text), table, max_depth).parse()
    if target is not None:
        result = convert(result, table.lookup(target))
    return result


def try_evaluate(
    text: str,
    table: UnitTable = DEFAULT_TABLE,
    target: str | None = None,
    max_depth: int = MAX_DEPTH,
) -> ConcreteNumber | errors.CalculatorError:
    """Evaluate ``text``, returning the failure as a value instead of raising."""
    try:
        return evaluate(text, table, target, max_depth)
    except errors.CalculatorError as error:
        return error

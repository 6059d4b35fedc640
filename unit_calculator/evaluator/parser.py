"""Recursive-descent parser that evaluates as it parses.

Grammar (left associative, ``*`` and ``/`` bind tighter than ``+`` and ``-``)::

    expression     := term (('+'|'-') term)*
    term           := factor (('*'|'/') factor)*
    factor         := ('+'|'-') factor | concreteNumber | '(' expression ')'
    concreteNumber := NUMBER UNIT?

Each production returns a ConcreteNumber, folded immediately through the
concrete-number operations, so no syntax tree outlives a parse.
"""

from collections.abc import Callable, Sequence

from .. import errors
from ..units import concrete
from ..units.concrete import ConcreteNumber
from ..units.table import DEFAULT_TABLE, DIMENSIONLESS, UnitTable
from .lexer import Token, TokenKind

MAX_DEPTH = 100

BinaryOperation = Callable[[ConcreteNumber, ConcreteNumber], ConcreteNumber]


class Parser:
    """Consumes one token list and evaluates it to a single ConcreteNumber."""

    def __init__(
        self,
        tokens: Sequence[Token],
        table: UnitTable = DEFAULT_TABLE,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialise a parser over a token list ending in an END token.

        Args:
            tokens: Output of ``tokenize``.
            table: Unit table used to resolve unit names and composed units.
            max_depth: Deepest nesting of parentheses and signs accepted,
                between 1 and ``MAX_DEPTH``.
        """
        if not tokens or tokens[-1].kind is not TokenKind.END:
            raise ValueError("Token list must end with an END token")
        if not 1 <= max_depth <= MAX_DEPTH:
            raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH}")
        self.tokens = tokens
        self.table = table
        self.max_depth = max_depth
        self._index = 0
        self._depth = 0
        self._operations: dict[str, BinaryOperation] = {
            "+": concrete.add,
            "-": concrete.subtract,
            "*": lambda a, b: concrete.multiply(a, b, self.table),
            "/": lambda a, b: concrete.divide(a, b, self.table),
        }

    @property
    def _current(self) -> Token:
        return self.tokens[self._index]

    def _advance(self) -> Token:
        token = self.tokens[self._index]
        if token.kind is not TokenKind.END:
            self._index += 1
        return token

    def _at_operator(self, symbols: str) -> bool:
        token = self._current
        return token.kind is TokenKind.OPERATOR and token.text in symbols

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        if self._current.kind is not kind:
            raise errors.unexpected_token_factory(
                expected=expected,
                found=self._current.describe(),
                position=self._current.position,
            )
        return self._advance()

    def parse(self) -> ConcreteNumber:
        """Evaluate the whole token list.

        Raises:
            CalculatorError: the first error met; evaluation stops there.
        """
        result = self._expression()
        self._expect(TokenKind.END, "an operator or end of input")
        return result

    def _apply(
        self, operator: Token, left: ConcreteNumber, right: ConcreteNumber
    ) -> ConcreteNumber:
        """Apply a binary operator, attaching its position to arithmetic errors."""
        try:
            return self._operations[operator.text](left, right)
        except errors.CalculatorError as error:
            raise error.at(operator.position)

    def _expression(self) -> ConcreteNumber:
        """Parse ``term (('+'|'-') term)*``."""
        result = self._term()
        while self._at_operator("+-"):
            operator = self._advance()
            result = self._apply(operator, result, self._term())
        return result

    def _term(self) -> ConcreteNumber:
        """Parse ``factor (('*'|'/') factor)*``."""
        result = self._factor()
        while self._at_operator("*/"):
            operator = self._advance()
            result = self._apply(operator, result, self._factor())
        return result

    def _factor(self) -> ConcreteNumber:
        """Parse a signed factor, a concrete number or a parenthesised expression."""
        token = self._current
        match token.kind:
            case TokenKind.OPERATOR if token.text in "+-":
                self._advance()
                operand = self._nested(token, self._factor)
                return concrete.negate(operand) if token.text == "-" else operand
            case TokenKind.NUMBER:
                return self._concrete_number()
            case TokenKind.LPAREN:
                self._advance()
                result = self._nested(token, self._expression)
                self._expect(TokenKind.RPAREN, "')'")
                return result
            case _:
                raise errors.unexpected_token_factory(
                    expected="a number or '('",
                    found=token.describe(),
                    position=token.position,
                )

    def _nested(
        self, opener: Token, production: Callable[[], ConcreteNumber]
    ) -> ConcreteNumber:
        """Run ``production`` one nesting level deeper."""
        if self._depth >= self.max_depth:
            raise errors.nesting_too_deep_factory(opener.position, self.max_depth)
        self._depth += 1
        try:
            return production()
        finally:
            self._depth -= 1

    def _concrete_number(self) -> ConcreteNumber:
        """Parse ``NUMBER UNIT?``; a number with no unit is dimensionless."""
        magnitude = self._advance().number
        if self._current.kind is not TokenKind.UNIT:
            return ConcreteNumber(magnitude, DIMENSIONLESS)
        name = self._advance()
        try:
            unit = self.table.lookup(name.text)
        except errors.UnknownUnit as error:
            raise error.at(name.position)
        return ConcreteNumber(magnitude, unit)

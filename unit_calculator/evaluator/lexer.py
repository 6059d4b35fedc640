"""Lexer turning expression text into a token list.

A single left-to-right pass recognises numbers (digits with at most one decimal
point), unit names (runs of letters), the operators ``+ - * /`` and
parentheses. Whitespace separates tokens and is discarded. Unit names are not
checked against the unit table here; the parser resolves them.
"""

from dataclasses import dataclass
from enum import Enum

from .. import errors


class TokenKind(str, Enum):
    """Kinds of token produced by the lexer."""

    NUMBER = "number"
    UNIT = "unit name"
    OPERATOR = "operator"
    LPAREN = "'('"
    RPAREN = "')'"
    END = "end of input"


@dataclass(frozen=True)
class Token:
    """A lexical element with its starting offset in the input."""

    kind: TokenKind
    text: str
    position: int
    value: float | None = None

    @property
    def number(self) -> float:
        """The numeric value of a NUMBER token.

        Raises:
            TypeError: if the token is not a NUMBER.
        """
        if self.value is None:
            raise TypeError(f"{self.describe()} has no numeric value")
        return self.value

    def describe(self) -> str:
        """Return how the token is named in error messages."""
        match self.kind:
            case TokenKind.END:
                return TokenKind.END.value
            case TokenKind.NUMBER | TokenKind.UNIT:
                return f"{self.kind.value} {self.text!r}"
            case _:
                return repr(self.text)


DIGITS = frozenset("0123456789")

SINGLE_CHAR_TOKENS = {
    "+": TokenKind.OPERATOR,
    "-": TokenKind.OPERATOR,
    "*": TokenKind.OPERATOR,
    "/": TokenKind.OPERATOR,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def _scan_number(text: str, start: int) -> int:
    """Return the end offset of the number starting at ``start``."""
    end = start
    seen_point = False
    while end < len(text):
        char = text[end]
        if char == ".":
            if seen_point:
                break
            seen_point = True
        elif char not in DIGITS:
            break
        end += 1
    return end


def _scan_word(text: str, start: int) -> int:
    """Return the end offset of the run of letters starting at ``start``."""
    end = start
    while end < len(text) and text[end].isalpha():
        end += 1
    return end


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, terminated by a single END token.

    Args:
        text: The expression, e.g. ``"3 metres + 2 feet"``.

    Raises:
        LexError: at the first character that cannot start a token.
    """
    tokens: list[Token] = []
    position = 0
    while position < len(text):
        char = text[position]
        if char.isspace():
            position += 1
        elif char in DIGITS or char == ".":
            end = _scan_number(text, position)
            lexeme = text[position:end]
            if lexeme == ".":
                raise errors.lex_error_factory(position, char)
            tokens.append(Token(TokenKind.NUMBER, lexeme, position, float(lexeme)))
            position = end
        elif char.isalpha():
            end = _scan_word(text, position)
            tokens.append(Token(TokenKind.UNIT, text[position:end], position))
            position = end
        elif char in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[char], char, position))
            position += 1
        else:
            raise errors.lex_error_factory(position, char)
    tokens.append(Token(TokenKind.END, "", len(text)))
    return tokens

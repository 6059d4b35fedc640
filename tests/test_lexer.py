import pytest

from unit_calculator.errors import LexError
from unit_calculator.evaluator import Token, TokenKind, tokenize


def kinds_and_texts(text: str) -> list[tuple[TokenKind, str]]:
    """Tokenize ``text`` and drop the END token and positions."""
    tokens = tokenize(text)
    assert tokens[-1].kind is TokenKind.END
    return [(token.kind, token.text) for token in tokens[:-1]]


def test_number_and_unit():
    tokens = tokenize("3 metres")
    assert tokens[:-1] == [
        Token(TokenKind.NUMBER, "3", 0, 3.0),
        Token(TokenKind.UNIT, "metres", 2),
    ]


def test_number_property():
    number, unit, end = tokenize("2.5 m")
    assert number.number == 2.5
    for token in (unit, end):
        with pytest.raises(TypeError):
            token.number


def test_end_token_position():
    tokens = tokenize("3 metres")
    assert tokens[-1] == Token(TokenKind.END, "", 8)


def test_empty_input():
    assert tokenize("") == [Token(TokenKind.END, "", 0)]
    assert tokenize("   ") == [Token(TokenKind.END, "", 3)]


def test_operators_and_parentheses():
    assert kinds_and_texts("(1+2)*3/4-5") == [
        (TokenKind.LPAREN, "("),
        (TokenKind.NUMBER, "1"),
        (TokenKind.OPERATOR, "+"),
        (TokenKind.NUMBER, "2"),
        (TokenKind.RPAREN, ")"),
        (TokenKind.OPERATOR, "*"),
        (TokenKind.NUMBER, "3"),
        (TokenKind.OPERATOR, "/"),
        (TokenKind.NUMBER, "4"),
        (TokenKind.OPERATOR, "-"),
        (TokenKind.NUMBER, "5"),
    ]


@pytest.mark.parametrize(
    "text, value",
    (("2.5", 2.5), (".5", 0.5), ("5.", 5.0), ("007", 7.0), ("12", 12.0)),
)
def test_decimal_numbers(text: str, value: float):
    (token, end) = tokenize(text)
    assert token.kind is TokenKind.NUMBER
    assert token.value == value
    assert end.kind is TokenKind.END


def test_second_decimal_point_starts_new_number():
    assert kinds_and_texts("1.2.3") == [
        (TokenKind.NUMBER, "1.2"),
        (TokenKind.NUMBER, ".3"),
    ]


def test_number_touching_unit():
    assert kinds_and_texts("0kg") == [
        (TokenKind.NUMBER, "0"),
        (TokenKind.UNIT, "kg"),
    ]


def test_unit_names_not_validated():
    assert kinds_and_texts("5 gorgons") == [
        (TokenKind.NUMBER, "5"),
        (TokenKind.UNIT, "gorgons"),
    ]


def test_non_ascii_letters_form_unit_names():
    assert kinds_and_texts("10 Ω") == [
        (TokenKind.NUMBER, "10"),
        (TokenKind.UNIT, "Ω"),
    ]


def test_whitespace_discarded():
    assert kinds_and_texts("  3\tm \n+ 2  m ") == [
        (TokenKind.NUMBER, "3"),
        (TokenKind.UNIT, "m"),
        (TokenKind.OPERATOR, "+"),
        (TokenKind.NUMBER, "2"),
        (TokenKind.UNIT, "m"),
    ]


def test_positions():
    positions = [token.position for token in tokenize("12 m + (3)")]
    assert positions == [0, 3, 5, 7, 8, 9, 10]


def test_lex_error_position():
    with pytest.raises(LexError) as excinfo:
        tokenize("3 @ 4")
    assert excinfo.value.position == 2
    assert excinfo.value.char == "@"
    assert excinfo.value.code == "E001"


@pytest.mark.parametrize(
    "text, position, char",
    (("5 m^2", 3, "^"), ("1,5", 1, ","), (".", 0, "."), ("2 + ²", 4, "²")),
)
def test_lex_errors(text: str, position: int, char: str):
    with pytest.raises(LexError) as excinfo:
        tokenize(text)
    assert (excinfo.value.position, excinfo.value.char) == (position, char)

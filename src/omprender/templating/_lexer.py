"""Tokenizer for expression bodies (the text between `{{` and `}}`)."""

import re
from dataclasses import dataclass
from enum import StrEnum

import orjson

from omprender.exceptions import ParseError


class TokenKind(StrEnum):
    FIELD = "field"
    DOT = "dot"
    VARIABLE = "variable"
    IDENT = "identifier"
    NUMBER = "number"
    STRING = "string"
    BOOL = "bool"
    NIL = "nil"
    LPAREN = "("
    RPAREN = ")"
    PIPE = "|"
    EOF = "end of expression"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token.

    Attributes:
        kind: Token category.
        text: Exact source text of the token.
        start: Offset of the first character in the expression body.
        end: Offset one past the last character.
        value: Decoded literal value, or the field names for field tokens.
    """

    kind: TokenKind
    text: str
    start: int
    end: int
    value: object = None


_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<number>
        [+-]?
        (?: 0[xX][0-9a-fA-F]+
          | (?: \d+ (?:\.\d*)? | \.\d+ ) (?:[eE][+-]?\d+)?
        )
      )
    | (?P<field>(?:\.[A-Za-z_]\w*)+)
    | (?P<dot>\.)
    | (?P<variable>\$(?:\.[A-Za-z_]\w*)*)
    | (?P<ident>[A-Za-z_]\w*)
    | (?P<string>"(?:[^"\\\n]|\\.)*")
    | (?P<raw>`[^`]*`)
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<pipe>\|)
    """,
    re.VERBOSE,
)

_KEYWORDS: dict[str, tuple[TokenKind, object]] = {
    "true": (TokenKind.BOOL, True),
    "false": (TokenKind.BOOL, False),
    "nil": (TokenKind.NIL, None),
}


def _number_value(text: str) -> int | float:
    lowered = text.lower()
    if "x" in lowered:
        return int(lowered, 16)
    if any(ch in lowered for ch in ".e"):
        return float(text)
    return int(text)


def _string_value(text: str, source: str) -> str:
    try:
        value: object = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        msg = f"invalid string literal {text}"
        raise ParseError(msg, expression=source, cause=e) from e
    return str(value)


def tokenize(source: str) -> list[Token]:
    """Split an expression body into tokens.

    Args:
        source: Expression body without the surrounding delimiters.

    Returns:
        Tokens in source order, terminated by an EOF token.

    Raises:
        ParseError: If the body contains a character that starts no token,
            or an unterminated string literal.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            char = source[pos]
            if char in "\"`":
                msg = f"unterminated string literal at offset {pos}"
            else:
                msg = f"unexpected character {char!r} at offset {pos}"
            raise ParseError(msg, expression=source)

        group = match.lastgroup
        text = match.group()
        start, end = match.span()
        pos = end

        if group == "ws":
            continue
        if group == "number":
            tokens.append(
                Token(TokenKind.NUMBER, text, start, end, _number_value(text))
            )
        elif group == "field":
            names = tuple(text.split(".")[1:])
            tokens.append(Token(TokenKind.FIELD, text, start, end, names))
        elif group == "dot":
            tokens.append(Token(TokenKind.DOT, text, start, end, ()))
        elif group == "variable":
            names = tuple(text.split(".")[1:])
            tokens.append(Token(TokenKind.VARIABLE, text, start, end, names))
        elif group == "ident":
            kind, value = _KEYWORDS.get(text, (TokenKind.IDENT, text))
            tokens.append(Token(kind, text, start, end, value))
        elif group == "string":
            tokens.append(
                Token(TokenKind.STRING, text, start, end, _string_value(text, source))
            )
        elif group == "raw":
            tokens.append(Token(TokenKind.STRING, text, start, end, text[1:-1]))
        elif group == "lparen":
            tokens.append(Token(TokenKind.LPAREN, text, start, end))
        elif group == "rparen":
            tokens.append(Token(TokenKind.RPAREN, text, start, end))
        else:
            tokens.append(Token(TokenKind.PIPE, text, start, end))

    tokens.append(Token(TokenKind.EOF, "", length, length))
    return tokens

"""Expression syntax tree and parser.

Grammar (a subset of Go's text/template pipelines)::

    pipeline := command ("|" command)*
    command  := operand+
    operand  := field | "." | variable | literal | identifier
              | "(" pipeline ")" [field]

A command whose first operand is an identifier is a function call; the
remaining operands are its arguments. In a pipeline the value of each stage is
appended as the last argument of the next stage, so `a | f x` is `f x a`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from omprender.exceptions import ParseError

from ._lexer import Token, TokenKind, tokenize


@dataclass(frozen=True, slots=True)
class Literal:
    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class FieldPath:
    """A dotted field path.

    Attributes:
        names: Field names to walk, in order. Empty for `.` and `$`.
        from_root: True for `$`-rooted paths, which start at the root
            context instead of the current scope.
    """

    names: tuple[str, ...]
    from_root: bool = False


@dataclass(frozen=True, slots=True)
class FieldChain:
    """Field access on the result of a parenthesized pipeline, `(x).A.B`."""

    target: Node
    names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Call:
    name: str
    args: tuple[Node, ...] = ()


Node = Literal | FieldPath | FieldChain | Call


@dataclass(frozen=True, slots=True)
class _FunctionName:
    name: str


_LITERAL_KINDS = frozenset(
    {TokenKind.NUMBER, TokenKind.STRING, TokenKind.BOOL, TokenKind.NIL}
)
_COMMAND_END = frozenset({TokenKind.PIPE, TokenKind.RPAREN, TokenKind.EOF})

# Deepest allowed parenthesis nesting
MAX_PAREN_DEPTH = 100


class _Parser:
    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens = tokenize(source)
        self._pos = 0
        self._depth = 0

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.kind is not TokenKind.EOF:
            self._pos += 1
        return token

    def _error(self, message: str) -> ParseError:
        return ParseError(message, expression=self._source)

    def parse(self) -> Node:
        node = self._pipeline()
        token = self._peek()
        if token.kind is TokenKind.RPAREN:
            raise self._error(f"unexpected ')' at offset {token.start}")
        if token.kind is not TokenKind.EOF:
            raise self._error(f"unexpected {token.text!r} at offset {token.start}")
        return node

    def _pipeline(self) -> Node:
        node = self._command(piped=None)
        while self._peek().kind is TokenKind.PIPE:
            _ = self._advance()
            node = self._command(piped=node)
        return node

    def _command(self, piped: Node | None) -> Node:
        operands: list[Node | _FunctionName] = []
        while self._peek().kind not in _COMMAND_END:
            operands.append(self._operand())

        if not operands:
            token = self._peek()
            if piped is not None:
                raise self._error(f"missing command after '|' at offset {token.start}")
            raise self._error(f"missing value at offset {token.start}")

        head, *rest = operands
        args = tuple(
            Call(arg.name) if isinstance(arg, _FunctionName) else arg for arg in rest
        )
        if isinstance(head, _FunctionName):
            if piped is not None:
                args = (*args, piped)
            return Call(head.name, args)

        if rest:
            raise self._error("can't give argument to non-function")
        if piped is not None:
            raise self._error("can't pipe a value into a non-function")
        return head

    def _operand(self) -> Node | _FunctionName:
        token = self._advance()
        kind = token.kind

        if kind is TokenKind.FIELD or kind is TokenKind.DOT:
            return FieldPath(names=token.value)  # pyright: ignore[reportArgumentType]
        if kind is TokenKind.VARIABLE:
            return FieldPath(names=token.value, from_root=True)  # pyright: ignore[reportArgumentType]
        if kind in _LITERAL_KINDS:
            return Literal(token.value)  # pyright: ignore[reportArgumentType]
        if kind is TokenKind.IDENT:
            return _FunctionName(str(token.value))
        if kind is TokenKind.LPAREN:
            return self._group(token)
        raise self._error(f"unexpected {token.text!r} at offset {token.start}")

    def _group(self, opener: Token) -> Node:
        if self._depth >= MAX_PAREN_DEPTH:
            raise self._error(
                f"parentheses nested deeper than {MAX_PAREN_DEPTH} at offset {opener.start}"
            )
        self._depth += 1
        inner = self._pipeline()
        self._depth -= 1
        closer = self._peek()
        if closer.kind is not TokenKind.RPAREN:
            raise self._error(f"unclosed '(' at offset {opener.start}")
        _ = self._advance()

        follower = self._peek()
        if follower.kind is TokenKind.FIELD and follower.start == closer.end:
            _ = self._advance()
            return FieldChain(target=inner, names=follower.value)  # pyright: ignore[reportArgumentType]
        return inner


@dataclass(frozen=True, slots=True)
class Expression:
    """A parsed expression body.

    Expressions are immutable and depend only on their source text, so one
    instance can be shared by every template that contains the same text.
    """

    source: str
    node: Node

    @classmethod
    def parse(cls, source: str) -> Self:
        """Parse an expression body.

        Args:
            source: Text between `{{` and `}}`, without trim markers.

        Returns:
            The parsed Expression.

        Raises:
            ParseError: If the body is empty or malformed.
        """
        stripped = source.strip()
        if not stripped:
            msg = "empty expression"
            raise ParseError(msg, expression=source)
        return cls(source=stripped, node=_Parser(stripped).parse())

"""Template scanning and parsing.

A template is literal text interleaved with actions delimited by `{{` and
`}}`. Actions are expressions, comments (`{{/* ... */}}`) or the control
keywords `if`, `else`, `else if` and `end`. A `-` followed by whitespace just
inside a delimiter (`{{- ` or ` -}}`) trims the whitespace of the adjacent
text.

Parsing never fails as a whole. When a structural problem is found (an
unclosed action, an `if` without `end`, a stray `else` or `end`), the
constructs before the offending top-level one are kept and the rest of the
source is carried as verbatim text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from omprender.exceptions import ParseError

_OPEN = "{{"
_CLOSE = "}}"
_TRIM_CHARS = " \t\r\n"

_COMMENT_OPEN_RE = re.compile(r"(?:-\s+)?/\*")
_COMMENT_CLOSE_RE = re.compile(r"\*/(?:\s+-)?}}")
_KEYWORD_RE = re.compile(r"(if|else|end)\b\s*(.*)", re.DOTALL)

# Deepest allowed {{ if }} nesting
MAX_IF_DEPTH = 100


# =============================================================================
# Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class TextNode:
    text: str


@dataclass(frozen=True, slots=True)
class ActionNode:
    """An expression placeholder.

    Attributes:
        source: The action exactly as written, delimiters included.
        body: The expression text, without delimiters and trim markers.
    """

    source: str
    body: str


@dataclass(frozen=True, slots=True)
class Branch:
    """One guarded arm of a conditional."""

    source: str
    condition: str
    nodes: tuple[TemplateNode, ...]


@dataclass(frozen=True, slots=True)
class ConditionalNode:
    """An `if` / `else if` / `else` / `end` region.

    The first branch whose condition is truthy is rendered; if none is,
    `otherwise` is rendered.
    """

    branches: tuple[Branch, ...]
    otherwise: tuple[TemplateNode, ...] = ()


TemplateNode = TextNode | ActionNode | ConditionalNode


@dataclass(frozen=True, slots=True)
class ParsedTemplate:
    """Result of parsing a template.

    Attributes:
        source: The template text.
        nodes: Parsed constructs.
        error: The structural error that stopped parsing, if any.
        remainder: Source text after the last parsed construct, rendered
            verbatim. Empty unless `error` is set.
    """

    source: str
    nodes: tuple[TemplateNode, ...]
    error: ParseError | None = None
    remainder: str = ""


# =============================================================================
# Scanner
# =============================================================================


@dataclass(frozen=True, slots=True)
class _Text:
    text: str
    start: int


@dataclass(frozen=True, slots=True)
class _Action:
    source: str
    body: str
    start: int
    trim_left: bool
    trim_right: bool
    comment: bool = False


_Item = _Text | _Action


def _find_close(source: str, pos: int) -> int | None:
    quote: str | None = None
    length = len(source)
    while pos < length:
        char = source[pos]
        if quote is not None:
            if char == "\\" and quote == '"':
                pos += 2
                continue
            if char == quote:
                quote = None
        elif char in "\"`":
            quote = char
        elif source.startswith(_CLOSE, pos):
            return pos
        pos += 1
    return None


def _scan_action(source: str, start: int) -> tuple[_Action, int]:
    inner_start = start + len(_OPEN)

    comment = _COMMENT_OPEN_RE.match(source, inner_start)
    if comment is not None:
        close = _COMMENT_CLOSE_RE.search(source, comment.end())
        if close is None:
            msg = f"unclosed comment at offset {start}"
            raise ParseError(msg, expression=source[start:])
        end = close.end()
        raw = source[start:end]
        action = _Action(
            source=raw,
            body="",
            start=start,
            trim_left=raw.startswith("{{-"),
            trim_right=raw.endswith("-}}"),
            comment=True,
        )
        return action, end

    close_at = _find_close(source, inner_start)
    if close_at is None:
        msg = f"unclosed action at offset {start}"
        raise ParseError(msg, expression=source[start:])

    inner = source[inner_start:close_at]
    trim_left = len(inner) > 1 and inner[0] == "-" and inner[1].isspace()
    trim_right = len(inner) > 1 and inner[-1] == "-" and inner[-2].isspace()
    body = inner[2 if trim_left else 0 : len(inner) - 2 if trim_right else None]
    end = close_at + len(_CLOSE)
    action = _Action(
        source=source[start:end],
        body=body.strip(),
        start=start,
        trim_left=trim_left,
        trim_right=trim_right,
    )
    return action, end


def _scan(source: str) -> tuple[list[_Item], ParseError | None, int]:
    items: list[_Item] = []
    pos = 0
    while True:
        start = source.find(_OPEN, pos)
        if start < 0:
            if pos < len(source):
                items.append(_Text(source[pos:], pos))
            return items, None, len(source)
        if start > pos:
            items.append(_Text(source[pos:start], pos))
        try:
            action, pos = _scan_action(source, start)
        except ParseError as e:
            return items, e, start
        items.append(action)


def _apply_trim(items: list[_Item]) -> list[_Item]:
    trimmed: list[_Item] = []
    strip_next = False
    for item in items:
        if isinstance(item, _Text):
            text = item.text.lstrip(_TRIM_CHARS) if strip_next else item.text
            trimmed.append(_Text(text, item.start))
            strip_next = False
            continue
        if item.trim_left and trimmed and isinstance(trimmed[-1], _Text):
            previous = trimmed[-1]
            trimmed[-1] = _Text(previous.text.rstrip(_TRIM_CHARS), previous.start)
        trimmed.append(item)
        strip_next = item.trim_right
    return trimmed


# =============================================================================
# Parser
# =============================================================================


class _Keyword(StrEnum):
    IF = "if"
    ELSE = "else"
    ELSE_IF = "else if"
    END = "end"


def _classify(action: _Action) -> tuple[_Keyword | None, str]:
    match = _KEYWORD_RE.fullmatch(action.body)
    if match is None:
        return None, action.body
    word, rest = match.group(1), match.group(2).strip()

    if word == "if":
        if not rest:
            msg = "missing condition in if"
            raise ParseError(msg, expression=action.source)
        return _Keyword.IF, rest
    if word == "end":
        if rest:
            msg = f"unexpected {rest!r} after end"
            raise ParseError(msg, expression=action.source)
        return _Keyword.END, ""
    if not rest:
        return _Keyword.ELSE, ""
    nested = _KEYWORD_RE.fullmatch(rest)
    if nested is None or nested.group(1) != "if":
        msg = f"unexpected {rest!r} after else"
        raise ParseError(msg, expression=action.source)
    condition = nested.group(2).strip()
    if not condition:
        msg = "missing condition in else if"
        raise ParseError(msg, expression=action.source)
    return _Keyword.ELSE_IF, condition


class _Parser:
    def __init__(self, items: list[_Item], scan_error: ParseError | None) -> None:
        self._items = items
        self._scan_error = scan_error
        self._pos = 0
        self._depth = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._items)

    def peek(self) -> _Item:
        return self._items[self._pos]

    def construct(self) -> TemplateNode | None:
        """Parse one top-level construct."""
        item = self._items[self._pos]
        self._pos += 1
        if isinstance(item, _Text):
            return TextNode(item.text)
        if item.comment:
            return None

        keyword, rest = _classify(item)
        if keyword is None:
            return ActionNode(source=item.source, body=rest)
        if keyword is _Keyword.IF:
            return self._conditional(item, rest)
        msg = f"unexpected {{{{ {keyword} }}}}"
        raise ParseError(msg, expression=item.source)

    def _conditional(self, opener: _Action, condition: str) -> ConditionalNode:
        if self._depth >= MAX_IF_DEPTH:
            msg = f"{{{{ if }}}} nested deeper than {MAX_IF_DEPTH}"
            raise ParseError(msg, expression=opener.source)
        self._depth += 1
        try:
            return self._branches(opener, condition)
        finally:
            self._depth -= 1

    def _branches(self, opener: _Action, condition: str) -> ConditionalNode:
        branches: list[Branch] = []
        source = opener.source
        while True:
            nodes, terminator, keyword, rest = self._block(opener)
            branches.append(Branch(source=source, condition=condition, nodes=nodes))
            if keyword is _Keyword.END:
                return ConditionalNode(branches=tuple(branches))
            if keyword is _Keyword.ELSE:
                otherwise, closer, after, _ = self._block(opener)
                if after is not _Keyword.END:
                    msg = f"expected {{{{ end }}}} after else, got {closer.source}"
                    raise ParseError(msg, expression=closer.source)
                return ConditionalNode(branches=tuple(branches), otherwise=otherwise)
            source, condition = terminator.source, rest

    def _block(
        self, opener: _Action
    ) -> tuple[tuple[TemplateNode, ...], _Action, _Keyword, str]:
        nodes: list[TemplateNode] = []
        while not self.at_end():
            item = self.peek()
            if isinstance(item, _Action) and not item.comment:
                keyword, rest = _classify(item)
                if keyword in (_Keyword.ELSE, _Keyword.ELSE_IF, _Keyword.END):
                    self._pos += 1
                    return tuple(nodes), item, keyword, rest
            node = self.construct()
            if node is not None:
                nodes.append(node)

        if self._scan_error is not None:
            raise self._scan_error
        msg = f"missing {{{{ end }}}} for {opener.source}"
        raise ParseError(msg, expression=opener.source)


def parse_template(source: str) -> ParsedTemplate:
    """Parse a template.

    Args:
        source: Template text.

    Returns:
        The ParsedTemplate. Structural errors are reported through its
        `error` and `remainder` fields rather than raised.
    """
    items, scan_error, scan_stop = _scan(source)
    items = _apply_trim(items)
    parser = _Parser(items, scan_error)

    nodes: list[TemplateNode] = []
    while not parser.at_end():
        start = parser.peek().start
        try:
            node = parser.construct()
        except ParseError as e:
            return ParsedTemplate(
                source=source, nodes=tuple(nodes), error=e, remainder=source[start:]
            )
        if node is not None:
            nodes.append(node)

    if scan_error is not None:
        return ParsedTemplate(
            source=source,
            nodes=tuple(nodes),
            error=scan_error,
            remainder=source[scan_stop:],
        )
    return ParsedTemplate(source=source, nodes=tuple(nodes))

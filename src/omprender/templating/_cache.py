"""Parse cache shared by resolvers."""

from dataclasses import dataclass, field

from omprender.exceptions import ParseError

from ._expression import Expression
from ._template import ParsedTemplate, parse_template


@dataclass(slots=True)
class ExpressionCache:
    """Parsed expressions and templates, keyed by their source text.

    Entries are written once per source text and never replaced, so a cache
    can be shared freely. Parse failures are cached too; each lookup of a
    failed source raises a fresh ParseError.
    """

    _expressions: dict[str, Expression | str] = field(default_factory=dict)
    _templates: dict[str, ParsedTemplate] = field(default_factory=dict)

    def expression(self, source: str) -> Expression:
        """Return the parsed expression for `source`.

        Raises:
            ParseError: If `source` is not a valid expression.
        """
        entry = self._expressions.get(source)
        if entry is None:
            try:
                parsed: Expression | str = Expression.parse(source)
            except ParseError as e:
                parsed = str(e)
            entry = self._expressions.setdefault(source, parsed)
        if isinstance(entry, str):
            raise ParseError(entry, expression=source)
        return entry

    def template(self, source: str) -> ParsedTemplate:
        """Return the parsed template for `source`."""
        entry = self._templates.get(source)
        if entry is None:
            entry = self._templates.setdefault(source, parse_template(source))
        return entry

    def clear(self) -> None:
        self._expressions.clear()
        self._templates.clear()

    def __len__(self) -> int:
        return len(self._expressions) + len(self._templates)

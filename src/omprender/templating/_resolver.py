"""Template resolution: expanding placeholders into text."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Self

import structlog
from structlog.typing import FilteringBoundLogger

from omprender.context import Context
from omprender.enums import ErrorMarker, IssueKind
from omprender.exceptions import ParseError, TemplateError

from ._cache import ExpressionCache
from ._evaluator import evaluate
from ._functions import DEFAULT_FUNCTIONS, FunctionRegistry
from ._template import ActionNode, ConditionalNode, TemplateNode, TextNode
from ._values import is_truthy, stringify


@dataclass(frozen=True, slots=True)
class TemplateIssue:
    """A template problem reported instead of raised.

    Attributes:
        kind: What went wrong.
        message: Human-readable description.
        expression: Source text of the offending expression or template.
        segment: Identifier of the segment being resolved, if any.
    """

    kind: IssueKind
    message: str
    expression: str
    segment: str | None = None

    @classmethod
    def from_error(cls, error: TemplateError, *, segment: str | None = None) -> Self:
        kind = IssueKind.PARSE if isinstance(error, ParseError) else IssueKind.EVALUATION
        return cls(
            kind=kind,
            message=str(error),
            expression=error.expression,
            segment=segment if segment is not None else error.segment,
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "kind": str(self.kind),
            "message": self.message,
            "expression": self.expression,
            "segment": self.segment,
        }


@dataclass(frozen=True, slots=True)
class Resolution:
    """Resolved text plus the issues met while producing it."""

    text: str
    issues: tuple[TemplateIssue, ...] = ()


@dataclass(slots=True)
class _Pass:
    resolver: "TemplateResolver"
    context: Context
    fields: Mapping[str, object] | None
    segment: str | None
    parts: list[str] = field(default_factory=list)
    issues: list[TemplateIssue] = field(default_factory=list)

    def report(self, error: TemplateError) -> None:
        issue = TemplateIssue.from_error(error, segment=self.segment)
        self.issues.append(issue)
        self.resolver.log.warning(
            "template_issue",
            kind=str(issue.kind),
            message=issue.message,
            expression=issue.expression,
            segment=issue.segment,
        )

    def value(self, body: str) -> object:
        expression = self.resolver.cache.expression(body)
        return evaluate(
            expression,
            self.context,
            fields=self.fields,
            functions=self.resolver.functions,
        )

    def render(self, nodes: tuple[TemplateNode, ...]) -> None:
        for node in nodes:
            if isinstance(node, TextNode):
                self.parts.append(node.text)
            elif isinstance(node, ActionNode):
                self._action(node)
            else:
                self._conditional(node)

    def _action(self, node: ActionNode) -> None:
        try:
            value = self.value(node.body)
        except TemplateError as e:
            self.report(e)
            if self.resolver.on_error is ErrorMarker.SOURCE:
                self.parts.append(node.source)
            return
        self.parts.append(stringify(value))

    def _conditional(self, node: ConditionalNode) -> None:
        for branch in node.branches:
            try:
                taken = is_truthy(self.value(branch.condition))
            except TemplateError as e:
                self.report(e)
                taken = False
            if taken:
                self.render(branch.nodes)
                return
        self.render(node.otherwise)


@dataclass(slots=True)
class TemplateResolver:
    """Resolves templates against contexts.

    Attributes:
        functions: Functions callable from templates.
        cache: Parse cache, shareable between resolvers.
        on_error: What a failing placeholder renders as.
        logger: Logger for template issues. Defaults to the package logger.
    """

    functions: FunctionRegistry = DEFAULT_FUNCTIONS
    cache: ExpressionCache = field(default_factory=ExpressionCache)
    on_error: ErrorMarker = ErrorMarker.SOURCE
    logger: FilteringBoundLogger | None = None

    @property
    def log(self) -> FilteringBoundLogger:
        if self.logger is None:
            self.logger = structlog.get_logger("omprender")
        return self.logger

    def resolve_with_issues(
        self,
        template: str,
        context: Context,
        *,
        segment: str | None = None,
        fields: Mapping[str, object] | None = None,
    ) -> Resolution:
        """Resolve a template and collect the issues met on the way.

        Args:
            template: Template text.
            context: Root context.
            segment: Segment identifier recorded on issues.
            fields: Derived fields of the segment being resolved.

        Returns:
            The Resolution. Never raises for template problems.
        """
        parsed = self.cache.template(template)
        run = _Pass(resolver=self, context=context, fields=fields, segment=segment)
        run.render(parsed.nodes)
        if parsed.error is not None:
            run.report(parsed.error)
            run.parts.append(parsed.remainder)
        return Resolution(text="".join(run.parts), issues=tuple(run.issues))

    def resolve(
        self,
        template: str,
        context: Context,
        *,
        segment: str | None = None,
        fields: Mapping[str, object] | None = None,
    ) -> str:
        """Resolve a template to text, discarding issues."""
        return self.resolve_with_issues(
            template, context, segment=segment, fields=fields
        ).text


def resolve(
    template: str,
    context: Context,
    *,
    on_error: ErrorMarker = ErrorMarker.SOURCE,
) -> str:
    """Resolve a template with the built-in functions.

    Example:
        >>> from omprender.context import default_context
        >>> resolve("{{ .Shell.Name }} on {{ .Git.Branch }}", default_context())
        'bash on main'
    """
    return TemplateResolver(on_error=on_error).resolve(template, context)

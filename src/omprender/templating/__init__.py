"""Template expression language.

Templates are literal text with `{{ ... }}` actions in a subset of Go's
text/template syntax: field paths, literals, function calls, pipelines,
parenthesized sub-expressions, comments, whitespace trimming and
`if` / `else if` / `else` / `end` regions.

Problems inside a template never raise. They are collected as
TemplateIssue records, and a failing placeholder renders either its own
source text or nothing, per the ErrorMarker policy.

Example:
    >>> from omprender.context import default_context
    >>> from omprender.templating import TemplateResolver
    >>> resolver = TemplateResolver()
    >>> resolver.resolve("{{ if .Git.IsRepo }}git{{ end }}", default_context())
    'git'
"""

from ._cache import ExpressionCache
from ._evaluator import Scope, evaluate
from ._expression import Call, Expression, FieldChain, FieldPath, Literal, Node
from ._functions import (
    DEFAULT_FUNCTIONS,
    FunctionRegistry,
    TemplateFunction,
    create_function_registry,
)
from ._resolver import Resolution, TemplateIssue, TemplateResolver, resolve
from ._template import (
    ActionNode,
    Branch,
    ConditionalNode,
    ParsedTemplate,
    TemplateNode,
    TextNode,
    parse_template,
)
from ._values import format_number, is_truthy, stringify

__all__ = [
    "DEFAULT_FUNCTIONS",
    "ActionNode",
    "Branch",
    "Call",
    "ConditionalNode",
    "Expression",
    "ExpressionCache",
    "FieldChain",
    "FieldPath",
    "FunctionRegistry",
    "Literal",
    "Node",
    "ParsedTemplate",
    "Resolution",
    "Scope",
    "TemplateFunction",
    "TemplateIssue",
    "TemplateNode",
    "TemplateResolver",
    "TextNode",
    "create_function_registry",
    "evaluate",
    "format_number",
    "is_truthy",
    "parse_template",
    "resolve",
    "stringify",
]

"""Evaluation of parsed expressions against a context."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from omprender.context import PATH_MISS, Context, EnvironmentVariables, Record
from omprender.exceptions import EvaluationError

from ._expression import Call, Expression, FieldChain, FieldPath, Literal, Node
from ._functions import DEFAULT_FUNCTIONS, FunctionRegistry


def _empty_fields() -> Mapping[str, object]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Scope:
    """Names visible to an expression.

    Attributes:
        context: Root context, also reachable as `$`.
        fields: Derived fields of the segment being resolved. They shadow
            context names of the same spelling.
    """

    context: Context
    fields: Mapping[str, object] = field(default_factory=_empty_fields)

    def lookup(self, name: str) -> object:
        if name in self.fields:
            return self.fields[name]
        return self.context.lookup(name)

    def current(self) -> object:
        """Value of `.`: the segment fields when present, else the context."""
        return self.fields if self.fields else self.context


def _step(value: object, name: str) -> object:
    if isinstance(value, Record | EnvironmentVariables):
        return value.lookup(name)
    if isinstance(value, Mapping):
        return value.get(name, PATH_MISS)  # pyright: ignore[reportUnknownMemberType]
    return PATH_MISS


def _walk(value: object, names: tuple[str, ...]) -> object:
    for name in names:
        value = _step(value, name)
        if value is PATH_MISS:
            return None
    return value


@dataclass(frozen=True, slots=True)
class _Evaluator:
    expression: Expression
    scope: Scope
    functions: FunctionRegistry

    def _error(self, message: str, cause: Exception | None = None) -> EvaluationError:
        return EvaluationError(
            message, expression=self.expression.source, cause=cause
        )

    def eval(self, node: Node) -> object:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, FieldPath):
            return self._field(node)
        if isinstance(node, FieldChain):
            return _walk(self.eval(node.target), node.names)
        return self._call(node)

    def _field(self, node: FieldPath) -> object:
        if node.from_root:
            return _walk(self.scope.context, node.names)
        if not node.names:
            return self.scope.current()
        head, *rest = node.names
        value = self.scope.lookup(head)
        if value is PATH_MISS:
            return None
        return _walk(value, tuple(rest))

    def _call(self, node: Call) -> object:
        func = self.functions.get(node.name)
        if func is None:
            msg = f"function {node.name!r} not defined"
            raise self._error(msg)
        if not func.accepts(len(node.args)):
            msg = (
                f"wrong number of args for {node.name}: "
                f"want {func.describe_arity()} got {len(node.args)}"
            )
            raise self._error(msg)

        if func.lazy:
            args = [self._thunk(arg) for arg in node.args]
        else:
            args = [self.eval(arg) for arg in node.args]

        try:
            return func.impl(*args)
        except EvaluationError:
            raise
        except Exception as e:  # noqa: BLE001
            msg = f"error calling {node.name}: {e}"
            raise self._error(msg, cause=e) from e

    def _thunk(self, node: Node) -> Callable[[], object]:
        return lambda: self.eval(node)


def evaluate(
    expression: Expression,
    context: Context,
    *,
    fields: Mapping[str, object] | None = None,
    functions: FunctionRegistry | None = None,
) -> object:
    """Evaluate an expression.

    Missing fields evaluate to None rather than raising.

    Args:
        expression: Parsed expression.
        context: Root context.
        fields: Derived fields of the segment being resolved.
        functions: Function registry. Defaults to the built-ins.

    Returns:
        The expression's value.

    Raises:
        EvaluationError: If a function is unknown, called with the wrong
            number of arguments, or fails on its arguments.
    """
    scope = Scope(
        context=context,
        fields=MappingProxyType(dict(fields)) if fields else _empty_fields(),
    )
    evaluator = _Evaluator(
        expression=expression,
        scope=scope,
        functions=functions if functions is not None else DEFAULT_FUNCTIONS,
    )
    return evaluator.eval(expression.node)

"""Built-in template functions.

Functions receive evaluated argument values and return a value. They signal
bad input by raising TypeError (wrong kind of value) or ValueError (right
kind, unusable value); the evaluator turns both into EvaluationError.

Lazy functions (`and`, `or`) receive zero-argument callables instead of
values so that operands after the deciding one are never evaluated.
"""

import inspect
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_EVEN, Decimal
from decimal import Context as DecimalContext
from types import MappingProxyType

from omprender.context import PATH_MISS

from ._values import is_truthy, type_name

Number = int | float
Thunk = Callable[[], object]


@dataclass(frozen=True, slots=True)
class TemplateFunction:
    """A callable exposed to templates by name.

    Attributes:
        name: Name used in templates.
        impl: Implementation receiving the evaluated arguments.
        min_args: Minimum number of arguments.
        max_args: Maximum number of arguments, or None when variadic.
        lazy: Pass arguments as zero-argument callables.
    """

    name: str
    impl: Callable[..., object]
    min_args: int = 0
    max_args: int | None = None
    lazy: bool = False

    def accepts(self, count: int) -> bool:
        """Check whether `count` arguments satisfy the arity."""
        if count < self.min_args:
            return False
        return self.max_args is None or count <= self.max_args

    def describe_arity(self) -> str:
        if self.max_args is None:
            return f"at least {self.min_args}"
        if self.max_args == self.min_args:
            return str(self.min_args)
        return f"{self.min_args} to {self.max_args}"

    @classmethod
    def from_callable(
        cls, name: str, impl: Callable[..., object]
    ) -> "TemplateFunction":
        """Wrap a plain callable, inferring its arity from its signature."""
        min_args = 0
        max_args: int | None = 0
        for parameter in inspect.signature(impl).parameters.values():
            if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
                max_args = None
            elif parameter.kind in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
            ):
                if max_args is not None:
                    max_args += 1
                if parameter.default is inspect.Parameter.empty:
                    min_args += 1
        return cls(name=name, impl=impl, min_args=min_args, max_args=max_args)


# =============================================================================
# Coercion helpers
# =============================================================================


def _number(value: object, func: str) -> Number:
    if value is None or value is PATH_MISS:
        return 0
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"{func}: expected number, got {type_name(value)}"
        raise TypeError(msg)
    return value


def _integer(value: object, func: str) -> int:
    number = _number(value, func)
    if isinstance(number, float):
        if not number.is_integer():
            msg = f"{func}: expected integer, got {number!r}"
            raise ValueError(msg)
        return int(number)
    return number


def _text(value: object, func: str) -> str:
    if value is None or value is PATH_MISS:
        return ""
    if not isinstance(value, str):
        msg = f"{func}: expected string, got {type_name(value)}"
        raise TypeError(msg)
    return value


def _arith_result(a: Number, b: Number, result: Number) -> Number:
    if isinstance(a, int) and isinstance(b, int):
        return result
    return float(result)


# =============================================================================
# Arithmetic
# =============================================================================


def template_round(x: object, precision: object) -> float:
    """Round half to even at `precision` decimal digits.

    The decimal form of `x` is rounded, not its binary approximation, so
    `round 2.675 2` gives 2.68 and `round 0.125 2` gives 0.12.
    """
    value = float(_number(x, "round"))
    digits = _integer(precision, "round")
    if digits < 0:
        msg = f"round: precision must be non-negative, got {digits}"
        raise ValueError(msg)
    if not math.isfinite(value):
        return value

    exact = Decimal(repr(value))
    context = DecimalContext(
        prec=max(28, exact.adjusted() + digits + 2), rounding=ROUND_HALF_EVEN
    )
    return float(exact.quantize(Decimal(1).scaleb(-digits), context=context))


def template_div(a: object, b: object) -> float:
    """Divide as floats; a zero divisor yields an IEEE infinity or NaN."""
    dividend = float(_number(a, "div"))
    divisor = float(_number(b, "div"))
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        sign = math.copysign(1.0, dividend) * math.copysign(1.0, divisor)
        return math.inf if sign > 0 else -math.inf
    return dividend / divisor


def template_sub(a: object, b: object) -> Number:
    x, y = _number(a, "sub"), _number(b, "sub")
    return _arith_result(x, y, x - y)


def template_add(a: object, b: object) -> Number:
    x, y = _number(a, "add"), _number(b, "add")
    return _arith_result(x, y, x + y)


def template_mul(a: object, b: object) -> Number:
    x, y = _number(a, "mul"), _number(b, "mul")
    return _arith_result(x, y, x * y)


def template_mod(a: object, b: object) -> int:
    x, y = _integer(a, "mod"), _integer(b, "mod")
    if y == 0:
        msg = "mod: integer division by zero"
        raise ValueError(msg)
    # Truncated remainder, sign follows the dividend.
    remainder = abs(x) % abs(y)
    return remainder if x >= 0 else -remainder


def template_float64(x: object) -> float:
    """Coerce to float. Numeric strings are parsed."""
    if isinstance(x, str):
        try:
            return float(x.strip())
        except ValueError as e:
            msg = f"float64: cannot convert {x!r} to a number"
            raise ValueError(msg) from e
    return float(_number(x, "float64"))


def template_int(x: object) -> int:
    """Coerce to int, truncating toward zero. Numeric strings are parsed."""
    if isinstance(x, str):
        text = x.strip()
        try:
            return int(text)
        except ValueError:
            pass
        value = template_float64(text)
    else:
        value = _number(x, "int")
    if isinstance(value, float) and not math.isfinite(value):
        msg = f"int: cannot convert {value!r} to an integer"
        raise ValueError(msg)
    return int(value)


# =============================================================================
# Comparison
# =============================================================================


def _kind(value: object) -> str | None:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


_ZERO: Mapping[str, object] = MappingProxyType(
    {"bool": False, "number": 0, "string": ""}
)


def _comparable(a: object, b: object, func: str) -> tuple[object, object]:
    if a is PATH_MISS:
        a = None
    if b is PATH_MISS:
        b = None
    if a is None and b is None:
        return 0, 0

    kind_a, kind_b = _kind(a), _kind(b)
    if a is None and kind_b is not None:
        return _ZERO[kind_b], b
    if b is None and kind_a is not None:
        return a, _ZERO[kind_a]
    if kind_a is None or kind_a != kind_b:
        msg = (
            f"{func}: incompatible types for comparison: "
            f"{type_name(a)} and {type_name(b)}"
        )
        raise TypeError(msg)
    return a, b


def template_eq(first: object, *others: object) -> bool:
    """True if `first` equals any of the other arguments."""
    for other in others:
        x, y = _comparable(first, other, "eq")
        if x == y:
            return True
    return False


def template_ne(a: object, b: object) -> bool:
    x, y = _comparable(a, b, "ne")
    return x != y


def _ordered(a: object, b: object, func: str) -> tuple[object, object]:
    x, y = _comparable(a, b, func)
    if isinstance(x, bool):
        msg = f"{func}: invalid type for comparison: bool"
        raise TypeError(msg)
    return x, y


def template_lt(a: object, b: object) -> bool:
    x, y = _ordered(a, b, "lt")
    return x < y  # pyright: ignore[reportOperatorIssue]


def template_le(a: object, b: object) -> bool:
    x, y = _ordered(a, b, "le")
    return x <= y  # pyright: ignore[reportOperatorIssue]


def template_gt(a: object, b: object) -> bool:
    x, y = _ordered(a, b, "gt")
    return x > y  # pyright: ignore[reportOperatorIssue]


def template_ge(a: object, b: object) -> bool:
    x, y = _ordered(a, b, "ge")
    return x >= y  # pyright: ignore[reportOperatorIssue]


# =============================================================================
# Logic
# =============================================================================


def template_and(*operands: Thunk) -> object:
    """Return the first falsy operand, or the last one."""
    value: object = None
    for operand in operands:
        value = operand()
        if not is_truthy(value):
            return value
    return value


def template_or(*operands: Thunk) -> object:
    """Return the first truthy operand, or the last one."""
    value: object = None
    for operand in operands:
        value = operand()
        if is_truthy(value):
            return value
    return value


def template_not(x: object) -> bool:
    return not is_truthy(x)


# =============================================================================
# Strings and collections
# =============================================================================


def template_len(x: object) -> int:
    if x is None or x is PATH_MISS:
        return 0
    if isinstance(x, str | Mapping | list | tuple):
        return len(x)  # pyright: ignore[reportUnknownArgumentType]
    msg = f"len: invalid type {type_name(x)}"
    raise TypeError(msg)


def template_lower(s: object) -> str:
    return _text(s, "lower").lower()


def template_upper(s: object) -> str:
    return _text(s, "upper").upper()


def template_trim(s: object) -> str:
    return _text(s, "trim").strip()


def template_replace(old: object, new: object, s: object) -> str:
    return _text(s, "replace").replace(
        _text(old, "replace"), _text(new, "replace")
    )


def template_contains(substr: object, s: object) -> bool:
    return _text(substr, "contains") in _text(s, "contains")


def template_default(fallback: object, value: object) -> object:
    """Return `value` unless it is empty, in which case `fallback`."""
    return value if is_truthy(value) else fallback


# =============================================================================
# Registry
# =============================================================================

_BUILTINS: tuple[TemplateFunction, ...] = (
    TemplateFunction("round", template_round, 2, 2),
    TemplateFunction("div", template_div, 2, 2),
    TemplateFunction("sub", template_sub, 2, 2),
    TemplateFunction("add", template_add, 2, 2),
    TemplateFunction("mul", template_mul, 2, 2),
    TemplateFunction("mod", template_mod, 2, 2),
    TemplateFunction("float64", template_float64, 1, 1),
    TemplateFunction("int", template_int, 1, 1),
    TemplateFunction("eq", template_eq, 2, None),
    TemplateFunction("ne", template_ne, 2, 2),
    TemplateFunction("lt", template_lt, 2, 2),
    TemplateFunction("le", template_le, 2, 2),
    TemplateFunction("gt", template_gt, 2, 2),
    TemplateFunction("ge", template_ge, 2, 2),
    TemplateFunction("and", template_and, 1, None, lazy=True),
    TemplateFunction("or", template_or, 1, None, lazy=True),
    TemplateFunction("not", template_not, 1, 1),
    TemplateFunction("len", template_len, 1, 1),
    TemplateFunction("lower", template_lower, 1, 1),
    TemplateFunction("upper", template_upper, 1, 1),
    TemplateFunction("trim", template_trim, 1, 1),
    TemplateFunction("replace", template_replace, 3, 3),
    TemplateFunction("contains", template_contains, 2, 2),
    TemplateFunction("default", template_default, 2, 2),
)


@dataclass(frozen=True, slots=True)
class FunctionRegistry:
    """Registry of functions callable from templates, keyed by name."""

    _functions: Mapping[str, TemplateFunction] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def get(self, name: str) -> TemplateFunction | None:
        """Get a function by name.

        Args:
            name: Function name as written in templates.

        Returns:
            The function, or None if not registered.
        """
        return self._functions.get(name)

    def all_functions(self) -> dict[str, TemplateFunction]:
        """Get all registered functions.

        Returns:
            A copy of the name-to-function mapping.
        """
        return dict(self._functions)

    def with_functions(
        self, extra: Mapping[str, Callable[..., object] | TemplateFunction]
    ) -> "FunctionRegistry":
        """Return a registry extended with `extra`.

        Plain callables are wrapped with their arity taken from their
        signature. Entries in `extra` replace existing functions of the same
        name.
        """
        functions = dict(self._functions)
        for name, impl in extra.items():
            functions[name] = (
                impl
                if isinstance(impl, TemplateFunction)
                else TemplateFunction.from_callable(name, impl)
            )
        return FunctionRegistry(_functions=MappingProxyType(functions))

    def __contains__(self, name: object) -> bool:
        return name in self._functions


def create_function_registry(
    extra: Mapping[str, Callable[..., object] | TemplateFunction] | None = None,
) -> FunctionRegistry:
    """Create a registry holding the built-in functions.

    Args:
        extra: Additional functions to register on top of the built-ins.

    Returns:
        A FunctionRegistry.
    """
    registry = FunctionRegistry(
        _functions=MappingProxyType({func.name: func for func in _BUILTINS})
    )
    if extra:
        registry = registry.with_functions(extra)
    return registry


DEFAULT_FUNCTIONS: FunctionRegistry = create_function_registry()

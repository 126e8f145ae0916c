from datetime import UTC, datetime

from hypothesis import given, strategies as st

from omprender.context import context_from_mapping, default_context
from omprender.enums import ErrorMarker
from omprender.segments import strip_markup
from omprender.templating import TemplateResolver, resolve
from omprender.templating._functions import template_div, template_round

CONTEXT = default_context(now=datetime(2024, 3, 9, 14, 5, 7, tzinfo=UTC))

plain_text = st.text().filter(lambda s: "{{" not in s)
finite_floats = st.floats(
    min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False
)
field_names = st.sampled_from(
    [".Git.Branch", ".Shell.Name", ".Os.Platform", ".Nope", ".Env.HOME", ".Env.X"]
)


@given(text=plain_text)
def test_text_without_actions_is_unchanged(text: str) -> None:
    resolution = TemplateResolver().resolve_with_issues(text, CONTEXT)

    assert resolution.text == text
    assert resolution.issues == ()


@given(parts=st.lists(st.one_of(plain_text, field_names.map(lambda f: f"{{{{ {f} }}}}"))))
def test_resolution_is_deterministic(parts: list[str]) -> None:
    template = "".join(parts)

    assert resolve(template, CONTEXT) == resolve(template, CONTEXT)


@given(text=st.text(), marker=st.sampled_from(list(ErrorMarker)))
def test_resolution_never_raises(text: str, marker: ErrorMarker) -> None:
    resolution = TemplateResolver(on_error=marker).resolve_with_issues(text, CONTEXT)

    assert isinstance(resolution.text, str)


@given(x=finite_floats, digits=st.integers(min_value=0, max_value=6))
def test_round_is_idempotent(x: float, digits: int) -> None:
    once = template_round(x, digits)

    assert template_round(once, digits) == once


@given(x=finite_floats, digits=st.integers(min_value=0, max_value=6))
def test_round_stays_close(x: float, digits: int) -> None:
    assert abs(template_round(x, digits) - x) <= 0.5 * 10**-digits + 1e-6


@given(x=st.integers(min_value=0, max_value=10**6))
def test_division_by_zero_renders_empty(x: int) -> None:
    assert resolve(f"[{{{{ div {x} 0 }}}}]", CONTEXT) == "[]"


@given(a=finite_floats, b=finite_floats.filter(lambda v: v != 0))
def test_division_matches_float_division(a: float, b: float) -> None:
    assert template_div(a, b) == a / b


@given(
    branch=st.text(min_size=1),
    ahead=st.integers(min_value=0, max_value=100),
    stash=st.integers(min_value=0, max_value=100),
)
def test_git_fields_are_zero_outside_a_repository(
    branch: str, ahead: int, stash: int
) -> None:
    context = context_from_mapping(
        {"Git": {"IsRepo": False, "Branch": branch, "Ahead": ahead, "StashCount": stash}}
    )

    rendered = resolve(
        "{{ .Git.Branch }}|{{ .Git.Ahead }}|{{ .Git.StashCount }}|{{ .Git.Working.Changed }}",
        context,
    )

    assert rendered == "|0|0|false"


@given(text=st.text())
def test_strip_markup_is_idempotent(text: str) -> None:
    once = strip_markup(text)

    assert strip_markup(once) == once

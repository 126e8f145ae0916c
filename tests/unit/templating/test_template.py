import pytest

from omprender.templating import (
    ActionNode,
    ConditionalNode,
    TextNode,
    parse_template,
)
from omprender.templating._template import MAX_IF_DEPTH


class TestParseTemplate:
    def test_plain_text(self) -> None:
        parsed = parse_template("hello")

        assert parsed.nodes == (TextNode("hello"),)
        assert parsed.error is None
        assert parsed.remainder == ""

    def test_empty_template(self) -> None:
        assert parse_template("").nodes == ()

    def test_action_between_text(self) -> None:
        parsed = parse_template("a{{ .B }}c")

        assert parsed.nodes == (
            TextNode("a"),
            ActionNode(source="{{ .B }}", body=".B"),
            TextNode("c"),
        )

    def test_comment_renders_nothing(self) -> None:
        parsed = parse_template("a{{/* note */}}b")

        assert parsed.nodes == (TextNode("a"), TextNode("b"))

    def test_trim_markers(self) -> None:
        parsed = parse_template("a  \n{{- .B -}}\t c")

        assert parsed.nodes == (
            TextNode("a"),
            ActionNode(source="{{- .B -}}", body=".B"),
            TextNode("c"),
        )

    def test_minus_without_space_is_not_a_trim_marker(self) -> None:
        parsed = parse_template("a {{-3}}")

        assert parsed.nodes == (TextNode("a "), ActionNode(source="{{-3}}", body="-3"))

    def test_closing_delimiter_inside_string(self) -> None:
        parsed = parse_template('{{ "}}" }}')

        assert parsed.nodes == (ActionNode(source='{{ "}}" }}', body='"}}"'),)

    def test_conditional(self) -> None:
        parsed = parse_template(
            "{{ if .A }}x{{ else if .B }}y{{ else }}z{{ end }}"
        )

        (node,) = parsed.nodes
        assert isinstance(node, ConditionalNode)
        assert [branch.condition for branch in node.branches] == [".A", ".B"]
        assert node.branches[0].nodes == (TextNode("x"),)
        assert node.branches[1].source == "{{ else if .B }}"
        assert node.otherwise == (TextNode("z"),)

    def test_nested_conditionals(self) -> None:
        parsed = parse_template("{{ if .A }}{{ if .B }}ab{{ end }}{{ end }}")

        (outer,) = parsed.nodes
        assert isinstance(outer, ConditionalNode)
        (inner,) = outer.branches[0].nodes
        assert isinstance(inner, ConditionalNode)
        assert inner.branches[0].nodes == (TextNode("ab"),)

    @pytest.mark.parametrize(
        ("source", "kept", "remainder", "message"),
        [
            ("ab{{ .C", (TextNode("ab"),), "{{ .C", "unclosed action"),
            (
                "x{{ if .A }}y",
                (TextNode("x"),),
                "{{ if .A }}y",
                "missing {{ end }}",
            ),
            ("x{{ end }}y", (TextNode("x"),), "{{ end }}y", "unexpected {{ end }}"),
            ("{{ else }}", (), "{{ else }}", "unexpected {{ else }}"),
            ("{{ if }}x{{ end }}", (), "{{ if }}x{{ end }}", "missing condition"),
            ("a{{/* open", (TextNode("a"),), "{{/* open", "unclosed comment"),
            (
                "{{ if .A }}x{{ else }}y{{ else }}z{{ end }}",
                (),
                "{{ if .A }}x{{ else }}y{{ else }}z{{ end }}",
                "expected {{ end }} after else",
            ),
        ],
    )
    def test_structural_errors_keep_the_prefix(
        self,
        source: str,
        kept: tuple[TextNode, ...],
        remainder: str,
        message: str,
    ) -> None:
        parsed = parse_template(source)

        assert parsed.nodes == kept
        assert parsed.remainder == remainder
        assert parsed.error is not None
        assert message in str(parsed.error)

    def test_unclosed_action_inside_conditional(self) -> None:
        parsed = parse_template("{{ if .A }}x{{ .B")

        assert parsed.nodes == ()
        assert parsed.remainder == "{{ if .A }}x{{ .B"
        assert "unclosed action" in str(parsed.error)

    def test_bad_expression_is_not_structural(self) -> None:
        parsed = parse_template("{{ .A .B }}")

        assert parsed.error is None
        assert parsed.nodes == (ActionNode(source="{{ .A .B }}", body=".A .B"),)

    def test_deep_conditional_nesting_is_a_structural_error(self) -> None:
        source = "{{ if true }}" * 500 + "x" + "{{ end }}" * 500
        parsed = parse_template(source)

        assert parsed.nodes == ()
        assert parsed.remainder == source
        assert "nested deeper than" in str(parsed.error)

    def test_nesting_up_to_the_limit_parses(self) -> None:
        source = "{{ if true }}" * MAX_IF_DEPTH + "x" + "{{ end }}" * MAX_IF_DEPTH

        assert parse_template(source).error is None

from dataclasses import replace

from pytest_mock import MockerFixture

from omprender.context import Context, GitContext
from omprender.enums import Alignment, ErrorMarker, IssueKind
from omprender.segments import SegmentProcessor, process_block, render_theme
from omprender.templating import TemplateResolver
from omprender.theme import Block, Segment, theme_from_mapping

MEMORY_TEMPLATE = (
    "MEM: {{ (div ((sub .PhysicalTotalMemory .PhysicalFreeMemory)|float64)"
    " 1000000000.0) }}/{{ (div .PhysicalTotalMemory 1000000000.0) }} GB"
)


class TestProcess:
    def test_git_segment(self, context: Context) -> None:
        segment = Segment(
            type="git",
            template="{{ .HEAD }}{{ if .Working.Changed }}*{{ .Working.String }}{{ end }}",
        )

        resolved = SegmentProcessor().process(segment, context)

        assert resolved.text == "main*1"
        assert resolved.key == "Git"
        assert resolved.issues == ()

    def test_sysinfo_segment(self, context: Context) -> None:
        segment = Segment(type="sysinfo", template=MEMORY_TEMPLATE)

        assert SegmentProcessor().process(segment, context).text == "MEM: 8/16 GB"

    def test_template_property_is_a_fallback(self, context: Context) -> None:
        segment = Segment(type="shell", properties={"template": "{{ .Name }}"})

        assert SegmentProcessor().process(segment, context).text == "bash"

    def test_text_property_is_a_fallback(self, context: Context) -> None:
        segment = Segment(type="text", properties={"text": "hi {{ .Shell.Name }}"})

        assert SegmentProcessor().process(segment, context).text == "hi bash"

    def test_placeholder_when_nothing_to_render(self, context: Context) -> None:
        assert SegmentProcessor().process(Segment(type="battery"), context).text == (
            "[battery]"
        )

    def test_prefix_and_postfix(self, context: Context) -> None:
        segment = Segment(
            type="shell",
            template="{{ .Name }}",
            properties={"prefix": "<", "postfix": " {{ .Os.Platform }}>"},
        )

        resolved = SegmentProcessor().process(segment, context)

        assert (resolved.prefix, resolved.text, resolved.postfix) == (
            "<",
            "bash",
            " ubuntu>",
        )
        assert resolved.display_text == "<bash ubuntu>"

    def test_template_issue_keeps_source(self, context: Context) -> None:
        segment = Segment(type="sysinfo", template="{{ round .X }}")

        resolved = SegmentProcessor().process(segment, context)

        assert resolved.text == "{{ round .X }}"
        (issue,) = resolved.issues
        assert issue.kind is IssueKind.EVALUATION
        assert issue.segment == "Sysinfo"

    def test_template_issue_renders_empty(self, context: Context) -> None:
        processor = SegmentProcessor(
            resolver=TemplateResolver(on_error=ErrorMarker.EMPTY)
        )
        segment = Segment(type="sysinfo", template="[{{ round .X }}]")

        assert processor.process(segment, context).text == "[]"

    def test_rejected_property_is_reported(self, context: Context) -> None:
        segment = Segment(
            type="sysinfo",
            template="{{ .Precision }}",
            properties={"precision": -1},
        )

        resolved = SegmentProcessor().process(segment, context, segment_id="0.0:X")

        assert resolved.text == "0"
        (issue,) = resolved.issues
        assert issue.kind is IssueKind.PROPERTIES
        assert issue.expression == "properties.precision"
        assert issue.segment == "0.0:X"

    def test_fields_are_published(self, context: Context) -> None:
        resolved = SegmentProcessor().process(Segment(type="shell"), context)

        assert resolved.fields == {"Name": "bash"}

    def test_own_fields_visible_under_segments(self, context: Context) -> None:
        segment = Segment(type="shell", template="{{ .Segments.Shell.Name }}")

        assert SegmentProcessor().process(segment, context).text == "bash"

    def test_to_dict(self, context: Context) -> None:
        resolved = SegmentProcessor().process(
            Segment(type="git", template="{{ .HEAD }}"), context
        )

        data = resolved.to_dict()

        assert data["text"] == "main"
        assert data["style"] == "plain"
        assert data["fields"]["Working"] == {"Changed": True, "String": "1"}  # pyright: ignore[reportIndexIssue]
        assert data["issues"] == []

    def test_logs_each_segment(self, context: Context, mocker: MockerFixture) -> None:
        logger = mocker.MagicMock()

        SegmentProcessor(logger=logger).process(Segment(type="shell"), context)

        logger.debug.assert_called_once_with(
            "segment_processed", segment="Shell", type="shell", issues=0
        )


class TestProcessBlock:
    def test_later_segments_see_earlier_ones(self, context: Context) -> None:
        block = Block(
            segments=(
                Segment(type="git", template="{{ .HEAD }}"),
                Segment(type="text", template="on {{ .Segments.Git.HEAD }}"),
            )
        )

        resolved = process_block(block, context)

        assert [s.text for s in resolved.segments] == ["main", "on main"]

    def test_earlier_segments_do_not_see_later_ones(self, context: Context) -> None:
        block = Block(
            segments=(
                Segment(type="text", template="[{{ .Segments.Git.HEAD }}]"),
                Segment(type="git", template="{{ .HEAD }}"),
            )
        )

        assert process_block(block, context).segments[0].text == "[]"

    def test_git_fields_empty_outside_repository(self, context: Context) -> None:
        context = replace(context, git=GitContext(branch="x", is_repo=False))
        block = Block(
            segments=(
                Segment(type="git", template="{{ .HEAD }}"),
                Segment(
                    type="text",
                    template="[{{ .Segments.Git.HEAD }}{{ .Segments.Git.Status }}]",
                ),
            )
        )

        resolved = process_block(block, context)

        assert [s.text for s in resolved.segments] == ["", "[]"]

    def test_alias_names_the_entry(self, context: Context) -> None:
        block = Block(
            segments=(
                Segment(type="path", alias="Here", properties={"style": "folder"}),
                Segment(type="text", template="{{ .Segments.Here.Path }}"),
            )
        )

        assert process_block(block, context).segments[1].text == "my-project"

    def test_issue_segment_ids(self, context: Context) -> None:
        block = Block(
            segments=(
                Segment(type="text", template="ok"),
                Segment(type="git", template="{{ nope }}"),
            )
        )

        resolved = SegmentProcessor().process_block(block, context, block_index=2)

        assert [issue.segment for issue in resolved.issues] == ["2.1:Git"]


class TestRenderTheme:
    def test_blocks_are_independent(self, context: Context) -> None:
        theme = theme_from_mapping(
            {
                "blocks": [
                    {"segments": [{"type": "git", "template": "{{ .HEAD }}"}]},
                    {
                        "alignment": "right",
                        "segments": [
                            {"type": "text", "template": "[{{ .Segments.Git.HEAD }}]"}
                        ],
                    },
                ]
            }
        )

        blocks = render_theme(theme, context)

        assert [b.segments[0].text for b in blocks] == ["main", "[]"]
        assert blocks[1].alignment is Alignment.RIGHT

    def test_is_deterministic(self, context: Context) -> None:
        theme = theme_from_mapping(
            {"blocks": [{"segments": [{"type": "sysinfo", "template": MEMORY_TEMPLATE}]}]}
        )

        assert render_theme(theme, context) == render_theme(theme, context)

from omprender.enums import Alignment, SegmentStyle
from omprender.segments import ResolvedBlock, ResolvedSegment, compose_plain, strip_markup


def segment(text: str, *, prefix: str = "", postfix: str = "") -> ResolvedSegment:
    return ResolvedSegment(
        type="text",
        key="Text",
        style=SegmentStyle.DIAMOND,
        foreground="",
        background="",
        leading_diamond="<<",
        trailing_diamond=">>",
        alias=None,
        text=text,
        prefix=prefix,
        postfix=postfix,
    )


def block(
    *texts: str, alignment: Alignment = Alignment.LEFT, newline: bool = False
) -> ResolvedBlock:
    return ResolvedBlock(
        type="prompt",
        alignment=alignment,
        newline=newline,
        segments=tuple(segment(text) for text in texts),
    )


class TestStripMarkup:
    def test_removes_color_and_style_tags(self) -> None:
        assert strip_markup("<#ff0000>red</> <b>bold</b>") == "red bold"

    def test_removes_compound_tags(self) -> None:
        assert strip_markup("<transparent,#61AFEF>x</>") == "x"

    def test_keeps_comparison_text(self) -> None:
        assert strip_markup("a < b") == "a < b"


class TestComposePlain:
    def test_no_blocks(self) -> None:
        assert compose_plain([]) == []

    def test_segments_are_concatenated_without_diamonds(self) -> None:
        assert compose_plain([block("a", "b")]) == ["ab"]

    def test_prefix_and_postfix(self) -> None:
        resolved = ResolvedBlock(
            type="prompt",
            alignment=Alignment.LEFT,
            newline=False,
            segments=(segment("x", prefix="[", postfix="]"),),
        )

        assert compose_plain([resolved]) == ["[x]"]

    def test_right_block_follows_after_a_space(self) -> None:
        lines = compose_plain([block("left"), block("right", alignment=Alignment.RIGHT)])

        assert lines == ["left right"]

    def test_right_only_line(self) -> None:
        assert compose_plain([block("r", alignment=Alignment.RIGHT)]) == ["r"]

    def test_newline_starts_a_new_line(self) -> None:
        lines = compose_plain([block("one"), block("two", newline=True)])

        assert lines == ["one", "two"]

    def test_leading_newline_does_not_add_blank_line(self) -> None:
        assert compose_plain([block("one", newline=True)]) == ["one"]

    def test_markup_is_stripped(self) -> None:
        assert compose_plain([block("<#fff>main</>")]) == ["main"]

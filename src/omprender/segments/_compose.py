"""Plain-text layout of resolved blocks for terminal previews."""

import re
from collections.abc import Iterable

from omprender.enums import Alignment

from ._processor import ResolvedBlock

# Color and style markup: <#ff0000>, <b>, <transparent,#fff>, </b>, </>.
_MARKUP_RE = re.compile(r"</?[#\w,.\-]*>")


def strip_markup(text: str) -> str:
    """Remove color and style markup from segment text."""
    return _MARKUP_RE.sub("", text)


def _block_text(block: ResolvedBlock) -> str:
    return "".join(strip_markup(segment.display_text) for segment in block.segments)


def compose_plain(blocks: Iterable[ResolvedBlock]) -> list[str]:
    """Lay resolved blocks out as lines of plain text.

    A block with `newline` set starts a new line. On each line, left-aligned
    blocks come first; right-aligned blocks follow after a single space.
    Diamonds and colors are not rendered.

    Args:
        blocks: Resolved blocks in document order.

    Returns:
        The preview lines.
    """
    lines: list[str] = []
    left: list[str] = []
    right: list[str] = []
    started = False

    def flush() -> None:
        left_text, right_text = "".join(left), "".join(right)
        if left_text and right_text:
            lines.append(f"{left_text} {right_text}")
        else:
            lines.append(left_text or right_text)
        left.clear()
        right.clear()

    for block in blocks:
        if block.newline and started:
            flush()
        started = True
        target = right if block.alignment is Alignment.RIGHT else left
        target.append(_block_text(block))

    if started:
        flush()
    return lines

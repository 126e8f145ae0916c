"""Segment processing: derived fields plus template resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import structlog
from structlog.typing import FilteringBoundLogger

from omprender.context import Context, to_plain
from omprender.enums import Alignment, IssueKind, SegmentStyle
from omprender.templating import TemplateIssue, TemplateResolver
from omprender.theme import Block, Segment, ThemeDocument

from ._derived import derive_fields
from ._properties import SegmentProperties, validate_properties


@dataclass(frozen=True, slots=True)
class ResolvedSegment:
    """A segment with its text fully resolved.

    Attributes:
        type: Segment type.
        key: Name of the segment's entry in `.Segments`.
        style: Visual style.
        foreground: Foreground color.
        background: Background color.
        leading_diamond: Leading decoration.
        trailing_diamond: Trailing decoration.
        alias: Alias from the theme, if any.
        text: Resolved template text.
        prefix: Resolved prefix.
        postfix: Resolved postfix.
        fields: Derived fields published under `.Segments.<key>`.
        issues: Problems met while resolving this segment.
    """

    type: str
    key: str
    style: SegmentStyle
    foreground: str
    background: str
    leading_diamond: str
    trailing_diamond: str
    alias: str | None
    text: str
    prefix: str
    postfix: str
    fields: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))
    issues: tuple[TemplateIssue, ...] = ()

    @property
    def display_text(self) -> str:
        """Prefix, text and postfix joined."""
        return f"{self.prefix}{self.text}{self.postfix}"

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "key": self.key,
            "style": str(self.style),
            "foreground": self.foreground,
            "background": self.background,
            "leading_diamond": self.leading_diamond,
            "trailing_diamond": self.trailing_diamond,
            "alias": self.alias,
            "text": self.text,
            "prefix": self.prefix,
            "postfix": self.postfix,
            "fields": to_plain(self.fields),
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass(frozen=True, slots=True)
class ResolvedBlock:
    """A block of resolved segments."""

    type: str
    alignment: Alignment
    newline: bool
    segments: tuple[ResolvedSegment, ...] = ()

    @property
    def issues(self) -> tuple[TemplateIssue, ...]:
        return tuple(issue for segment in self.segments for issue in segment.issues)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "alignment": str(self.alignment),
            "newline": self.newline,
            "segments": [segment.to_dict() for segment in self.segments],
        }


@dataclass(slots=True)
class SegmentProcessor:
    """Resolves segments, blocks and whole themes against a context.

    Attributes:
        resolver: Template resolver used for every template.
        logger: Logger for processing events. Defaults to the package logger.
    """

    resolver: TemplateResolver = field(default_factory=TemplateResolver)
    logger: FilteringBoundLogger | None = None

    @property
    def log(self) -> FilteringBoundLogger:
        if self.logger is None:
            self.logger = structlog.get_logger("omprender")
        return self.logger

    def _properties(
        self, segment: Segment, segment_id: str
    ) -> tuple[SegmentProperties, list[TemplateIssue]]:
        properties, rejected = validate_properties(segment.type, segment.properties)
        issues: list[TemplateIssue] = []
        for key, message in rejected.items():
            issue = TemplateIssue(
                kind=IssueKind.PROPERTIES,
                message=message,
                expression=f"properties.{key}",
                segment=segment_id,
            )
            issues.append(issue)
            self.log.warning(
                "template_issue",
                kind=str(issue.kind),
                message=issue.message,
                expression=issue.expression,
                segment=segment_id,
            )
        return properties, issues

    def process(
        self,
        segment: Segment,
        context: Context,
        *,
        segment_id: str | None = None,
    ) -> ResolvedSegment:
        """Resolve one segment.

        The segment's derived fields are published under `.Segments.<key>`
        and are also visible directly in its own templates.

        Args:
            segment: Segment from the theme.
            context: Context to resolve against.
            segment_id: Identifier recorded on issues. Defaults to the key.

        Returns:
            The ResolvedSegment. Never raises for template problems.
        """
        key = segment.key
        sid = segment_id if segment_id is not None else key

        properties, issues = self._properties(segment, sid)
        fields = derive_fields(segment.type, context, properties)
        augmented = context.with_segment(key, fields)

        template = (
            segment.template
            or properties.template
            or properties.text
            or f"[{segment.type}]"
        )
        resolved: dict[str, str] = {}
        for name, source in (
            ("text", template),
            ("prefix", properties.prefix),
            ("postfix", properties.postfix),
        ):
            if not source:
                resolved[name] = ""
                continue
            resolution = self.resolver.resolve_with_issues(
                source, augmented, segment=sid, fields=fields
            )
            resolved[name] = resolution.text
            issues.extend(resolution.issues)

        self.log.debug(
            "segment_processed",
            segment=sid,
            type=segment.type,
            issues=len(issues),
        )
        return ResolvedSegment(
            type=segment.type,
            key=key,
            style=segment.style,
            foreground=segment.foreground,
            background=segment.background,
            leading_diamond=segment.leading_diamond,
            trailing_diamond=segment.trailing_diamond,
            alias=segment.alias,
            text=resolved["text"],
            prefix=resolved["prefix"],
            postfix=resolved["postfix"],
            fields=MappingProxyType(fields),
            issues=tuple(issues),
        )

    def process_block(
        self, block: Block, context: Context, *, block_index: int = 0
    ) -> ResolvedBlock:
        """Resolve a block's segments left to right.

        Each segment sees the `.Segments` entries of the segments before it.
        """
        segments: list[ResolvedSegment] = []
        for index, segment in enumerate(block.segments):
            resolved = self.process(
                segment, context, segment_id=f"{block_index}.{index}:{segment.key}"
            )
            segments.append(resolved)
            context = context.with_segment(resolved.key, resolved.fields)
        return ResolvedBlock(
            type=block.type,
            alignment=block.alignment,
            newline=block.newline,
            segments=tuple(segments),
        )

    def render_theme(
        self, theme: ThemeDocument, context: Context
    ) -> tuple[ResolvedBlock, ...]:
        """Resolve every block. Blocks do not see each other's segments."""
        return tuple(
            self.process_block(block, context, block_index=index)
            for index, block in enumerate(theme.blocks)
        )


def process_block(
    block: Block,
    context: Context,
    *,
    processor: SegmentProcessor | None = None,
) -> ResolvedBlock:
    """Resolve a block with a default processor unless one is given."""
    return (processor or SegmentProcessor()).process_block(block, context)


def render_theme(
    theme: ThemeDocument,
    context: Context,
    *,
    processor: SegmentProcessor | None = None,
) -> tuple[ResolvedBlock, ...]:
    """Resolve a whole theme with a default processor unless one is given."""
    return (processor or SegmentProcessor()).render_theme(theme, context)

"""Theme document models.

A theme is an ordered list of blocks, each holding an ordered list of
segments. Keys the renderer does not use (`$schema`, `version`, `upgrade`,
color palettes, ...) are accepted and ignored.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from omprender.enums import Alignment, SegmentStyle


class Segment(BaseModel):
    """One segment of a block.

    Attributes:
        type: Segment type, e.g. "git", "path", "text".
        style: Visual style consumed by the rendering layer.
        foreground: Foreground color.
        background: Background color.
        leading_diamond: Decoration before a diamond segment.
        trailing_diamond: Decoration after a diamond segment.
        template: Template producing the segment text.
        alias: Name under which the segment's fields are published in
            `.Segments`. Defaults to the title-cased type.
        properties: Free-form, type-dependent settings. Validated per type
            by the segment processor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(min_length=1)
    style: SegmentStyle = SegmentStyle.PLAIN
    foreground: str = ""
    background: str = ""
    leading_diamond: str = ""
    trailing_diamond: str = ""
    template: str | None = None
    alias: str | None = None
    properties: dict[str, JsonValue] = Field(default_factory=dict)

    @property
    def key(self) -> str:
        """Name of this segment's entry in `.Segments`.

        The alias when set, otherwise the type in CamelCase with underscores
        removed (`git` is `Git`, `battery_x` is `BatteryX`).
        """
        if self.alias:
            return self.alias
        return "".join(part[:1].upper() + part[1:] for part in self.type.split("_"))


class Block(BaseModel):
    """An ordered group of segments sharing alignment and line placement."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    type: str = "prompt"
    alignment: Alignment = Alignment.LEFT
    newline: bool = False
    segments: tuple[Segment, ...] = ()


class ThemeDocument(BaseModel):
    """A whole theme document."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    blocks: tuple[Block, ...] = ()
    final_space: bool = False

# pyright: reportAny=false
"""Per-type segment property models.

Properties arrive as a free-form mapping. Each segment type validates the
keys it understands; unknown keys are kept as extras (the `os` segment reads
its icons from them).
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, JsonValue, ValidationError


class PathStyle(StrEnum):
    FULL = "full"
    FOLDER = "folder"
    LETTER = "letter"


class SegmentProperties(BaseModel):
    """Properties understood by every segment type.

    Attributes:
        template: Fallback template when the segment has none.
        text: Fallback text for plain text segments.
        prefix: Template rendered before the segment text.
        postfix: Template rendered after the segment text.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="allow")

    template: str | None = None
    text: str | None = None
    prefix: str = ""
    postfix: str = ""

    def extra(self, key: str) -> JsonValue:
        """Return an extra property not declared on the model, or None."""
        extras = self.model_extra or {}
        return extras.get(key)


class GitProperties(SegmentProperties):
    branch_icon: str = ""
    branch_ahead_icon: str = "↑"
    branch_behind_icon: str = "↓"
    working_icon: str = "\uf044"
    staging_icon: str = "\uf046"
    stash_icon: str = "\ueb4b"


class SysinfoProperties(SegmentProperties):
    precision: int | None = Field(default=None, ge=0)


class PathProperties(SegmentProperties):
    style: PathStyle = PathStyle.FULL
    home_icon: str = "~"
    folder_separator_icon: str = "/"


class TimeProperties(SegmentProperties):
    time_format: str = "15:04:05"


PROPERTY_MODELS: Mapping[str, type[SegmentProperties]] = {
    "git": GitProperties,
    "sysinfo": SysinfoProperties,
    "path": PathProperties,
    "time": TimeProperties,
}


def validate_properties(
    segment_type: str, properties: Mapping[str, JsonValue]
) -> tuple[SegmentProperties, dict[str, str]]:
    """Validate properties for a segment type.

    Keys whose values fail validation are dropped so that their defaults
    apply; the remaining keys are kept.

    Args:
        segment_type: Segment type name.
        properties: Raw properties mapping.

    Returns:
        The validated properties and a message for each rejected key.
    """
    model = PROPERTY_MODELS.get(segment_type, SegmentProperties)
    try:
        return model.model_validate(properties), {}
    except ValidationError as e:
        rejected: dict[str, str] = {}
        for detail in e.errors():
            key = str(detail["loc"][0]) if detail["loc"] else ""
            rejected.setdefault(key, f"{key}: {detail['msg']}")

    kept = {key: value for key, value in properties.items() if key not in rejected}
    return model.model_validate(kept), rejected

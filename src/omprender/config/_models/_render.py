"""Render configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from omprender.enums import ErrorMarker


class RenderConfig(BaseModel):
    """Render configuration section.

    Attributes:
        on_error: What a failing placeholder renders as.
        strict: Exit with an error status when any template issue was
            reported.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    on_error: ErrorMarker = ErrorMarker.SOURCE
    strict: bool = False

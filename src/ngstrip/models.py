from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TARGET_MODULE = "@angular/core"

DEFAULT_FACTORY_NAMES = (
    "Component",
    "Directive",
    "Injectable",
    "NgModule",
    "Pipe",
)

LineMode = Literal["collapse", "preserve"]
SpanKind = Literal["statement", "entry", "separator"]


class StripConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_module: str = DEFAULT_TARGET_MODULE
    factory_names: tuple[str, ...] = DEFAULT_FACTORY_NAMES
    line_mode: LineMode = "collapse"
    strip_separators: bool = False


class RemovalSpan(BaseModel):
    """Half-open character range ``[start, end)`` covering exactly one node."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int
    kind: SpanKind

    @model_validator(mode="after")
    def _check_bounds(self) -> "RemovalSpan":
        if self.end <= self.start:
            raise ValueError(f"Span end ({self.end}) must be greater than start ({self.start})")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start


class StripResult(BaseModel):
    language: str
    bindings: list[str]
    spans: list[RemovalSpan]
    text: str

    @property
    def changed(self) -> bool:
        return bool(self.spans)

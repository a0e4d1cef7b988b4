"""Trigger data model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TriggerKind(str, Enum):
    LOAD = "load"
    HOVER = "hover"
    SCROLL = "scroll"
    INTERSECTION = "intersection"
    CLICK = "click"
    FOCUS = "focus"


class TriggerMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold: float | None = None  # visibility ratio (scroll)
    root_margin: str | None = None  # viewport margin (scroll)
    is_style_driven: bool | None = None  # hover affordance comes from resolved style
    event_names: tuple[str, ...] = ()


class TriggerContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TriggerKind
    target_key: str
    metadata: TriggerMetadata = Field(default_factory=TriggerMetadata)


class CursorInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    style: str = "auto"
    url: str | None = None
    hotspot: tuple[int, int] | None = None
    changes_on_hover: bool = False

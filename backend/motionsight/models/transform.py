"""Transform data model — the tagged input variant and the 11-component output."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TransformFunction(BaseModel):
    """One ``name(args...)`` entry of a function list. Args keep their unit suffix."""

    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple[str, ...] = ()


class Matrix2D(BaseModel):
    """``matrix(a, b, c, d, tx, ty)``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["matrix"] = "matrix"
    values: tuple[float, ...]


class Matrix3D(BaseModel):
    """``matrix3d(...)`` — 16 values, column-major."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["matrix3d"] = "matrix3d"
    values: tuple[float, ...]


class FunctionList(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["functions"] = "functions"
    functions: tuple[TransformFunction, ...] = ()


TransformRepresentation = Annotated[
    Union[Matrix2D, Matrix3D, FunctionList],
    Field(discriminator="kind"),
]


class Axis(str, Enum):
    X = "x"
    Y = "y"
    Z = "z"
    SCALE = "scale"
    ROTATE = "rotate"
    NONE = "none"


class MotionComponents(BaseModel):
    """Canonical decomposition. Rotations and skews are in degrees."""

    model_config = ConfigDict(frozen=True)

    translate_x: float = 0.0
    translate_y: float = 0.0
    translate_z: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    scale_z: float = 1.0
    rotate_x: float = 0.0
    rotate_y: float = 0.0
    rotate_z: float = 0.0
    skew_x: float = 0.0
    skew_y: float = 0.0

    @classmethod
    def identity(cls) -> MotionComponents:
        return cls()

    def as_tuple(self) -> tuple[float, ...]:
        return tuple(getattr(self, name) for name in COMPONENT_FIELDS)

    @property
    def average_scale(self) -> float:
        return (self.scale_x + self.scale_y) / 2


COMPONENT_FIELDS: tuple[str, ...] = tuple(MotionComponents.model_fields)

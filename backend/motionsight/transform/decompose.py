"""Matrix decomposition — TransformRepresentation → MotionComponents.

2D matrix layout::

    | a  c  tx |
    | b  d  ty |
    | 0  0  1  |

3D values arrive column-major (m11, m12, m13, m14, m21, ...), so the
translation is the last column and each group of four is one column.

Rotation/skew extraction is ambiguous (several rotation+skew pairs produce
the same matrix). The canonical solution below, sign conventions included,
is fixed so outputs stay comparable across implementations. Skew is not
modelled for 3D input.

Decomposition is total: malformed input yields identity, never an error.
"""

from __future__ import annotations

import logging
import math
import re

import numpy as np

from motionsight.models.transform import (
    Axis,
    FunctionList,
    Matrix2D,
    Matrix3D,
    MotionComponents,
    TransformFunction,
    TransformRepresentation,
)
from motionsight.transform.parser import parse_transform
from motionsight.utils.math_helpers import clamp, is_finite

logger = logging.getLogger(__name__)

# |r13| at or above this is treated as gimbal lock (rotate_y = ±90°).
_GIMBAL_LIMIT = 0.9999
# Below this, dominant_axis reports "none".
_MIN_AXIS_DELTA = 0.01
# Column norms below this cannot be normalised into a rotation block.
_DEGENERATE_NORM = 1e-12

_ANGLE_RE = re.compile(r"^([-+]?(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?)(deg|rad|turn|grad)?$", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?", re.IGNORECASE)

_ANGLE_FACTORS = {
    "deg": 1.0,
    "rad": 180.0 / math.pi,
    "turn": 360.0,
    "grad": 0.9,
}


def decompose(representation: TransformRepresentation) -> MotionComponents:
    """Decompose any transform representation into its 11 components."""
    if isinstance(representation, Matrix2D):
        return _decompose_2d(representation.values)
    if isinstance(representation, Matrix3D):
        return _decompose_3d(representation.values)
    if isinstance(representation, FunctionList):
        return _fold_functions(representation.functions)
    return MotionComponents.identity()


def decompose_string(value: str | None) -> MotionComponents:
    """Parse a resolved ``transform`` value and decompose it."""
    return decompose(parse_transform(value))


def _decompose_2d(values: tuple[float, ...]) -> MotionComponents:
    if len(values) != 6 or not is_finite(*values):
        logger.debug("Matrix2D needs 6 finite values, got %r", values)
        return MotionComponents.identity()

    a, b, c, d, tx, ty = values

    scale_x = math.hypot(a, b)
    scale_y = math.hypot(c, d)

    sign_x = math.copysign(1.0, a) if a != 0 else 1.0
    determinant = a * d - b * c
    sign_y = -1.0 if determinant < 0 else 1.0

    rotation = math.atan2(b, a)
    skew = math.atan2(a * c + b * d, scale_x * scale_x)

    return MotionComponents(
        translate_x=tx,
        translate_y=ty,
        scale_x=scale_x * sign_x,
        scale_y=scale_y * sign_y,
        rotate_z=math.degrees(rotation),
        skew_x=math.degrees(skew),
    )


def _decompose_3d(values: tuple[float, ...]) -> MotionComponents:
    if len(values) != 16 or not is_finite(*values):
        logger.debug("Matrix3D needs 16 finite values, got %d", len(values))
        return MotionComponents.identity()

    # Row j of this array is column j of the matrix.
    columns = np.asarray(values, dtype=np.float64).reshape(4, 4)
    translate = columns[3, :3]
    basis = columns[:3, :3]
    scales = np.linalg.norm(basis, axis=1)

    rotate_x = rotate_y = rotate_z = 0.0
    if np.all(scales > _DEGENERATE_NORM):
        r = basis / scales[:, None]
        r11, r12, r13 = r[0]
        _r21, r22, r23 = r[1]
        r31, _r32, r33 = r[2]

        if abs(r13) < _GIMBAL_LIMIT:
            rotate_y = math.asin(-clamp(float(r13), -1.0, 1.0))
            rotate_x = math.atan2(r23, r33)
            rotate_z = math.atan2(r12, r11)
        else:
            rotate_y = math.pi / 2 if r13 < 0 else -math.pi / 2
            rotate_x = math.atan2(-r31, r22)
            rotate_z = 0.0

    return MotionComponents(
        translate_x=float(translate[0]),
        translate_y=float(translate[1]),
        translate_z=float(translate[2]),
        scale_x=float(scales[0]),
        scale_y=float(scales[1]),
        scale_z=float(scales[2]),
        rotate_x=math.degrees(rotate_x),
        rotate_y=math.degrees(rotate_y),
        rotate_z=math.degrees(rotate_z),
    )


def parse_length(token: str | None, default: float) -> float:
    """Numeric part of a length token (``"10px"`` → 10). Unit is dropped."""
    if token is None:
        return default
    m = _NUMBER_RE.match(token.strip())
    if not m:
        return default
    value = float(m.group(0))
    return value if is_finite(value) else default


def parse_angle(token: str | None) -> float:
    """Angle token → degrees. Unitless means degrees; garbage means 0."""
    if token is None:
        return 0.0
    m = _ANGLE_RE.match(token.strip())
    if not m:
        return 0.0
    unit = (m.group(2) or "deg").lower()
    degrees = float(m.group(1)) * _ANGLE_FACTORS[unit]
    return degrees if is_finite(degrees) else 0.0


def _arg(fn: TransformFunction, index: int) -> str | None:
    return fn.args[index] if index < len(fn.args) else None


def _fold_functions(functions: tuple[TransformFunction, ...]) -> MotionComponents:
    """Left-to-right field overwrite onto identity. Later entries win."""
    fields = MotionComponents.identity().model_dump()

    for fn in functions:
        name = fn.name.lower()

        if name == "translate":
            fields["translate_x"] = parse_length(_arg(fn, 0), 0.0)
            fields["translate_y"] = parse_length(_arg(fn, 1), 0.0)
        elif name == "translatex":
            fields["translate_x"] = parse_length(_arg(fn, 0), 0.0)
        elif name == "translatey":
            fields["translate_y"] = parse_length(_arg(fn, 0), 0.0)
        elif name == "translatez":
            fields["translate_z"] = parse_length(_arg(fn, 0), 0.0)
        elif name == "translate3d":
            fields["translate_x"] = parse_length(_arg(fn, 0), 0.0)
            fields["translate_y"] = parse_length(_arg(fn, 1), 0.0)
            fields["translate_z"] = parse_length(_arg(fn, 2), 0.0)

        elif name == "scale":
            sx = parse_length(_arg(fn, 0), 1.0)
            fields["scale_x"] = sx
            fields["scale_y"] = parse_length(_arg(fn, 1), sx)
        elif name == "scalex":
            fields["scale_x"] = parse_length(_arg(fn, 0), 1.0)
        elif name == "scaley":
            fields["scale_y"] = parse_length(_arg(fn, 0), 1.0)
        elif name == "scalez":
            fields["scale_z"] = parse_length(_arg(fn, 0), 1.0)
        elif name == "scale3d":
            fields["scale_x"] = parse_length(_arg(fn, 0), 1.0)
            fields["scale_y"] = parse_length(_arg(fn, 1), 1.0)
            fields["scale_z"] = parse_length(_arg(fn, 2), 1.0)

        elif name in ("rotate", "rotatez"):
            fields["rotate_z"] = parse_angle(_arg(fn, 0))
        elif name == "rotatex":
            fields["rotate_x"] = parse_angle(_arg(fn, 0))
        elif name == "rotatey":
            fields["rotate_y"] = parse_angle(_arg(fn, 0))
        elif name == "rotate3d":
            _apply_rotate3d(fn, fields)

        elif name == "skew":
            fields["skew_x"] = parse_angle(_arg(fn, 0))
            fields["skew_y"] = parse_angle(_arg(fn, 1))
        elif name == "skewx":
            fields["skew_x"] = parse_angle(_arg(fn, 0))
        elif name == "skewy":
            fields["skew_y"] = parse_angle(_arg(fn, 0))

        elif name == "perspective":
            continue
        else:
            logger.debug("Ignoring transform function %s()", fn.name)

    return MotionComponents(**fields)


def _apply_rotate3d(fn: TransformFunction, fields: dict[str, float]) -> None:
    """``rotate3d(x, y, z, a)`` — angle goes to the dominant axis of the vector."""
    if len(fn.args) < 4:
        return
    x, y, z = (parse_length(_arg(fn, i), 0.0) for i in range(3))
    angle = parse_angle(_arg(fn, 3))
    if abs(x) > abs(y) and abs(x) > abs(z):
        fields["rotate_x"] = angle * float(np.sign(x))
    elif abs(y) > abs(z):
        fields["rotate_y"] = angle * float(np.sign(y))
    else:
        fields["rotate_z"] = angle * float(np.sign(z))


def equal_within_tolerance(a: MotionComponents, b: MotionComponents, tol: float = 0.001) -> bool:
    """True iff every one of the 11 fields differs by less than ``tol``."""
    return all(abs(x - y) < tol for x, y in zip(a.as_tuple(), b.as_tuple()))


def dominant_axis(start: MotionComponents, end: MotionComponents) -> Axis:
    """Axis with the largest aggregate change. Ties: x > y > z > scale > rotate."""
    changes = [
        (Axis.X, abs(end.translate_x - start.translate_x)),
        (Axis.Y, abs(end.translate_y - start.translate_y)),
        (Axis.Z, abs(end.translate_z - start.translate_z)),
        (
            Axis.SCALE,
            abs(end.scale_x - start.scale_x)
            + abs(end.scale_y - start.scale_y)
            + abs(end.scale_z - start.scale_z),
        ),
        (
            Axis.ROTATE,
            abs(end.rotate_x - start.rotate_x)
            + abs(end.rotate_y - start.rotate_y)
            + abs(end.rotate_z - start.rotate_z),
        ),
    ]
    best_axis, best = Axis.NONE, 0.0
    for axis, delta in changes:
        # Strict > keeps the earlier (higher-priority) axis on ties.
        if delta > best:
            best_axis, best = axis, delta
    if best < _MIN_AXIS_DELTA:
        return Axis.NONE
    return best_axis

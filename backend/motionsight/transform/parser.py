"""Transform parser — resolved CSS ``transform`` string → TransformRepresentation.

``matrix(...)`` → Matrix2D, ``matrix3d(...)`` → Matrix3D, anything else is
scanned for ``name(args)`` entries and becomes a FunctionList. Never raises:
``none``/empty/garbage yields an empty FunctionList, which decomposes to
identity.
"""

from __future__ import annotations

import logging
import re

from motionsight.models.transform import (
    FunctionList,
    Matrix2D,
    Matrix3D,
    TransformFunction,
    TransformRepresentation,
)

logger = logging.getLogger(__name__)

_MATRIX_RE = re.compile(r"^matrix\(\s*([^)]*)\)$", re.IGNORECASE)
_MATRIX3D_RE = re.compile(r"^matrix3d\(\s*([^)]*)\)$", re.IGNORECASE)
_FUNCTION_RE = re.compile(r"([a-zA-Z][\w-]*)\(([^)]*)\)")
_ARG_SPLIT_RE = re.compile(r"\s*,\s*|\s+")


def _split_args(args: str) -> tuple[str, ...]:
    return tuple(a for a in _ARG_SPLIT_RE.split(args.strip()) if a)


def _parse_floats(args: str) -> tuple[float, ...] | None:
    try:
        return tuple(float(a) for a in _split_args(args))
    except ValueError:
        return None


def parse_transform(value: str | None) -> TransformRepresentation:
    """Parse a resolved transform value into its tagged representation."""
    if not value:
        return FunctionList()
    text = value.strip()
    if not text or text.lower() == "none":
        return FunctionList()

    m = _MATRIX3D_RE.match(text)
    if m:
        floats = _parse_floats(m.group(1))
        if floats is None:
            logger.debug("Unparseable matrix3d(): %s", text)
            return FunctionList()
        return Matrix3D(values=floats)

    m = _MATRIX_RE.match(text)
    if m:
        floats = _parse_floats(m.group(1))
        if floats is None:
            logger.debug("Unparseable matrix(): %s", text)
            return FunctionList()
        return Matrix2D(values=floats)

    functions = tuple(
        TransformFunction(name=fm.group(1), args=_split_args(fm.group(2)))
        for fm in _FUNCTION_RE.finditer(text)
    )
    return FunctionList(functions=functions)

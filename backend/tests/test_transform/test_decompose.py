"""Tests for matrix and function-list decomposition."""

import math

import pytest

from motionsight.models.transform import Axis, FunctionList, Matrix2D, Matrix3D, MotionComponents, TransformFunction
from motionsight.transform.decompose import (
    decompose,
    decompose_string,
    dominant_axis,
    equal_within_tolerance,
    parse_angle,
    parse_length,
)


def _fn(name: str, *args: str) -> TransformFunction:
    return TransformFunction(name=name, args=args)


def _matrix3d_rotate_z(degrees: float, tx: float = 0, ty: float = 0, tz: float = 0) -> Matrix3D:
    c, s = math.cos(math.radians(degrees)), math.sin(math.radians(degrees))
    return Matrix3D(values=(c, s, 0, 0, -s, c, 0, 0, 0, 0, 1, 0, tx, ty, tz, 1))


def test_translate_only_matrix():
    m = decompose(Matrix2D(values=(1, 0, 0, 1, 100, 50)))
    assert m.translate_x == 100
    assert m.translate_y == 50
    assert m.scale_x == pytest.approx(1)
    assert m.scale_y == pytest.approx(1)
    assert m.rotate_z == pytest.approx(0)


def test_quarter_turn_matrix():
    m = decompose(Matrix2D(values=(0, 1, -1, 0, 0, 0)))
    assert m.rotate_z == pytest.approx(90, abs=0.01)
    assert m.scale_x == pytest.approx(1)
    assert m.scale_y == pytest.approx(1)


def test_scaled_rotation_matrix():
    angle = math.radians(30)
    a, b = 2 * math.cos(angle), 2 * math.sin(angle)
    m = decompose(Matrix2D(values=(a, b, -b, a, 5, -5)))
    assert m.scale_x == pytest.approx(2)
    assert m.scale_y == pytest.approx(2)
    assert m.rotate_z == pytest.approx(30)
    assert m.skew_x == pytest.approx(0, abs=1e-9)


def test_mirrored_matrix_flips_scale_y():
    m = decompose(Matrix2D(values=(1, 0, 0, -1, 0, 0)))
    assert m.scale_x == pytest.approx(1)
    assert m.scale_y == pytest.approx(-1)


def test_skew_matrix():
    m = decompose(Matrix2D(values=(1, 0, math.tan(math.radians(20)), 1, 0, 0)))
    assert m.skew_x == pytest.approx(20, abs=0.01)


def test_malformed_matrices_are_identity():
    assert decompose(Matrix2D(values=(1, 0, 0))) == MotionComponents.identity()
    assert decompose(Matrix2D(values=(1, 0, 0, 1, float("nan"), 0))) == MotionComponents.identity()
    assert decompose(Matrix3D(values=(1.0,) * 15)) == MotionComponents.identity()


def test_matrix3d_translation_and_rotation():
    m = decompose(_matrix3d_rotate_z(45, tx=10, ty=20, tz=30))
    assert (m.translate_x, m.translate_y, m.translate_z) == pytest.approx((10, 20, 30))
    assert m.rotate_z == pytest.approx(45)
    assert m.rotate_x == pytest.approx(0)
    assert m.rotate_y == pytest.approx(0)
    assert m.scale_z == pytest.approx(1)


def test_matrix3d_gimbal_lock():
    # rotateY(90deg): first column is (0, 0, -1)
    m = decompose(Matrix3D(values=(0, 0, -1, 0, 0, 1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1)))
    assert m.rotate_y == pytest.approx(90)
    assert m.rotate_z == 0


def test_matrix3d_zero_column_leaves_rotation_at_zero():
    m = decompose(Matrix3D(values=(0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 7, 0, 0, 1)))
    assert m.translate_x == 7
    assert m.scale_x == 0
    assert (m.rotate_x, m.rotate_y, m.rotate_z) == (0, 0, 0)


def test_function_list_translate_scale_rotate():
    m = decompose(
        FunctionList(functions=(_fn("translate", "10px", "20px"), _fn("scale", "2"), _fn("rotate", "45deg")))
    )
    assert (m.translate_x, m.translate_y) == (10, 20)
    assert (m.scale_x, m.scale_y) == (2, 2)
    assert m.rotate_z == 45


def test_function_list_later_entries_overwrite():
    m = decompose(FunctionList(functions=(_fn("translateX", "10px"), _fn("translateX", "30px"))))
    assert m.translate_x == 30


def test_function_list_ignores_unknown_and_perspective():
    m = decompose(FunctionList(functions=(_fn("perspective", "500px"), _fn("wobble", "3"))))
    assert m == MotionComponents.identity()


def test_rotate3d_picks_dominant_axis():
    m = decompose(FunctionList(functions=(_fn("rotate3d", "0", "-1", "0", "30deg"),)))
    assert m.rotate_y == -30
    assert m.rotate_x == 0


def test_empty_function_list_is_identity():
    assert decompose(FunctionList()) == MotionComponents.identity()


def test_decompose_string_paths():
    assert decompose_string("none") == MotionComponents.identity()
    assert decompose_string("matrix(1, 0, 0, 1, 3, 4)").translate_y == 4
    assert decompose_string("translateY(-12px) scaleX(1.5)").scale_x == 1.5


def test_decompose_is_idempotent():
    for rep in (
        Matrix2D(values=(0.8, 0.6, -0.6, 0.8, 12, -3)),
        _matrix3d_rotate_z(-70, tz=4),
        FunctionList(functions=(_fn("skew", "10deg", "5deg"),)),
    ):
        assert equal_within_tolerance(decompose(rep), decompose(rep))


def test_parse_angle_units():
    assert parse_angle("90deg") == 90
    assert parse_angle("90") == 90
    assert parse_angle(f"{math.pi}rad") == pytest.approx(180)
    assert parse_angle("0.5turn") == 180
    assert parse_angle("100grad") == pytest.approx(90)
    assert parse_angle("sideways") == 0


def test_parse_length_keeps_default_on_garbage():
    assert parse_length("12.5px", 0) == 12.5
    assert parse_length("-3em", 0) == -3
    assert parse_length("auto", 1.0) == 1.0
    assert parse_length(None, 1.0) == 1.0


def test_equal_within_tolerance():
    a = MotionComponents(translate_x=1.0)
    assert equal_within_tolerance(a, MotionComponents(translate_x=1.0005))
    assert not equal_within_tolerance(a, MotionComponents(translate_x=1.01))


def test_dominant_axis():
    start = MotionComponents.identity()
    assert dominant_axis(start, MotionComponents(translate_y=40)) == Axis.Y
    assert dominant_axis(start, MotionComponents(scale_x=1.5)) == Axis.SCALE
    assert dominant_axis(start, MotionComponents(rotate_z=15)) == Axis.ROTATE
    assert dominant_axis(start, MotionComponents(translate_x=0.001)) == Axis.NONE


def test_dominant_axis_tie_prefers_x():
    assert dominant_axis(MotionComponents(), MotionComponents(translate_x=5, translate_y=-5)) == Axis.X


def test_overflowing_tokens_fall_back():
    assert parse_length("1e999px", 0.0) == 0.0
    assert parse_length("-1e999", 1.0) == 1.0
    assert parse_angle("1e999deg") == 0
    assert parse_angle("1e307rad") == 0


def test_overflowing_function_list_is_identity_and_stable():
    rep = FunctionList(functions=(_fn("translateX", "1e999px"), _fn("rotate", "1e999deg")))
    c = decompose(rep)
    assert c == MotionComponents.identity()
    assert equal_within_tolerance(c, decompose(rep))
    assert all(math.isfinite(v) for v in c.as_tuple())


def test_as_tuple_follows_field_order():
    values = MotionComponents(translate_x=2, skew_y=7).as_tuple()
    assert len(values) == 11
    assert values[0] == 2
    assert values[-1] == 7

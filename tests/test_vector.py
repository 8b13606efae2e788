import math

import pytest

from engineone.vector import (
    Quat,
    Vec3,
    aa_normalize,
    cross_product,
    hamilton_product,
    quat_normalize,
    rotate,
)


A = Vec3(1.0, 2.0, 3.0)
B = Vec3(-4.0, 0.5, 2.0)


def test_cross_is_orthogonal_to_inputs():
    c = A.cross(B)
    assert math.isclose(c.dot(A), 0.0, abs_tol=1e-9)
    assert math.isclose(c.dot(B), 0.0, abs_tol=1e-9)


def test_cross_is_anticommutative():
    forward = tuple(A.cross(B))
    backward = tuple(B.cross(A))
    assert forward == pytest.approx(tuple(-v for v in backward), abs=1e-9)


def test_cross_of_axes_follows_right_hand_rule():
    assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)


def test_add_then_subtract_round_trips():
    result = (A + B) - B
    assert tuple(result) == pytest.approx((1.0, 2.0, 3.0), abs=1e-9)


def test_add_and_subtract_values():
    assert tuple(A + B) == pytest.approx((-3.0, 2.5, 5.0))
    assert tuple(A - B) == pytest.approx((5.0, 1.5, 1.0))


def test_norm_matches_norm2():
    assert math.isclose(A.norm() ** 2, A.norm2())
    assert math.isclose(A.dot(A), A.norm2())


def test_normalized_has_unit_length_and_same_direction():
    n = A.normalized()
    assert math.isclose(n.norm(), 1.0)
    assert tuple(n.cross(A)) == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        Vec3().normalized()


def test_rotation_by_identity_is_unchanged():
    result = A.rotated(Quat())
    assert tuple(result) == pytest.approx((1.0, 2.0, 3.0), abs=1e-9)


def test_rotation_preserves_length():
    q = Quat(0.3, -1.2, 0.7, 2.0).normalized()
    assert math.isclose(A.rotated(q).norm(), A.norm())


def test_rotation_undone_by_unit_inverse():
    q = Quat(0.3, -1.2, 0.7, 2.0).normalized()
    result = A.rotated(q).rotated(q.unit_inverse())
    assert tuple(result) == pytest.approx((1.0, 2.0, 3.0), abs=1e-9)


def test_quarter_turn_about_axis_equals_cross_product():
    half = math.pi / 4
    q = Quat(math.cos(half), 0, 0, math.sin(half))
    result = Vec3(1, 0, 0).rotated(q)
    assert tuple(result) == pytest.approx((0.0, 1.0, 0.0), abs=1e-9)


def test_hamilton_identity_and_operator():
    q = Quat(0.5, 1.0, -2.0, 3.0)
    assert q.hamilton(Quat()) == q
    assert Quat() * q == q
    assert q * Quat(2.0, 0.1, 0.2, 0.3) == q.hamilton(Quat(2.0, 0.1, 0.2, 0.3))


def test_unit_quaternion_times_conjugate_is_identity():
    q = Quat(1.0, 2.0, 3.0, 4.0).normalized()
    result = q * q.conjugate()
    assert tuple(result) == pytest.approx((1.0, 0.0, 0.0, 0.0), abs=1e-9)


def test_conjugate_is_involution_and_unit_inverse():
    q = Quat(1.0, 2.0, 3.0, 4.0)
    assert q.conjugate().conjugate() == q
    assert q.unit_inverse() == q.conjugate()


def test_inverse_scales_by_squared_norm():
    q = Quat(1.0, 2.0, 3.0, 4.0)
    inv = q.inverse()
    assert tuple(inv) == pytest.approx((1 / 30, 2 / 30, 3 / 30, 4 / 30), abs=1e-9)


def test_quat_normalized_is_unit():
    assert math.isclose(Quat(1.0, 2.0, 3.0, 4.0).normalized().norm(), 1.0)
    with pytest.raises(ValueError):
        Quat(0, 0, 0, 0).normalized()


def test_quat_str_format():
    assert str(Quat(1.0, 0.0, 0.0, 0.0)) == "quat_t {1.000000, 0.000000, 0.000000, 0.000000}"


def test_cross_product_tables():
    a = {"x": 1.0, "y": 2.0, "z": 3.0}
    b = {"x": -4.0, "y": 0.5, "z": 2.0}
    result = cross_product(a, b)
    assert set(result) == {"x", "y", "z"}
    assert (result["x"], result["y"], result["z"]) == pytest.approx(tuple(A.cross(B)), abs=1e-9)


def test_cross_product_requires_numbers():
    with pytest.raises(TypeError, match="Key y must be a number"):
        cross_product({"x": 1, "y": "2", "z": 3}, {"x": 1, "y": 2, "z": 3})
    with pytest.raises(TypeError, match="Key z must be a number"):
        cross_product({"x": 1, "y": 2, "z": 3}, {"x": 1, "y": 2})


def test_rotate_table_matches_method():
    q = Quat(0.3, -1.2, 0.7, 2.0).normalized()
    result = rotate({"x": 1.0, "y": 2.0, "z": 3.0}, {"w": q.w, "x": q.x, "y": q.y, "z": q.z})
    assert (result["x"], result["y"], result["z"]) == pytest.approx(tuple(A.rotated(q)), abs=1e-9)
    assert "w" not in result


def test_rotate_requires_w():
    with pytest.raises(TypeError, match="Key w must be a number"):
        rotate({"x": 1, "y": 2, "z": 3}, {"x": 0, "y": 0, "z": 0})


def test_hamilton_product_table():
    q0 = {"w": 0.5, "x": 1.0, "y": -2.0, "z": 3.0}
    q1 = {"w": 2.0, "x": 0.1, "y": 0.2, "z": 0.3}
    result = hamilton_product(q0, q1)
    expected = Quat(0.5, 1.0, -2.0, 3.0) * Quat(2.0, 0.1, 0.2, 0.3)
    actual = (result["w"], result["x"], result["y"], result["z"])
    assert actual == pytest.approx(tuple(expected), abs=1e-9)


def test_quat_normalize_table():
    result = quat_normalize({"w": 1.0, "x": 2.0, "y": 3.0, "z": 4.0})
    assert math.isclose(Quat(**result).norm(), 1.0)


def test_quat_normalize_zero_is_returned_unchanged():
    zero = {"w": 0.0, "x": 0.0, "y": 0.0, "z": 0.0}
    assert quat_normalize(zero) == zero


def test_aa_normalize_keeps_angle_and_unit_axis():
    result = aa_normalize({"w": 1.25, "x": 3.0, "y": 0.0, "z": 4.0})
    assert result["w"] == 1.25
    assert math.isclose(Vec3(result["x"], result["y"], result["z"]).norm(), 1.0)


def test_aa_normalize_zero_axis_raises():
    with pytest.raises(ValueError, match="aaNormalize failed"):
        aa_normalize({"w": 1.0, "x": 0.0, "y": 0.0, "z": 0.0})


def test_boolean_is_not_a_number():
    with pytest.raises(TypeError, match="Key x must be a number"):
        aa_normalize({"w": 1.0, "x": True, "y": 0.0, "z": 0.0})
import pytest

from loglog.vec import IVec3, Vec3


def test_add_and_sub_round_trip():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(0.5, 1.0, 1.5)
    assert (a + b) - b == a
    assert a - b == Vec3(0.5, 1.0, 1.5)


def test_scalar_multiply_and_divide_round_trip():
    v = Vec3(0.5, 1.0, 1.5)
    assert (v * 2.0) / 2.0 == v
    assert 2.0 * v == v * 2.0


def test_splat_sets_every_component():
    v = Vec3.splat(0.5)
    assert (v.x, v.y, v.z) == (0.5, 0.5, 0.5)


def test_abs_removes_signs():
    assert Vec3(-0.5, 1.0, -1.5).abs() == Vec3(0.5, 1.0, 1.5)


def test_lerp_endpoints():
    start = Vec3(0.0, 0.0, 0.0)
    end = Vec3(4.0, -2.0, 8.0)
    assert start.lerp(end, 0.0) == start
    assert start.lerp(end, 1.0) == end


def test_lerp_midpoint_is_average():
    start = Vec3(2.0, 4.0, 6.0)
    end = Vec3(4.0, 8.0, 10.0)
    assert start.lerp(end, 0.5) == (start + end) / 2.0


def test_as_ivec3_truncates_towards_zero():
    assert Vec3(1.7, -1.7, 0.2).as_ivec3() == IVec3(1, -1, 0)


def test_as_ivec3_nan_becomes_zero():
    assert Vec3(float("nan"), 2.0, 3.0).as_ivec3() == IVec3(0, 2, 3)


def test_ivec3_round_trip_through_vec3():
    iv = IVec3(7, 2, -5)
    assert iv.as_vec3().as_ivec3() == iv


def test_ivec3_arithmetic_and_hashing():
    a = IVec3(3, 0, 0)
    b = IVec3(0, 0, 1)
    assert a + b - b == a
    assert {a + b: "bird"}[IVec3(3, 0, 1)] == "bird"
    assert -a + a == IVec3.ZERO


def test_vectors_are_immutable():
    v = Vec3(1.0, 2.0, 3.0)
    with pytest.raises(AttributeError):
        v.x = 5.0  # type: ignore[misc]
    assert v.x == 1.0
    assert v == Vec3(1.0, 2.0, 3.0)


def test_iteration_yields_components():
    assert list(IVec3(7, 2, 5)) == [7, 2, 5]
    assert tuple(Vec3(1.0, 2.0, 3.0)) == (1.0, 2.0, 3.0)
import math

import pytest

from nbody.vector_utils import (
    clamp,
    vec_add,
    vec_dist,
    vec_dot,
    vec_len,
    vec_norm,
    vec_perp,
    vec_scale,
    vec_sub,
)


def test_basic_arithmetic():
    assert vec_add((1.0, 2.0), (3.0, -4.0)) == (4.0, -2.0)
    assert vec_sub((1.0, 2.0), (3.0, -4.0)) == (-2.0, 6.0)
    assert vec_scale((1.5, -2.0), 2.0) == (3.0, -4.0)
    assert vec_dot((1.0, 2.0), (3.0, 4.0)) == 11.0


def test_magnitude_and_distance():
    assert vec_len((3.0, 4.0)) == 5.0
    assert vec_dist((1.0, 1.0), (4.0, 5.0)) == 5.0
    assert vec_dist((2.0, 2.0), (2.0, 2.0)) == 0.0


def test_norm_of_zero_vector_is_zero():
    assert vec_norm((0.0, 0.0)) == (0.0, 0.0)
    nx, ny = vec_norm((0.0, -7.0))
    assert (nx, ny) == (0.0, -1.0)


def test_perp_is_orthogonal_and_same_length():
    v = (3.0, -2.0)
    p = vec_perp(v)
    assert vec_dot(v, p) == 0.0
    assert math.isclose(vec_len(p), vec_len(v))
    assert vec_perp((1.0, 0.0)) == (-0.0, 1.0)


@pytest.mark.parametrize("x,expected", [(-1.0, 0.0), (0.5, 0.5), (3.0, 1.0)])
def test_clamp(x, expected):
    assert clamp(x, 0.0, 1.0) == expected

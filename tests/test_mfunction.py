# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from mvlinalg.errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidShapeError,
    NotSupportedError,
    ZeroVectorError,
)
from mvlinalg.matrix import Matrix
from mvlinalg.mfunction import MFunction
from mvlinalg.vector import Vector

POINTS = [(1.0, 2.0), (-0.5, 3.0), (0.0, 0.0), (2.5, -1.25)]


@pytest.fixture
def paraboloid():
    # f(x, y) = x^2 + y^2
    return MFunction(2, 1, lambda v: v[0] ** 2 + v[1] ** 2)


def circle(radius):
    return MFunction(1, 2, lambda t: [radius * math.cos(t), radius * math.sin(t)])


def test_classification_flags():
    f = MFunction(2, 1, lambda v: v[0])
    assert f.is_scalar_valued and not f.is_parametric and not f.is_vector_field

    g = MFunction(3, 3, lambda v: v)
    assert g.is_vector_field and not g.is_scalar_valued

    c = circle(1.0)
    assert c.is_parametric and not c.is_vector_field
    assert (c.input_dim, c.output_dim) == (1, 2)


def test_invalid_construction():
    with pytest.raises(InvalidShapeError):
        MFunction(0, 1, lambda v: 0.0)
    with pytest.raises(InvalidShapeError):
        MFunction(2, 0, lambda v: 0.0)
    with pytest.raises(TypeError):
        MFunction(2, 2, "not callable")


def test_call_coerces_results(paraboloid):
    assert paraboloid(Vector([1, 2])) == 5.0
    assert paraboloid([3, 4]) == 25.0

    f = MFunction(2, 2, lambda v: np.array([v[1], v[0]]))
    assert f([1, 2]) == Vector([2, 1])


def test_wrong_dimensions():
    f = MFunction(2, 2, lambda v: [v[0], v[1], 0.0])
    with pytest.raises(DimensionMismatchError):
        f.jacobian(Vector([1, 2]))

    g = MFunction(2, 1, lambda v: v[0])
    with pytest.raises(DimensionMismatchError):
        g.gradient(Vector([1, 2, 3]))


def test_gradient_of_paraboloid(paraboloid):
    grad = paraboloid.gradient(Vector([1, 2]))
    assert grad.dim == 2
    assert grad.allclose(Vector([2, 4]), atol=1e-4)


def test_partial_derivative_scalar_is_wrapped(paraboloid):
    d = paraboloid.partial_derivative(Vector([1, 2]), 1)
    assert isinstance(d, Vector)
    assert d.dim == 1
    assert math.isclose(d[0], 4.0, abs_tol=1e-4)


def test_partial_derivative_bad_index(paraboloid):
    with pytest.raises(IndexOutOfRangeError):
        paraboloid.partial_derivative(Vector([1, 2]), 2)


def test_jacobian():
    f = MFunction(2, 3, lambda v: [v[0] * v[1], v[0] + v[1], math.sin(v[0])])
    J = f.jacobian(Vector([1, 2]))
    assert J.shape == (3, 2)
    expected = np.array([[2.0, 1.0], [1.0, 1.0], [math.cos(1.0), 0.0]])
    np.testing.assert_allclose(J.to_numpy(), expected, atol=1e-4)


def test_jacobian_of_curve_is_a_column():
    J = circle(2.0).jacobian(0.0)
    assert J.shape == (2, 1)
    assert J.column(0).allclose(Vector([0.0, 2.0]), atol=1e-4)


@pytest.mark.parametrize("point", POINTS)
def test_divergence_of_identity_field(point):
    f = MFunction(2, 2, lambda v: [v[0], v[1]])
    assert math.isclose(f.divergence(Vector(point)), 2.0, abs_tol=1e-4)


@pytest.mark.parametrize("point", POINTS)
def test_curl_of_rotation_field(point):
    f = MFunction(2, 2, lambda v: [-v[1], v[0]])
    assert math.isclose(f.curl(Vector(point)), 2.0, abs_tol=1e-4)


def test_curl_3d():
    rotation = MFunction(3, 3, lambda v: [-v[1], v[0], 0.0])
    assert rotation.curl(Vector([1, 2, 3])).allclose(Vector([0, 0, 2]), atol=1e-4)

    # gradient of xyz is irrotational
    conservative = MFunction(3, 3, lambda v: [v[1] * v[2], v[0] * v[2], v[0] * v[1]])
    assert conservative.curl(Vector([1, 2, 3])).allclose(Vector.zeros(3), atol=1e-4)

    f = MFunction(3, 3, lambda v: [v[1] * v[2], 0.0, v[0] ** 2])
    # (dR/dy - dQ/dz, dP/dz - dR/dx, dQ/dx - dP/dy) = (0, y - 2x, -z)
    assert f.curl(Vector([1, 2, 3])).allclose(Vector([0, 0, -3]), atol=1e-4)


def test_curl_not_supported():
    with pytest.raises(NotSupportedError):
        MFunction(4, 4, lambda v: v).curl(Vector([1, 2, 3, 4]))
    with pytest.raises(NotSupportedError):
        MFunction(2, 3, lambda v: [0, 0, 0]).curl(Vector([1, 2]))


@pytest.mark.parametrize("point", POINTS)
def test_laplacian_of_paraboloid(paraboloid, point):
    assert math.isclose(paraboloid.laplacian(Vector(point)), 4.0, abs_tol=1e-3)


def test_hessian():
    f = MFunction(2, 1, lambda v: v[0] ** 2 * v[1] + 3 * v[1] ** 2)
    H = f.hessian(Vector([1, 2]))
    assert H.shape == (2, 2)
    assert H.allclose(Matrix.from_rows([[4, 2], [2, 6]]), atol=1e-3)


def test_second_partial_diagonal():
    f = MFunction(2, 1, lambda v: math.exp(v[0]) * v[1])
    d = f.second_partial_derivative(Vector([0.5, 2.0]), 0, 0)
    assert math.isclose(d[0], 2.0 * math.exp(0.5), abs_tol=1e-3)


def test_directional_derivative(paraboloid):
    d = paraboloid.directional_derivative(Vector([1, 2]), Vector([3, 4]))
    assert math.isclose(d, 22.0, abs_tol=1e-3)


def test_scalar_only_operators():
    field = MFunction(2, 2, lambda v: [v[0], v[1]])
    for op in (field.gradient, field.hessian, field.laplacian):
        with pytest.raises(NotSupportedError):
            op(Vector([1, 2]))
    with pytest.raises(NotSupportedError):
        field.directional_derivative(Vector([1, 2]), Vector([1, 0]))


def test_divergence_needs_vector_field(paraboloid):
    with pytest.raises(NotSupportedError):
        paraboloid.divergence(Vector([1, 2]))


def test_parametric_restrictions():
    line = MFunction(1, 1, lambda t: 3 * t)
    with pytest.raises(NotSupportedError):
        line.partial_derivative(Vector([1.0]), 0)
    with pytest.raises(NotSupportedError):
        line.hessian(Vector([1.0]))
    with pytest.raises(NotSupportedError):
        line.divergence(Vector([1.0]))
    with pytest.raises(NotSupportedError):
        line.curl(Vector([1.0]))

    assert line.gradient(2.0).allclose(Vector([3.0]), atol=1e-4)


def test_curve_operators_need_parametric(paraboloid):
    for op in (
        paraboloid.curvature,
        paraboloid.unit_tangent,
        paraboloid.principal_unit_normal,
        paraboloid.parametric_derivative,
        paraboloid.second_parametric_derivative,
    ):
        with pytest.raises(NotSupportedError):
            op(0.0)


@pytest.mark.parametrize("radius", [0.5, 1.0, 2.0, 10.0])
@pytest.mark.parametrize("t", [0.0, 0.7, 2.0])
def test_curvature_of_circle(radius, t):
    assert math.isclose(circle(radius).curvature(t), 1.0 / radius, rel_tol=1e-3)


def test_curvature_of_helix():
    helix = MFunction(1, 3, lambda t: [math.cos(t), math.sin(t), t])
    assert math.isclose(helix.curvature(1.3), 0.5, abs_tol=1e-4)


def test_curvature_of_line_is_zero():
    line = MFunction(1, 2, lambda t: [t, 2 * t])
    assert line.curvature(0.3) < 1e-4


def test_curvature_at_stationary_point():
    still = MFunction(1, 2, lambda t: [1.0, 2.0])
    with pytest.raises(ZeroVectorError):
        still.curvature(0.0)


def test_unit_tangent_and_normal_of_circle():
    c = circle(2.0)
    assert c.unit_tangent(0.0).allclose(Vector([0.0, 1.0]), atol=1e-5)

    t = 0.9
    T = c.unit_tangent(t)
    N = c.principal_unit_normal(t)
    # the normal points back to the centre
    assert N.allclose(Vector([-math.cos(t), -math.sin(t)]), atol=1e-5)
    assert abs(T.dot(N)) < 1e-5


def test_second_parametric_derivative():
    c = circle(1.0)
    assert c.second_parametric_derivative(0.0).allclose(Vector([-1.0, 0.0]), atol=1e-4)


def test_no_caching():
    calls = []

    def rule(v):
        calls.append(v)
        return v[0] * v[1]

    f = MFunction(2, 1, rule)
    f.gradient(Vector([1, 2]))
    first = len(calls)
    f.gradient(Vector([1, 2]))
    assert first == 4  # two evaluations per partial
    assert len(calls) == 2 * first

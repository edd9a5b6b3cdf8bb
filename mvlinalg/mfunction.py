# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Multivariable functions R^n -> R^m and their differential operators.

Every derivative is estimated with central (midpoint) finite
differences from repeated evaluations of the wrapped rule; nothing is
differentiated symbolically and nothing is cached. Step sizes are the
fixed constants in `mvlinalg.utils`.

Example
-------
>>> from mvlinalg import MFunction, Vector
>>> f = MFunction(2, 1, lambda v: v[0] ** 2 + v[1] ** 2)
>>> f.gradient(Vector([1.0, 2.0])).allclose(Vector([2.0, 4.0]), atol=1e-4)
True
"""

import logging
import math
from numbers import Real
from typing import Callable, Sequence, Union

import numpy as np

from .errors import (
    DimensionMismatchError,
    InvalidShapeError,
    NotSupportedError,
    ZeroVectorError,
)
from .matrix import Matrix
from .utils import (
    FIRST_DERIVATIVE_STEP,
    NESTED_INNER_STEP,
    NESTED_OUTER_STEP,
    SECOND_DERIVATIVE_STEP,
)
from .vector import Vector

logger = logging.getLogger(__name__)

Point = Union[Vector, Sequence[float], np.ndarray]
Rule = Callable[..., Union[float, Vector, Sequence[float], np.ndarray]]


class MFunction:
    """
    A function between R^n and R^m.

    Parameters
    ----------
    input_dim : int
        n, at least 1. With n == 1 the function is a parametric curve
        and the rule is called with the float parameter t; otherwise it
        is called with a Vector of dimension n.
    output_dim : int
        m, at least 1. The rule may return a float (m == 1), a Vector,
        or any flat sequence / ndarray of m reals.
    rule : callable
        Pure, deterministic evaluation rule.
    """

    __slots__ = (
        "_input_dim",
        "_output_dim",
        "_rule",
        "_is_parametric",
        "_is_scalar_valued",
        "_is_vector_field",
    )

    def __init__(self, input_dim: int, output_dim: int, rule: Rule):
        if input_dim < 1 or output_dim < 1:
            raise InvalidShapeError(
                f"dimensions must be at least 1, got R^{input_dim} -> R^{output_dim}"
            )
        if not callable(rule):
            raise TypeError("rule must be callable")

        self._input_dim = int(input_dim)
        self._output_dim = int(output_dim)
        self._rule = rule
        self._is_parametric = self._input_dim == 1  # R -> R^m
        self._is_scalar_valued = self._output_dim == 1  # R^n -> R
        self._is_vector_field = self._input_dim == self._output_dim  # R^n -> R^n
        logger.debug(f"new {self!r}")

    @property
    def input_dim(self) -> int:
        return self._input_dim

    @property
    def output_dim(self) -> int:
        return self._output_dim

    @property
    def is_parametric(self) -> bool:
        return self._is_parametric

    @property
    def is_scalar_valued(self) -> bool:
        return self._is_scalar_valued

    @property
    def is_vector_field(self) -> bool:
        return self._is_vector_field

    def __repr__(self) -> str:
        flags = [
            name
            for name, on in (
                ("parametric", self._is_parametric),
                ("scalar", self._is_scalar_valued),
                ("field", self._is_vector_field),
            )
            if on
        ]
        return (
            f"{self.__class__.__name__}(R^{self._input_dim} -> R^{self._output_dim}"
            f"{', ' + '/'.join(flags) if flags else ''})"
        )

    # -----------------------------------------------------------------
    # Evaluation
    # -----------------------------------------------------------------
    def _require(self, ok: bool, what: str, why: str) -> None:
        if not ok:
            raise NotSupportedError(f"{what} undefined for {self!r}: {why}")

    def _point(self, point: Point) -> Vector:
        v = point if isinstance(point, Vector) else Vector(point)
        if v.dim != self._input_dim:
            raise DimensionMismatchError(
                f"point has dimension {v.dim}, function expects {self._input_dim}"
            )
        return v

    def _param(self, t: Union[float, Vector]) -> float:
        if isinstance(t, Vector):
            return self._point(t)[0]
        if not isinstance(t, Real):
            raise TypeError(f"curve parameter must be a real number, got {type(t)}")
        return float(t)

    def _eval(self, x: Union[float, Vector]) -> Vector:
        out = self._rule(x)
        if isinstance(out, Vector):
            result = out
        elif isinstance(out, Real) or np.ndim(out) == 0:
            result = Vector([float(out)])
        else:
            result = Vector(out)
        if result.dim != self._output_dim:
            raise DimensionMismatchError(
                f"rule returned dimension {result.dim}, expected {self._output_dim}"
            )
        return result

    def __call__(self, point: Union[float, Point]) -> Union[float, Vector]:
        x = self._param(point) if self._is_parametric else self._point(point)
        out = self._eval(x)
        return out[0] if self._is_scalar_valued else out

    # -----------------------------------------------------------------
    # Partial derivatives
    # -----------------------------------------------------------------
    def partial_derivative(self, point: Point, index: int) -> Vector:
        """
        d f / d x_index at `point`; scalar results come back as a
        1-component Vector so they can be stacked into matrices.
        """
        self._require(not self._is_parametric, "partial derivative", "parametric")
        v = self._point(point)
        h = FIRST_DERIVATIVE_STEP
        forward = self._eval(v.perturb(index, h))
        backward = self._eval(v.perturb(index, -h))
        return (forward - backward) * (0.5 / h)

    def second_partial_derivative(self, point: Point, index1: int, index2: int) -> Vector:
        """Mixed partial d^2 f / (d x_index1 d x_index2), four-point midpoint stencil."""
        self._require(
            not self._is_parametric, "second partial derivative", "parametric"
        )
        v = self._point(point)
        h = SECOND_DERIVATIVE_STEP

        pp = v.perturb(index1, h).perturb(index2, h)
        mm = v.perturb(index1, -h).perturb(index2, -h)
        pm = v.perturb(index1, h).perturb(index2, -h)
        mp = v.perturb(index1, -h).perturb(index2, h)

        same = self._eval(pp) + self._eval(mm)
        mixed = self._eval(pm) + self._eval(mp)
        return (same - mixed) * (0.25 / h**2)

    # -----------------------------------------------------------------
    # Jacobian family
    # -----------------------------------------------------------------
    def jacobian(self, point: Union[float, Point]) -> Matrix:
        """
        m x n matrix of first partials; column i holds d f / d x_i.

        For a parametric curve this is the m x 1 matrix of r'(t).
        """
        if self._is_parametric:
            return Matrix([self.parametric_derivative(point)])
        v = self._point(point)
        return Matrix([self.partial_derivative(v, i) for i in range(self._input_dim)])

    def gradient(self, point: Union[float, Point]) -> Vector:
        self._require(self._is_scalar_valued, "gradient", "not scalar valued")
        return self.jacobian(point).T.column(0)

    def directional_derivative(self, point: Point, direction: Point) -> float:
        """Rate of change at `point` along `direction` (not normalised)."""
        d = direction if isinstance(direction, Vector) else Vector(direction)
        return self.gradient(point).dot(d)

    def hessian(self, point: Point) -> Matrix:
        self._require(self._is_scalar_valued, "Hessian", "not scalar valued")
        self._require(not self._is_parametric, "Hessian", "parametric")
        v = self._point(point)
        n = self._input_dim
        return Matrix(
            [
                Vector([self.second_partial_derivative(v, row, col)[0] for row in range(n)])
                for col in range(n)
            ]
        )

    def divergence(self, point: Point) -> float:
        self._require(self._is_vector_field, "divergence", "not a vector field")
        self._require(not self._is_parametric, "divergence", "parametric")
        return self.jacobian(point).trace()

    def laplacian(self, point: Point) -> float:
        # laplacian f = div(grad f) = trace(J(grad f)) = trace(H(f))
        self._require(self._is_scalar_valued, "laplacian", "not scalar valued")
        self._require(not self._is_parametric, "laplacian", "parametric")
        return self.hessian(point).trace()

    def curl(self, point: Point) -> Union[float, Vector]:
        """
        Curl of a 2-D or 3-D vector field.

        In 2-D, f = (P, Q) and the scalar dQ/dx - dP/dy is returned (the
        z component of the 3-D curl). In 3-D, f = (P, Q, R).
        """
        self._require(self._is_vector_field, "curl", "not a vector field")
        self._require(not self._is_parametric, "curl", "parametric")
        v = self._point(point)

        if self._input_dim == 2:
            q_wrt_x = self.partial_derivative(v, 0)[1]
            p_wrt_y = self.partial_derivative(v, 1)[0]
            return q_wrt_x - p_wrt_y

        if self._input_dim == 3:
            J = self.jacobian(v)  # J[row = component, col = variable]
            return Vector(
                [
                    J[2, 1] - J[1, 2],
                    J[0, 2] - J[2, 0],
                    J[1, 0] - J[0, 1],
                ]
            )

        raise NotSupportedError(f"curl has no definition here for R^{self._input_dim}")

    # -----------------------------------------------------------------
    # Parametric curves
    # -----------------------------------------------------------------
    def parametric_derivative(
        self, t: Union[float, Vector], h: float = FIRST_DERIVATIVE_STEP
    ) -> Vector:
        """r'(t) by central difference."""
        self._require(self._is_parametric, "parametric derivative", "not parametric")
        t = self._param(t)
        return (self._eval(t + h) - self._eval(t - h)) * (0.5 / h)

    def second_parametric_derivative(self, t: Union[float, Vector]) -> Vector:
        """r''(t) by the central three-point stencil."""
        self._require(
            self._is_parametric, "second parametric derivative", "not parametric"
        )
        t = self._param(t)
        h = SECOND_DERIVATIVE_STEP
        centre = self._eval(t)
        return (self._eval(t + h) - centre * 2.0 + self._eval(t - h)) * (1.0 / h**2)

    def curvature(self, t: Union[float, Vector]) -> float:
        self._require(self._is_parametric, "curvature", "not parametric")
        dS = self.parametric_derivative(t)
        ddS = self.second_parametric_derivative(t)

        speed = dS.norm()
        if speed == 0:
            raise ZeroVectorError(f"curvature undefined at stationary point t={t}")

        radicand = ddS.norm_squared() * dS.norm_squared() - ddS.dot(dS) ** 2
        return math.sqrt(max(radicand, 0.0)) / speed**3

    def unit_tangent(
        self, t: Union[float, Vector], h: float = FIRST_DERIVATIVE_STEP
    ) -> Vector:
        self._require(self._is_parametric, "unit tangent", "not parametric")
        return self.parametric_derivative(t, h).unit()

    def principal_unit_normal(self, t: Union[float, Vector]) -> Vector:
        """Normalised derivative of the unit tangent field T(t)."""
        self._require(self._is_parametric, "principal unit normal", "not parametric")
        t = self._param(t)
        h = NESTED_OUTER_STEP
        ahead = self.unit_tangent(t + h, NESTED_INNER_STEP)
        behind = self.unit_tangent(t - h, NESTED_INNER_STEP)
        return ((ahead - behind) * (0.5 / h)).unit()

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .elimination import forward_eliminate, inverse
from .errors import NotSquareError
from .matrix import Matrix
from .utils import permutation_sign

logger = logging.getLogger(__name__)


def det(A: Matrix) -> float:
    """
    Calculate the determinant of n-by-n matrix A using elimination
    """
    if not A.is_square:
        raise NotSquareError("The determinant is undefined for non-square matrices.")
    U, _c, _pivots, free, perm = forward_eliminate(A)
    if free:
        return 0.0
    sign = permutation_sign(perm)
    diag_prod = float(np.prod(np.diag(U.to_numpy())))
    return sign * diag_prod


def adj(A: Matrix) -> Matrix:
    """
    Adjugate (classical adjoint) of a square matrix A.

    Fast path (det ≠ 0): adj(A) = det(A) · A^{-1}
    Slow path (det = 0): cofactor expansion, one determinant per entry
    """
    if not A.is_square:
        raise NotSquareError("A must be a square matrix")
    n = A.rows
    if n == 1:
        return Matrix.identity(1)

    d = det(A)
    if d != 0.0:
        return d * inverse(A)

    logger.warning("adj(): singular matrix, falling back to cofactor expansion")
    M = A.to_numpy()
    C = np.empty_like(M)
    for i in range(n):
        for j in range(n):
            minor = M[np.arange(n) != i][:, np.arange(n) != j]
            C[i, j] = ((-1) ** (i + j)) * det(Matrix.from_array(minor))
    return Matrix.from_array(C.T)

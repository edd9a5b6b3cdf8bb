# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Null-space bases read off the reduced row-echelon form
"""

import logging
from typing import List

import numpy as np

from .elimination import rref
from .errors import InvalidShapeError
from .matrix import Matrix
from .vector import Vector

logger = logging.getLogger(__name__)


def find_null_space_basis(A: Matrix) -> List[Vector]:
    """
    Constructs one basis vector of N(A) per free column of A.

    Row r of the RREF reads x_p + sum_f R[r, f] x_f = 0 for its pivot
    column p, so choosing x_f = 1 for a single free column f (all other
    free variables 0) fixes x_p = -R[r, f].

    Returns
    -------
    basis : list[Vector]
        Vectors of dimension A.cols, ordered by free column. Empty when
        A has full column rank (N(A) = {0}).
    """
    red = rref(A)
    R = red.matrix.to_numpy()
    n = A.cols

    basis = []
    for f in red.free:
        z = np.zeros(n)
        z[f] = 1.0
        for r, p in enumerate(red.pivots):
            z[p] = -R[r, f]
        basis.append(Vector(z))

    logger.debug(f"null space of {A.rows}x{n} matrix has dimension {len(basis)}")
    return basis


def null_space_matrix(A: Matrix) -> Matrix:
    """
    Matrix N whose columns form a basis of the nullspace of A, so that
    A @ N is (numerically) zero.
    """
    basis = find_null_space_basis(A)
    if not basis:
        raise InvalidShapeError("null space is trivial, no basis columns")
    return Matrix(basis)


def nullity(A: Matrix) -> int:
    """Dimension of N(A), cols(A) - rank(A)."""
    return len(rref(A).free)

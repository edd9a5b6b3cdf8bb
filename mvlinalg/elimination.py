# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from .errors import (
    DimensionMismatchError,
    InconsistentSystemError,
    NotSquareError,
    SingularMatrixError,
    UnderdeterminedSystemError,
)
from .matrix import Matrix
from .utils import PIVOT_TOL, scale_tol
from .vector import Vector

logger = logging.getLogger(__name__)

RHS = Union[Vector, Matrix]


@dataclass(frozen=True)
class RowReduction:
    """
    Reduced row-echelon form of a matrix plus its column classification.

    Attributes
    ----------
    matrix : Matrix
        The RREF of the coefficient matrix.
    pivots : tuple[int]
        Pivot columns; ``pivots[r]`` is the column whose leading 1 sits
        in row r, so pivot rows are strictly increasing.
    free : tuple[int]
        Columns without a pivot, ascending.
    rhs : Matrix | None
        Right-hand side after the same row operations (None if no
        right-hand side was supplied).
    """

    matrix: Matrix
    pivots: Tuple[int, ...]
    free: Tuple[int, ...]
    rhs: Optional[Matrix] = None

    @property
    def rank(self) -> int:
        return len(self.pivots)

    def pivot_row(self, col: int) -> Optional[int]:
        """Row holding the pivot of `col`, or None if `col` is free."""
        try:
            return self.pivots.index(col)
        except ValueError:
            return None

    @property
    def classification(self) -> List[Optional[int]]:
        return [self.pivot_row(col) for col in range(self.matrix.cols)]


@dataclass(frozen=True)
class LinearSolution:
    """Outcome of reducing [A | b]."""

    consistent: bool
    free: Tuple[int, ...]
    particular: Optional[Vector] = None

    @property
    def unique(self) -> bool:
        return self.consistent and not self.free


def _check_matrix(A) -> np.ndarray:
    if not isinstance(A, Matrix):
        raise TypeError("A must be a Matrix")
    return A.to_numpy()


def _rhs_array(A: Matrix, b: Optional[RHS]) -> Optional[np.ndarray]:
    if b is None:
        return None
    if isinstance(b, Vector):
        c = b.to_numpy()[:, None]
    elif isinstance(b, Matrix):
        c = b.to_numpy()
    else:
        raise TypeError("b must be a Vector, a Matrix or None")
    if c.shape[0] != A.rows:
        raise DimensionMismatchError(
            f"right-hand side has {c.shape[0]} rows, matrix has {A.rows}"
        )
    return c


def _eliminate(
    W: np.ndarray, n: int, tol: float
) -> Tuple[List[int], List[int], List[int]]:
    """
    In-place row-echelon reduction of the working array W whose first
    `n` columns are the coefficients; any further columns only follow
    the row operations.
    """
    m = W.shape[0]
    perm = list(range(m))  # Identity Permutation
    pivots: List[int] = []
    free: List[int] = []

    row = 0
    for col in range(n):
        if row == m:
            free.extend(range(col, n))
            break
        # The computation we perform will be more stable if we
        # pick the largest possible number for the pivot column,
        # searching only the rows that do not own a pivot yet.
        col_slice = np.abs(W[row:, col])
        max_idx = int(col_slice.argmax())
        max_val = col_slice[max_idx]

        if max_val <= tol:  # column is numerically zero
            free.append(col)
            continue  # go to next column

        pivot_row = row + max_idx

        # Swap the pivot row into place and record the permutation
        if pivot_row != row:
            W[[row, pivot_row]] = W[[pivot_row, row]]
            perm[row], perm[pivot_row] = perm[pivot_row], perm[row]

        pivots.append(col)

        # Eliminate entries below the pivot
        factors = W[row + 1 :, col] / W[row, col]
        W[row + 1 :, col:] -= factors[:, None] * W[row, col:]
        W[row + 1 :, col] = 0.0

        row += 1  # move to next pivot row

    return pivots, free, perm


def forward_eliminate(
    A: Matrix,
    b: Optional[RHS] = None,
) -> Tuple[Matrix, Optional[Matrix], List[int], List[int], List[int]]:
    """
    Row-echelon reduction with partial pivoting on an m by n matrix A.

    Parameters
    ----------
    A : Matrix                   (m, n)
        Coefficient matrix.
    b : Vector | Matrix | None   (m,) or (m, k)
        Optional right-hand side; same row swaps & updates applied.

    Returns
    -------
    U      : Matrix              (m, n)
        Row-echelon form of A (upper-trapezoidal, not reduced).
    c      : Matrix | None
        b after identical row ops (None if b was None).
    pivots : list[int]
        Column indices where pivots were placed; len = rank(A).
    free : list[int]
        Column indices of the free variables
    perm   : list[int]
        Final row order: row i of U comes from original row perm[i].
    """
    U = _check_matrix(A)
    c = _rhs_array(A, b)
    m, n = U.shape

    tol = scale_tol(U, PIVOT_TOL)
    W = U if c is None else np.hstack([U, c])
    pivots, free, perm = _eliminate(W, n, tol)

    U_out = Matrix.from_array(W[:, :n])
    c_out = None if c is None else Matrix.from_array(W[:, n:])
    return U_out, c_out, pivots, free, perm


def rref(A: Matrix, b: Optional[RHS] = None) -> RowReduction:
    """
    Return the reduced row-echelon form of A with its pivot and free
    columns.

    When `b` is given it is carried as extra column(s) through every row
    operation; pivots are only searched among A's own columns.
    """
    R = _check_matrix(A)
    c = _rhs_array(A, b)
    m, n = R.shape
    tol = scale_tol(R, PIVOT_TOL)

    W = R if c is None else np.hstack([R, c])
    pivots, free, _perm = _eliminate(W, n, tol)

    # backward sweep: one pass per pivot, from bottom to top
    for r, col in reversed(list(enumerate(pivots))):
        W[r] /= W[r, col]  # scale pivot row → 1
        W[r, col] = 1.0

        # zero out entries above the pivot
        for i in range(r):
            factor = W[i, col]
            if factor != 0.0:
                W[i] -= factor * W[r]
            W[i, col] = 0.0

    # Rows past the rank are residue. Noise in the rest is measured
    # against the reduced rows, not A. The rhs keeps its own scale.
    coeff = W[:, :n]
    coeff[len(pivots) :] = 0.0
    coeff[np.abs(coeff) < scale_tol(coeff, PIVOT_TOL)] = 0.0
    logger.debug(f"rref: pivots={pivots} free={free}")

    return RowReduction(
        matrix=Matrix.from_array(W[:, :n]),
        pivots=tuple(pivots),
        free=tuple(free),
        rhs=None if c is None else Matrix.from_array(W[:, n:]),
    )


def solve_system(A: Matrix, b: Vector) -> LinearSolution:
    """
    Reduce [A | b] and report whether A x = b has no, one or infinitely
    many solutions. A consistent system also carries the particular
    solution obtained by setting every free variable to 0.
    """
    if not isinstance(b, Vector):
        raise TypeError("b must be a Vector")
    red = rref(A, b)
    c = red.rhs.column(0).to_numpy()
    # round-off in c grows with b as well as with A
    tol = max(
        scale_tol(A.to_numpy(), PIVOT_TOL),
        scale_tol(b.to_numpy()[:, None], PIVOT_TOL),
    )

    # rows below the last pivot read 0 = c[i]
    if np.any(np.abs(c[red.rank :]) > tol):
        logger.debug("solve_system: inconsistent system (no solution)")
        return LinearSolution(consistent=False, free=red.free)

    x = np.zeros(A.cols)
    for r, col in enumerate(red.pivots):
        x[col] = c[r]
    if red.free:
        logger.debug(
            f"solve_system: free columns {list(red.free)}, infinitely many solutions"
        )
    return LinearSolution(consistent=True, free=red.free, particular=Vector(x))


def solve(A: Matrix, b: Vector) -> Vector:
    """
    Solve A x = b for the unique x.

    Raises
    ------
    InconsistentSystemError : if the system has no solution.
    UnderdeterminedSystemError : if it has infinitely many.
    """
    sol = solve_system(A, b)
    if not sol.consistent:
        raise InconsistentSystemError("inconsistent system (no solution)")
    if sol.free:
        raise UnderdeterminedSystemError(
            f"rank deficient (infinitely many solutions), free columns {list(sol.free)}"
        )
    return sol.particular


def inverse(A: Matrix) -> Matrix:
    """Invert a square matrix by reducing [A | I] to [I | A^-1]."""
    _check_matrix(A)
    if not A.is_square:
        raise NotSquareError(f"inverse undefined for {A.rows}x{A.cols} matrix")
    red = rref(A, Matrix.identity(A.rows))
    if red.free:
        raise SingularMatrixError(
            f"matrix is singular, free columns {list(red.free)}"
        )
    return red.rhs


def rank(A: Matrix) -> int:
    """Matrix rank is the number of pivot columns"""
    return len(forward_eliminate(A)[2])

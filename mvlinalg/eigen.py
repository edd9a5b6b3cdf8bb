# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional

import numpy as np

from .errors import DimensionMismatchError, NotSquareError
from .matrix import Matrix
from .vector import Vector

logger = logging.getLogger(__name__)


def power_iteration(
    A: Matrix,
    max_iter: int = 2000,
    tol: float = 1e-10,
    v0: Optional[Vector] = None,
    return_history: bool = False,
):
    """
    Estimate the dominant eigenvalue (by magnitude) and its eigenvector
    using the Power Iteration method.

    Stops when the residual norm ||A v - λ v||_2 falls below `tol`
    or when `max_iter` is reached. Without a strictly dominant
    eigenvalue (e.g. a rotation) the iteration does not settle and the
    last estimate is returned.

    Parameters
    ----------
    A : Matrix (n,n)
        Real square matrix.
    max_iter : int
        Maximum number of iterations.
    tol : float
        Convergence tolerance on the residual.
    v0 : Vector or None
        Optional initial guess. If None, random normal is used.
    return_history : bool
        If True, also return (num_iters, residual_history).

    Returns
    -------
    lam : float
        Estimated dominant eigenvalue.
    v : Vector
        Corresponding eigenvector (unit norm).
    (iters, hist) : optional
        Iteration count and residual array if return_history=True.
    """
    if not A.is_square:
        raise NotSquareError("Power iteration requires a square matrix.")
    M = A.to_numpy()
    n = A.rows

    # init vector
    if v0 is None:
        v = np.random.randn(n)
    else:
        if v0.dim != n:
            raise DimensionMismatchError("v0 must have dimension n.")
        v = v0.unit().to_numpy()
    v /= np.linalg.norm(v)  # normalize

    lam = 0.0
    iters = 0
    hist = []
    converged = False
    for iters in range(max_iter):
        w = M @ v
        norm_w = np.linalg.norm(w)
        if norm_w < tol:
            # A maps current v to ~0; matrix may be singular.
            lam = 0.0
            converged = True
            break
        v = w / norm_w
        lam_new = v @ (M @ v)  # Rayleigh quotient
        resid = np.linalg.norm(M @ v - lam_new * v)
        hist.append(resid)
        lam = float(lam_new)
        if resid < tol:
            converged = True
            break

    if converged:
        logger.debug(f"power_iteration: converged after {iters + 1} iterations")
    else:
        logger.warning(f"power_iteration: no convergence after {max_iter} iterations")

    v = Vector(v)
    return (lam, v, iters, np.array(hist)) if return_history else (lam, v)

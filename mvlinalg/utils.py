# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

EPS: float = 1e-12

# A column whose largest remaining entry is at or below this (scaled)
# value is treated as numerically zero during elimination.
PIVOT_TOL: float = 1e-9

# Fixed finite-difference steps, never adapted to the input.
FIRST_DERIVATIVE_STEP: float = 1e-10
SECOND_DERIVATIVE_STEP: float = 1e-5

# Differentiating an already differentiated field (the unit tangent)
# amplifies round-off, so both levels use coarser steps.
NESTED_INNER_STEP: float = 1e-5
NESTED_OUTER_STEP: float = 1e-4


def scale_tol(A: np.ndarray, base: float = EPS) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    if A.size == 0:
        return base
    return base * max(1.0, np.linalg.norm(A, ord=np.inf))


def permutation_sign(perm: list[int]) -> float:
    """Return +1 or –1 depending on permutation parity."""
    visited = [False] * len(perm)
    cycles = 0
    for i in range(len(perm)):
        if not visited[i]:
            cycles += 1
            j = i
            while not visited[j]:
                visited[j] = True
                j = perm[j]
    swaps = len(perm) - cycles  # n − #cycles
    return -1.0 if swaps & 1 else 1.0

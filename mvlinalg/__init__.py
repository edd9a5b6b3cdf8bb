# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
mvlinalg
========

A small numerical toolkit: column-oriented vectors and matrices,
row reduction, null-space bases, and finite-difference differential
operators for functions R^n -> R^m.

Public API
~~~~~~~~~~
- Values
    - `Vector`, `Matrix`
- Linear systems
    - `forward_eliminate`, `rref`, `solve`, `solve_system`,
      `inverse`, `rank`
- Rank / null-space tools
    - `find_null_space_basis`, `null_space_matrix`, `nullity`
- Matrix utilities
    - `det`, `adj`, `power_iteration`
- Multivariable calculus
    - `MFunction`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> from mvlinalg import Matrix, Vector, find_null_space_basis
>>> A = Matrix([Vector([1, 2]), Vector([2, 4])])
>>> [A @ v for v in find_null_space_basis(A)]
[Vector([0.0, 0.0])]
"""

from importlib.metadata import version as _pkg_version

from .basis import find_null_space_basis, null_space_matrix, nullity
from .eigen import power_iteration
from .elimination import (
    LinearSolution,
    RowReduction,
    forward_eliminate,
    inverse,
    rank,
    rref,
    solve,
    solve_system,
)
from .errors import (
    DimensionMismatchError,
    InconsistentSystemError,
    IndexOutOfRangeError,
    InvalidShapeError,
    LinalgError,
    NotSquareError,
    NotSupportedError,
    SingularMatrixError,
    UnderdeterminedSystemError,
    ZeroVectorError,
)
from .matrix import Matrix
from .matrix_functions import adj, det
from .mfunction import MFunction
from .vector import Vector

__all__ = [
    "Vector",
    "Matrix",
    "MFunction",
    "RowReduction",
    "LinearSolution",
    "forward_eliminate",
    "rref",
    "solve",
    "solve_system",
    "inverse",
    "rank",
    "find_null_space_basis",
    "null_space_matrix",
    "nullity",
    "det",
    "adj",
    "power_iteration",
    "LinalgError",
    "DimensionMismatchError",
    "InvalidShapeError",
    "IndexOutOfRangeError",
    "NotSquareError",
    "SingularMatrixError",
    "InconsistentSystemError",
    "UnderdeterminedSystemError",
    "ZeroVectorError",
    "NotSupportedError",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show mvlinalg”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

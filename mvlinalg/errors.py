# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by mvlinalg.

Everything derives from `LinalgError`, itself a `ValueError`, so callers
that only care about "bad numerical input" can catch that one class.
"""


class LinalgError(ValueError):
    """Base class for every error raised by this package."""


class DimensionMismatchError(LinalgError):
    """Operands (or a function result) have incompatible sizes."""


class InvalidShapeError(LinalgError):
    """Malformed or empty vector / matrix construction."""


class IndexOutOfRangeError(LinalgError, IndexError):
    """Component, row, column or derivative index outside its range."""


class NotSquareError(LinalgError):
    """Operation only defined for square matrices."""


class SingularMatrixError(LinalgError):
    """Matrix has a free column and therefore no inverse."""


class InconsistentSystemError(LinalgError):
    """A x = b has no solution."""


class UnderdeterminedSystemError(LinalgError):
    """A x = b has infinitely many solutions."""


class ZeroVectorError(LinalgError, ZeroDivisionError):
    """Direction undefined for a zero-length vector."""


class NotSupportedError(LinalgError):
    """Operator is not defined for the shape of the function."""

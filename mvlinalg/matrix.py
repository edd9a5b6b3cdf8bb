# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Column-oriented matrix built from Vectors.

A Matrix is constructed once from its column vectors and never changes
afterwards; the backing ndarray is flagged read-only and every
transformation returns a new instance.
"""
from numbers import Real
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidShapeError,
    NotSquareError,
)
from .vector import Vector


class Matrix:
    __slots__ = ("_data",)
    # numpy scalars on the left defer to our reflected operators
    __array_priority__ = 1000

    def __init__(self, columns: Sequence[Union[Vector, Iterable[float]]]):
        columns = [c if isinstance(c, Vector) else Vector(c) for c in columns]
        if not columns:
            raise InvalidShapeError("Matrix needs at least one column")

        rows = columns[0].dim
        for j, col in enumerate(columns):
            if col.dim != rows:
                raise DimensionMismatchError(
                    f"column {j} has dimension {col.dim}, expected {rows}"
                )

        data = np.column_stack([col.to_numpy() for col in columns])
        data.setflags(write=False)
        self._data = data

    # -----------------------------------------------------------------
    # Alternate constructors
    # -----------------------------------------------------------------
    @classmethod
    def from_array(cls, A: np.ndarray) -> "Matrix":
        """Wrap an (m, n) array; column j of A becomes column j."""
        A = np.asarray(A, dtype=float)
        if A.ndim != 2:
            raise InvalidShapeError(f"expected a 2-D array, got shape {A.shape}")
        return cls([A[:, j] for j in range(A.shape[1])])

    @classmethod
    def from_rows(cls, rows: Sequence[Union[Vector, Iterable[float]]]) -> "Matrix":
        return cls(rows).transpose()

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        return cls.from_array(np.eye(n))

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        return cls.from_array(np.zeros((rows, cols)))

    # -----------------------------------------------------------------
    # Shape
    # -----------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    # -----------------------------------------------------------------
    # Access
    # -----------------------------------------------------------------
    def _check(self, index: int, bound: int, what: str) -> int:
        if not isinstance(index, (int, np.integer)) or isinstance(index, bool):
            raise TypeError(f"{what} index must be an int, got {type(index)}")
        if not 0 <= index < bound:
            raise IndexOutOfRangeError(f"{what} {index} out of range [0, {bound})")
        return int(index)

    def get(self, row: int, col: int) -> float:
        row = self._check(row, self.rows, "row")
        col = self._check(col, self.cols, "column")
        return float(self._data[row, col])

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        return self.get(row, col)

    def column(self, j: int) -> Vector:
        return Vector(self._data[:, self._check(j, self.cols, "column")])

    def columns(self) -> List[Vector]:
        return [self.column(j) for j in range(self.cols)]

    def row(self, i: int) -> Vector:
        return Vector(self._data[self._check(i, self.rows, "row")])

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        return self.to_numpy() if dtype is None else self.to_numpy().astype(dtype)

    def __repr__(self) -> str:
        body = ", ".join(repr(c) for c in self.columns())
        return f"{self.__class__.__name__}([{body}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def allclose(self, other: "Matrix", atol: float = 1e-8) -> bool:
        self._same_shape(other, "allclose")
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=atol))

    # -----------------------------------------------------------------
    # Structure
    # -----------------------------------------------------------------
    def transpose(self) -> "Matrix":
        # Column j of the result is row j gathered across every column.
        return Matrix(
            [
                Vector([self._data[i, j] for j in range(self.cols)])
                for i in range(self.rows)
            ]
        )

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def trace(self) -> float:
        if not self.is_square:
            raise NotSquareError(f"trace undefined for {self.rows}x{self.cols} matrix")
        return float(sum(self._data[i, i] for i in range(self.rows)))

    def augment(self, other: Union["Matrix", Vector]) -> "Matrix":
        """Return [self | other]."""
        extra = [other] if isinstance(other, Vector) else other.columns()
        for col in extra:
            if col.dim != self.rows:
                raise DimensionMismatchError(
                    f"cannot augment {self.rows}-row matrix with {col.dim}-row column"
                )
        return Matrix(self.columns() + extra)

    def inverse(self) -> "Matrix":
        # Row reduction lives in elimination, which itself builds Matrices.
        from .elimination import inverse

        return inverse(self)

    # -----------------------------------------------------------------
    # Arithmetic
    # -----------------------------------------------------------------
    def _same_shape(self, other: "Matrix", op: str) -> None:
        if not isinstance(other, Matrix):
            raise TypeError(f"{op} needs a Matrix, got {type(other)}")
        if self.shape != other.shape:
            raise DimensionMismatchError(f"{op}: shape {self.shape} vs {other.shape}")

    def __add__(self, other: "Matrix") -> "Matrix":
        self._same_shape(other, "add")
        return Matrix.from_array(self._data + other._data)

    def __sub__(self, other: "Matrix") -> "Matrix":
        self._same_shape(other, "sub")
        return Matrix.from_array(self._data - other._data)

    def __neg__(self) -> "Matrix":
        return Matrix.from_array(-self._data)

    def __mul__(self, s: float) -> "Matrix":
        if not isinstance(s, Real):
            return NotImplemented
        return Matrix.from_array(s * self._data)

    __rmul__ = __mul__

    def __matmul__(self, other: Union["Matrix", Vector]):
        if isinstance(other, Vector):
            if other.dim != self.cols:
                raise DimensionMismatchError(
                    f"matmul: {self.rows}x{self.cols} matrix with {other.dim}-vector"
                )
            return Vector(self._data @ other.to_numpy())
        if isinstance(other, Matrix):
            if other.rows != self.cols:
                raise DimensionMismatchError(
                    f"matmul: {self.shape} with {other.shape}"
                )
            return Matrix.from_array(self._data @ other._data)
        return NotImplemented

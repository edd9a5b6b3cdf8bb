# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Vector operations in python
"""
import math
from numbers import Real
from typing import Iterable, Iterator, Union

import numpy as np

from .errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidShapeError,
    ZeroVectorError,
)


class Vector:
    """
    Fixed-length ordered tuple of reals.

    Arithmetic always returns a new Vector; only ``v[i] = x`` mutates,
    so take a ``copy()`` first when the original must survive.
    """

    __slots__ = ("_data",)
    __hash__ = None  # mutable through __setitem__
    # numpy scalars on the left defer to our reflected operators
    __array_priority__ = 1000

    def __init__(self, components: Union[Iterable[float], np.ndarray]):
        data = np.array(components, dtype=float)
        if data.ndim != 1:
            raise InvalidShapeError(
                f"Vector needs a flat sequence, got shape {data.shape}"
            )
        if data.size == 0:
            raise InvalidShapeError("Vector must have at least one component")
        self._data = data

    @classmethod
    def zeros(cls, n: int) -> "Vector":
        return cls(np.zeros(n))

    @classmethod
    def basis(cls, n: int, index: int) -> "Vector":
        """Standard basis vector e_index of R^n."""
        return cls.zeros(n).perturb(index, 1.0)

    @property
    def dim(self) -> int:
        return self._data.shape[0]

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    def _check_index(self, index: int) -> int:
        if not isinstance(index, (int, np.integer)) or isinstance(index, bool):
            raise TypeError(f"Vector index must be an int, got {type(index)}")
        if not 0 <= index < self.dim:
            raise IndexOutOfRangeError(
                f"index {index} out of range for dimension {self.dim}"
            )
        return int(index)

    def __getitem__(self, index: int) -> float:
        return float(self._data[self._check_index(index)])

    def __setitem__(self, index: int, value: float) -> None:
        self._data[self._check_index(index)] = float(value)

    def __repr__(self) -> str:
        body = ", ".join(repr(x) for x in self)
        return f"{self.__class__.__name__}([{body}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self._data, other._data))

    def __array__(self, dtype=None, copy=None):
        return self.to_numpy() if dtype is None else self.to_numpy().astype(dtype)

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def copy(self) -> "Vector":
        return Vector(self._data)

    def _same_dim(self, other: "Vector", op: str) -> None:
        if not isinstance(other, Vector):
            raise TypeError(f"{op} needs a Vector, got {type(other)}")
        if self.dim != other.dim:
            raise DimensionMismatchError(
                f"{op}: dimension {self.dim} vs {other.dim}"
            )

    def __add__(self, other: "Vector") -> "Vector":
        self._same_dim(other, "add")
        return Vector(self._data + other._data)

    def __sub__(self, other: "Vector") -> "Vector":
        self._same_dim(other, "sub")
        return Vector(self._data - other._data)

    def __neg__(self) -> "Vector":
        return Vector(-self._data)

    def __mul__(self, s: float) -> "Vector":
        if not isinstance(s, Real):
            return NotImplemented
        return Vector(s * self._data)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> "Vector":
        if not isinstance(s, Real):
            return NotImplemented
        return Vector(self._data / s)

    def dot(self, other: "Vector") -> float:
        """
        Implements the scalar (dot) product between two vectors.
        """
        self._same_dim(other, "dot")
        return float(self._data @ other._data)

    def norm_squared(self) -> float:
        return self.dot(self)

    def norm(self) -> float:
        return math.sqrt(self.norm_squared())

    def unit(self) -> "Vector":
        length = self.norm()
        if length == 0:
            raise ZeroVectorError("Unit vector undefined for zero-length vector")
        return self / length

    def perturb(self, index: int, delta: float) -> "Vector":
        """Return a copy with component `index` shifted by `delta`."""
        shifted = self._data.copy()
        shifted[self._check_index(index)] += delta
        return Vector(shifted)

    def allclose(self, other: "Vector", atol: float = 1e-8) -> bool:
        self._same_dim(other, "allclose")
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=atol))

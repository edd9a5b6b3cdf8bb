# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import math

import numpy as np
import pytest

from mvlinalg.errors import NotSquareError
from mvlinalg.matrix import Matrix
from mvlinalg.matrix_functions import adj, det


def test_determinants():
    rng = np.random.default_rng(0)
    for n in (1, 2, 5, 8):
        a = rng.normal(size=(n, n))
        our_det = det(Matrix.from_array(a))
        numpy_det = np.linalg.det(a)
        assert math.isclose(our_det, numpy_det, rel_tol=1e-9, abs_tol=1e-12)


def test_determinant_row_swap_sign():
    # a single swap is needed for the pivot, det = -1
    assert det(Matrix.from_rows([[0, 1], [1, 0]])) == -1.0


def test_determinant_singular_and_non_square():
    assert det(Matrix.from_rows([[1, 2], [2, 4]])) == 0.0
    with pytest.raises(NotSquareError):
        det(Matrix.zeros(2, 3))


def test_adjugate():
    rng = np.random.default_rng(1)
    a = rng.normal(size=(6, 6))

    our_adj = adj(Matrix.from_array(a))
    numpy_adj = np.linalg.det(a) * np.linalg.inv(a)
    assert np.allclose(our_adj.to_numpy(), numpy_adj, atol=1e-8)


def test_adjugate_singular_falls_back_to_cofactors(caplog):
    A = Matrix.from_rows([[1, 2], [2, 4]])
    with caplog.at_level(logging.WARNING, logger="mvlinalg.matrix_functions"):
        result = adj(A)
    assert "cofactor" in caplog.text
    np.testing.assert_allclose(result.to_numpy(), [[4, -2], [-2, 1]])

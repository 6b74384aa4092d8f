# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .errors import NonSquareMatrixError
from .utils import COFACTOR_WARN_SIZE

logger = logging.getLogger(__name__)


def minor(A: np.ndarray, row: int, col: int) -> np.ndarray:
    """Submatrix of A with `row` and `col` deleted."""
    m, n = A.shape
    return A[np.arange(m) != row][:, np.arange(n) != col]


def cofactor_det(A: np.ndarray) -> float:
    """
    Determinant of a square (row-major) array by Laplace expansion
    along the first row.

    det(A) = sum_i (-1)^i * A[0, i] * det(minor(A, 0, i))

    This is O(n!) and only meant for small matrices; a warning is
    logged above COFACTOR_WARN_SIZE.

    Raises
    ------
    NonSquareMatrixError : if A is not n by n
    """
    A = np.asarray(A, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise NonSquareMatrixError(
            f"The determinant is undefined for non-square matrices, got {A.shape}."
        )
    n = A.shape[0]
    if n > COFACTOR_WARN_SIZE:
        logger.warning(f"cofactor_det(): expanding a {n}x{n} matrix – O(n!)")
    return _expand(A)


def _expand(A: np.ndarray) -> float:
    n = A.shape[0]

    # Base cases
    if n == 0:
        return 1.0
    if n == 1:
        return float(A[0, 0])
    if n == 2:
        return float(A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0])

    total = 0.0
    sign = 1.0  # first term is added
    for i in range(n):
        total += sign * A[0, i] * _expand(minor(A, 0, i))
        sign = -sign
    return float(total)

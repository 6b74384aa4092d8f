# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Gauss-Jordan elimination written purely in terms of the three
elementary row operations of Matrix (swap_rows, multiply_row, add_row).

forward_eliminate and back_substitute work IN PLACE on the matrix they
are given; rref and rank_elimination clone first.
"""

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np

from .utils import scale_tol

if TYPE_CHECKING:
    from .matrix import Matrix

logger = logging.getLogger(__name__)


def forward_eliminate(
    M: "Matrix", tol: Optional[float] = None
) -> Tuple[List[int], List[int], List[int]]:
    """
    Row-echelon reduction with partial pivoting of an m by n Matrix,
    in place. Every pivot is scaled to exactly 1.

    Parameters
    ----------
    M   : Matrix            (m, n)
        Modified in place.
    tol : float | None
        Columns whose candidate pivots are all <= tol are free.
        Defaults to scale_tol(M).

    Returns
    -------
    pivots : list[int]
        Column indices where pivots were placed; len = rank(M).
    free   : list[int]
        Column indices of free variables.
    perm   : list[int]
        Final row order: row i of M comes from original row perm[i].
    """
    m, n = M.height, M.width
    pivot_tol = scale_tol(M.to_numpy()) if tol is None else tol

    perm = list(range(m))  # Identity Permutation
    pivots: List[int] = []
    free: List[int] = []

    row = 0
    for col in range(n):
        if row == m:
            free.extend(range(col, n))
            break
        # Pick the largest absolute value in this column, at or below
        # the current row. argmax returns the topmost row on ties.
        col_slice = np.abs(np.asarray(M.col(col)[row:]))
        max_idx = int(col_slice.argmax())
        max_val = col_slice[max_idx]

        if max_val <= pivot_tol:  # column is numerically zero
            logger.debug(f"column {col} has no pivot, treating it as free")
            free.append(col)
            continue  # row pointer stays put

        pivot_row = row + max_idx
        if pivot_row != row:
            logger.debug(f"column {col}: swapping rows {row} and {pivot_row}")
            M.swap_rows(row, pivot_row)
            perm[row], perm[pivot_row] = perm[pivot_row], perm[row]

        pivots.append(col)

        # Scale the pivot row so the pivot becomes 1
        M.multiply_row(row, 1.0 / M.get(row, col))
        M.set(row, col, 1.0)

        # Eliminate entries below the pivot
        for r in range(row + 1, m):
            factor = M.get(r, col)
            if factor != 0.0:
                M.add_row(r, row, -factor)
                M.set(r, col, 0.0)

        row += 1  # move to next pivot row

    return pivots, free, perm


def back_substitute(M: "Matrix", pivots: List[int]) -> None:
    """
    Zero the entries above each pivot of an echelon-form Matrix
    (output of forward_eliminate), in place.
    """
    # backward sweep: one pass per pivot, from bottom to top
    for r, col in reversed(list(enumerate(pivots))):
        for i in range(r):
            factor = M.get(i, col)
            if factor != 0.0:
                M.add_row(i, r, -factor)
                M.set(i, col, 0.0)


def rref(M: "Matrix") -> Tuple["Matrix", List[int]]:
    """
    Return the reduced row-echelon form R of M and the
    pivot column list. R has the same shape as M, M is not modified.

    Singular input is not an error: dependent rows end up all zero.

    Parameters
    ----------
    M   : Matrix (m, n)

    Returns
    -------
    R       : Matrix (m, n)  (RREF)
    pivots  : list[int]      pivot column indices
    """
    R = M.clone()
    tol = scale_tol(R.to_numpy())

    pivots, _free, _perm = forward_eliminate(R, tol=tol)
    back_substitute(R, pivots)

    # zero out tiny noise
    for i in range(R.height):
        for j in range(R.width):
            if abs(R.get(i, j)) < tol:
                R.set(i, j, 0.0)
    return R, pivots


def rank_elimination(M: "Matrix") -> int:
    """Matrix rank is the number of pivot columns"""
    pivots = forward_eliminate(M.clone())[0]
    return len(pivots)

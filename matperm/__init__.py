# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
matperm
=======

A small dense-matrix type with elementary algebra, cofactor
determinants and Gauss-Jordan row reduction, plus a lazy permutation
generator.

Public API
~~~~~~~~~~
- Matrix type
    - `Matrix` (algebra, `determinant`, `rref`, `rank`, in-place row
      operations `swap_rows`, `multiply_row`, `add_row`)
- Row reduction on a Matrix
    - `forward_eliminate`, `back_substitute`, `rref`, `rank_elimination`
- Array helpers
    - `cofactor_det`, `minor`
- Combinatorics
    - `Permutations`, `PermutationIterator`
- Errors
    - see `matperm.errors`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> from matperm import Matrix
>>> Matrix([[1, 2], [3, 4]]).determinant()
-2.0
>>> print(Matrix([[2, 4], [1, 3]]).rref())
1.0 0.0
0.0 1.0
"""

from importlib.metadata import version as _pkg_version

from .elimination import (
    back_substitute,
    forward_eliminate,
    rank_elimination,
    rref,
)
from .errors import (
    DimensionMismatchError,
    IncompatibleDimensionsError,
    IndexOutOfRangeError,
    InvalidMatrixError,
    IteratorExhaustedError,
    MatpermError,
    NonSquareMatrixError,
    UnsupportedOperationError,
)
from .matrix import Matrix
from .matrix_functions import cofactor_det, minor
from .permutations import PermutationIterator, Permutations
from .utils import permutation_sign, random_nonsingular_upper, scale_tol

__all__ = [
    "Matrix",
    "Permutations",
    "PermutationIterator",
    "forward_eliminate",
    "back_substitute",
    "rref",
    "rank_elimination",
    "cofactor_det",
    "minor",
    "scale_tol",
    "permutation_sign",
    "random_nonsingular_upper",
    "MatpermError",
    "InvalidMatrixError",
    "DimensionMismatchError",
    "IncompatibleDimensionsError",
    "NonSquareMatrixError",
    "IndexOutOfRangeError",
    "IteratorExhaustedError",
    "UnsupportedOperationError",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show matperm”, Sphinx, etc.)
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

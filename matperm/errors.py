# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by matperm.

Every error also derives from the closest builtin, so callers that only
catch ValueError / IndexError keep working.
"""


class MatpermError(Exception):
    """Base class for all matperm errors."""


class InvalidMatrixError(MatpermError, ValueError):
    """Ragged or empty literal, or negative dimensions."""


class DimensionMismatchError(MatpermError, ValueError):
    """Elementwise operation on matrices of different width or height."""


class IncompatibleDimensionsError(MatpermError, ValueError):
    """Matrix product where other.height != self.width."""


class NonSquareMatrixError(MatpermError, ValueError):
    pass


class IndexOutOfRangeError(MatpermError, IndexError):
    pass


class IteratorExhaustedError(MatpermError, StopIteration):
    """
    next() called on a finished permutation iterator.

    Subclasses StopIteration so that ``for`` loops and ``list()`` end
    normally instead of propagating the error.
    """


class UnsupportedOperationError(MatpermError, NotImplementedError):
    pass

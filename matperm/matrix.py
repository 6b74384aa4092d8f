# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense real matrix value type.

Two kinds of operations live on Matrix:

- algebra (add, sub, mul, transpose, determinant, rref, ...) never touches
  its operands and always returns a freshly owned Matrix;
- elementary row operations (swap_rows, multiply_row, add_row) modify the
  matrix IN PLACE and return None, like list.sort. They are the building
  blocks of matperm.elimination.
"""

import numbers
import operator
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .elimination import rank_elimination, rref
from .errors import (
    DimensionMismatchError,
    IncompatibleDimensionsError,
    IndexOutOfRangeError,
    InvalidMatrixError,
    NonSquareMatrixError,
)
from .matrix_functions import cofactor_det

MatrixLiteral = Union[Sequence[Sequence[float]], np.ndarray]


def _is_valid_matrix(rows: List[list]) -> bool:
    length = len(rows[0])
    return all(len(row) == length for row in rows)


def _dimension(value, name: str) -> int:
    try:
        value = operator.index(value)
    except TypeError as e:
        raise InvalidMatrixError(f"{name} must be an integer, got {value!r}") from e
    if value < 0:
        raise InvalidMatrixError(f"{name} must be non-negative, got {value}")
    return value


class Matrix:
    """
    A width by height grid of floats.

    Construction
    ------------
    Matrix(width, height)
        All entries 0.
    Matrix(rows)
        From a rectangular row-major literal (list of lists, tuple of
        tuples, 2-D ndarray). Ragged rows raise InvalidMatrixError.
    Matrix.identity(size)

    Both constructor arguments are positional-only, Matrix(width=3,
    height=2) is a TypeError.

    Storage is a column-major float64 ndarray of shape (width, height),
    addressed [column, row]. That is an implementation detail: every
    public accessor (get, row, to_array, str, ...) is row-major.

    Matrices are mutable (set, row operations) and therefore unhashable.
    """

    __hash__ = None
    # make numpy defer to our reflected operators instead of broadcasting
    __array_ufunc__ = None

    def __init__(
        self,
        data: Union[int, MatrixLiteral, "Matrix"],
        height: Optional[int] = None,
        /,
    ):
        if height is not None:
            width = _dimension(data, "width")
            height = _dimension(height, "height")
            self._store = np.zeros((width, height), dtype=float)
        elif isinstance(data, Matrix):
            self._store = data._store.copy()
        else:
            self._store = self._literal_to_store(data)

    @staticmethod
    def _literal_to_store(rows: MatrixLiteral) -> np.ndarray:
        if not isinstance(rows, np.ndarray):
            try:
                rows = [list(row) for row in rows]
            except TypeError as e:
                raise InvalidMatrixError("Matrix(): expected a sequence of rows") from e
            if not rows:
                raise InvalidMatrixError("Matrix(): no rows given")
            if not _is_valid_matrix(rows):
                raise InvalidMatrixError("Matrix(): Not all rows are equally long")
        try:
            arr = np.array(rows, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidMatrixError(f"Matrix(): invalid entries ({e})") from e
        if arr.ndim != 2 or arr.shape[0] == 0:
            raise InvalidMatrixError(
                f"Matrix(): expected a non-empty 2-D literal, got shape {arr.shape}"
            )
        # row-major literal -> column-major store
        return np.ascontiguousarray(arr.T)

    @classmethod
    def _from_store(cls, store: np.ndarray) -> "Matrix":
        m = cls.__new__(cls)
        m._store = store
        return m

    @classmethod
    def _coerce(cls, other) -> "Matrix":
        if isinstance(other, Matrix):
            return other
        if isinstance(other, (np.ndarray, list, tuple)):
            return cls(other)
        raise TypeError(
            f"expected a Matrix or a 2-D literal, got {type(other).__name__}"
        )

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """Returns a size by size identity matrix."""
        size = _dimension(size, "size")
        m = cls(size, size)
        m._store[np.diag_indices(size)] = 1.0
        return m

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Matrix":
        """Build a Matrix from a row-major 2-D array (copied)."""
        return cls(np.asarray(array))

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._store.shape[0]

    @property
    def height(self) -> int:
        return self._store.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), numpy order."""
        return self.height, self.width

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    # ------------------------------------------------------------------
    # Algebra, never mutates an operand
    # ------------------------------------------------------------------
    def _check_same_size(self, other: "Matrix", op: str) -> None:
        if self.width != other.width or self.height != other.height:
            raise DimensionMismatchError(
                f"Matrix.{op}(): Matrices not equal size "
                f"({self.height}x{self.width} vs {other.height}x{other.width})"
            )

    def add(self, other: Union["Matrix", MatrixLiteral]) -> "Matrix":
        """
        Elementwise sum. `other` may be a literal, it is converted
        with Matrix(other) first.

        Raises
        ------
        DimensionMismatchError : width or height differ
        """
        other = self._coerce(other)
        self._check_same_size(other, "add")
        return self._from_store(self._store + other._store)

    def sub(self, other: Union["Matrix", MatrixLiteral]) -> "Matrix":
        """
        Elementwise difference self - other. Same rules as add.
        """
        other = self._coerce(other)
        self._check_same_size(other, "sub")
        return self._from_store(self._store - other._store)

    def mul(self, other: Union["Matrix", MatrixLiteral, float]) -> "Matrix":
        """
        Matrix product (self @ other) or scaling by a real scalar.

        The product has width other.width and height self.height, and
        every cell is the float dot product of a row of self with a
        column of other.

        Raises
        ------
        IncompatibleDimensionsError : other.height != self.width
        """
        if isinstance(other, numbers.Real):
            return self._from_store(self._store * float(other))
        other = self._coerce(other)
        if other.height != self.width:
            raise IncompatibleDimensionsError(
                f"Matrix.mul(): Matrix dimensions not compatible "
                f"({self.height}x{self.width} times {other.height}x{other.width})"
            )
        product = self.to_numpy() @ other.to_numpy()  # (self.height, other.width)
        return self._from_store(np.ascontiguousarray(product.T))

    def transpose(self) -> "Matrix":
        return self._from_store(np.ascontiguousarray(self._store.T))

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def determinant(self) -> float:
        """
        Determinant by recursive cofactor (Laplace) expansion along
        the first row.

        Complexity is O(n!), use it on small matrices only.

        Raises
        ------
        NonSquareMatrixError : width != height
        """
        if not self.is_square:
            raise NonSquareMatrixError(
                f"Matrix is non-square ({self.height}x{self.width})."
            )
        return cofactor_det(self.to_numpy())

    def rref(self) -> "Matrix":
        """
        Reduced row-echelon form, computed on a copy with partial
        pivoting. self is left unchanged. Rows of a singular matrix
        that have no pivot come back all zero.

        Pivot candidates at or below scale_tol(self) =
        EPS * max(1, ||self||_inf) count as zero. The floor is absolute:
        a matrix whose entries are all below EPS (1e-12) reduces to zeros
        even when its determinant is not exactly 0.
        """
        reduced, _pivots = rref(self)
        return reduced

    def rank(self) -> int:
        """Number of pivot columns, same zero threshold as rref."""
        return rank_elimination(self)

    # ------------------------------------------------------------------
    # Elementary row operations, IN PLACE
    # ------------------------------------------------------------------
    def swap_rows(self, row1: int, row2: int) -> None:
        """Exchange two rows in place."""
        row1 = self._check_row(row1)
        row2 = self._check_row(row2)
        self._store[:, [row1, row2]] = self._store[:, [row2, row1]]

    def multiply_row(self, row: int, scalar: float) -> None:
        """Scale a row in place."""
        row = self._check_row(row)
        self._store[:, row] *= scalar

    def add_row(self, row: int, row_to_add: int, scalar: float = 1.0) -> None:
        """Add `scalar` times row `row_to_add` to row `row`, in place."""
        row = self._check_row(row)
        row_to_add = self._check_row(row_to_add)
        self._store[:, row] += scalar * self._store[:, row_to_add]

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def _check_row(self, row: int) -> int:
        row = operator.index(row)
        if not 0 <= row < self.height:
            raise IndexOutOfRangeError(
                f"row {row} out of range for a matrix with {self.height} rows"
            )
        return row

    def _check_col(self, col: int) -> int:
        col = operator.index(col)
        if not 0 <= col < self.width:
            raise IndexOutOfRangeError(
                f"column {col} out of range for a matrix with {self.width} columns"
            )
        return col

    def row(self, rownum: int) -> List[float]:
        """Copy of row `rownum`, length width."""
        return self._store[:, self._check_row(rownum)].tolist()

    def col(self, colnum: int) -> List[float]:
        """Copy of column `colnum`, length height."""
        return self._store[self._check_col(colnum), :].tolist()

    def get(self, row: int, col: int) -> float:
        return float(self._store[self._check_col(col), self._check_row(row)])

    def set(self, row: int, col: int, val: float) -> "Matrix":
        """Sets a value and returns the same Matrix, to allow chaining."""
        self._store[self._check_col(col), self._check_row(row)] = val
        return self

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: Tuple[int, int], val: float) -> None:
        row, col = key
        self.set(row, col, val)

    # ------------------------------------------------------------------
    # Conversion / comparison
    # ------------------------------------------------------------------
    def to_array(self) -> List[List[float]]:
        """Fresh row-major list of lists."""
        return self._store.T.tolist()

    def to_numpy(self) -> np.ndarray:
        """Fresh row-major (height, width) float64 array."""
        return np.array(self._store.T)

    def __array__(self, dtype=None, copy=None):
        if copy is False:
            raise ValueError(
                "Matrix stores its data column-major, a row-major view needs a copy"
            )
        arr = self.to_numpy()
        return arr if dtype is None else arr.astype(dtype, copy=False)

    def clone(self) -> "Matrix":
        return self._from_store(self._store.copy())

    def __copy__(self) -> "Matrix":
        return self.clone()

    def __deepcopy__(self, memo) -> "Matrix":
        return self.clone()

    def equals(self, other: "Matrix") -> bool:
        """
        Two matrices are equal if they have the same size and exactly
        the same values in all positions (no tolerance).
        """
        if not isinstance(other, Matrix):
            return False
        if self.width != other.width or self.height != other.height:
            return False
        return bool(np.array_equal(self._store, other._store))

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------
    def __add__(self, other):
        if not isinstance(other, (Matrix, np.ndarray, list, tuple)):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not isinstance(other, (np.ndarray, list, tuple)):
            return NotImplemented
        return Matrix(other).add(self)

    def __sub__(self, other):
        if not isinstance(other, (Matrix, np.ndarray, list, tuple)):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not isinstance(other, (np.ndarray, list, tuple)):
            return NotImplemented
        return Matrix(other).sub(self)

    def __mul__(self, other):
        if not isinstance(other, (Matrix, np.ndarray, list, tuple, numbers.Real)):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self.mul(other)
        if not isinstance(other, (np.ndarray, list, tuple)):
            return NotImplemented
        return Matrix(other).mul(self)

    def __matmul__(self, other):
        if not isinstance(other, (Matrix, np.ndarray, list, tuple)):
            return NotImplemented
        return self.mul(other)

    def __rmatmul__(self, other):
        if not isinstance(other, (np.ndarray, list, tuple)):
            return NotImplemented
        return Matrix(other).mul(self)

    def __neg__(self) -> "Matrix":
        return self.mul(-1.0)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return "\n".join(" ".join(str(v) for v in row) for row in self.to_array())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_array()!r})"

"""
Owning, rectangular, column-major dense matrix.

Storage is a flat numpy buffer where element (row, col) of an m x n matrix
sits at offset ``row + col * m``. The two-index accessor ``M[row, col]`` is
the interface the matrix-object kernels rely on.
"""

import numpy as np

from gemmlab.errors import InvalidDimension, LayoutError
from gemmlab.layout import check_dimension


class Matrix:
    """
    Dense m x n matrix stored in column-major order.

    Args:
        rows: number of rows (m >= 0)
        cols: number of columns (n >= 0)
        dtype: numpy dtype of the elements, default float64

    Every entry starts at the dtype's zero.
    """

    def __init__(self, rows, cols, dtype=np.float64):
        self._rows = check_dimension("rows", rows)
        self._cols = check_dimension("cols", cols)
        self._data = np.zeros(self._rows * self._cols, dtype=dtype)

    @classmethod
    def from_buffer(cls, rows, cols, buffer, dtype=None):
        """Copy a flat column-major buffer of exactly rows * cols elements."""
        values = np.asarray(buffer, dtype=dtype)
        if values.ndim != 1:
            raise LayoutError(f"buffer must be one-dimensional, got ndim={values.ndim}")
        matrix = cls(rows, cols, dtype=values.dtype)
        if values.shape[0] != matrix._data.shape[0]:
            raise LayoutError(
                f"buffer holds {values.shape[0]} elements, a {rows}x{cols} matrix needs "
                f"{matrix._data.shape[0]}"
            )
        matrix._data[:] = values
        return matrix

    @classmethod
    def from_array(cls, array):
        """Copy a 2-D array, converting from whatever order it is stored in."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidDimension(f"expected a 2-D array, got ndim={array.ndim}")
        matrix = cls(array.shape[0], array.shape[1], dtype=array.dtype)
        matrix._data[:] = array.ravel(order="F")
        return matrix

    @classmethod
    def from_rows(cls, rows, dtype=None):
        """Build a matrix from row-major nested sequences, e.g. [[1, 2], [3, 4]]."""
        return cls.from_array(np.asarray(rows, dtype=dtype))

    @classmethod
    def identity(cls, n, dtype=np.float64):
        matrix = cls(n, n, dtype=dtype)
        for i in range(matrix._rows):
            matrix[i, i] = 1
        return matrix

    def num_rows(self):
        return self._rows

    def num_cols(self):
        return self._cols

    @property
    def shape(self):
        return (self._rows, self._cols)

    @property
    def size(self):
        return self._rows * self._cols

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def data(self):
        """The owned column-major buffer (leading dimension == num_rows())."""
        return self._data

    def _offset(self, index):
        row, col = index
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(
                f"index ({row}, {col}) out of range for a {self._rows}x{self._cols} matrix"
            )
        return row + col * self._rows

    def __getitem__(self, index):
        return self._data[self._offset(index)]

    def __setitem__(self, index, value):
        self._data[self._offset(index)] = value

    def to_array(self):
        """2-D copy of the contents."""
        return self._data.reshape((self._rows, self._cols), order="F").copy()

    def tolist(self):
        return self.to_array().tolist()

    def copy(self):
        return Matrix.from_buffer(self._rows, self._cols, self._data, dtype=self.dtype)

    def allclose(self, other, rtol=1e-5, atol=1e-8):
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other.data, rtol=rtol, atol=atol))

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other.data))

    __hash__ = None

    def __repr__(self):
        return f"Matrix({self._rows}x{self._cols}, dtype={self.dtype}, rows={self.tolist()})"

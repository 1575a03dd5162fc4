"""
Column-major layout helpers and argument validation shared by all kernels.

Element (row, col) of a buffer with leading dimension ``ld`` lives at
``row + col * ld``. A rows x cols view therefore needs
``ld * (cols - 1) + rows`` elements, or none at all when either size is zero.
"""

import operator

from gemmlab.errors import DimensionMismatch, InvalidDimension, LayoutError


def check_dimension(name, value):
    """Return ``value`` as an int, rejecting negative sizes."""
    value = operator.index(value)
    if value < 0:
        raise InvalidDimension(f"{name} must be non-negative, got {value}")
    return value


def leading_dimension(name, ld, rows):
    if ld is None:
        return rows
    ld = operator.index(ld)
    if ld < rows:
        raise LayoutError(f"{name}={ld} is smaller than the row count {rows}")
    return ld


def required_length(rows, cols, ld):
    """Minimum number of elements a column-major rows x cols view occupies."""
    if rows == 0 or cols == 0:
        return 0
    return ld * (cols - 1) + rows


def check_buffer(name, buffer, rows, cols, ld):
    if getattr(buffer, "ndim", 1) != 1:
        raise LayoutError(f"{name} must be one-dimensional, got ndim={buffer.ndim}")
    needed = required_length(rows, cols, ld)
    if len(buffer) < needed:
        raise LayoutError(
            f"{name} holds {len(buffer)} elements, {rows}x{cols} with ld={ld} needs {needed}"
        )


def check_gemm_args(m, n, k, A, B, C, lda=None, ldb=None, ldc=None):
    """
    Validate a raw-buffer GEMM call.

    Returns:
        (m, n, k, lda, ldb, ldc) as plain ints, with default leading dimensions filled in.
    """
    m = check_dimension("m", m)
    n = check_dimension("n", n)
    k = check_dimension("k", k)
    lda = leading_dimension("lda", lda, m)
    ldb = leading_dimension("ldb", ldb, k)
    ldc = leading_dimension("ldc", ldc, m)
    check_buffer("A", A, m, k, lda)
    check_buffer("B", B, k, n, ldb)
    check_buffer("C", C, m, n, ldc)
    return m, n, k, lda, ldb, ldc


def check_compatible(A, B):
    """Raise DimensionMismatch unless A (m x k) and B (k x n) share k."""
    if A.num_cols() != B.num_rows():
        raise DimensionMismatch(A.num_cols(), B.num_rows())


def additive_identity(buffer):
    """Zero of the buffer's element type: the dtype's zero for numpy buffers, else int 0."""
    dtype = getattr(buffer, "dtype", None)
    if dtype is None:
        return 0
    return dtype.type(0)

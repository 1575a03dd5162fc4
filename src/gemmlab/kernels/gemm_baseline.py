"""
Baseline GEMM implementation using pure Python loops.
Column-major buffers, accumulation in strictly increasing k for reproducible rounding.
"""

import numpy as np

from gemmlab.layout import additive_identity, check_compatible, check_gemm_args
from gemmlab.matrix import Matrix


def gemm(m, n, k, A, B, C, lda=None, ldb=None, ldc=None, zero=None):
    """
    Compute C = A @ B on raw column-major buffers.

    Args:
        m, n, k: A is m x k, B is k x n, C is m x n
        A: flat buffer, element (row, i) at A[row + i * lda]
        B: flat buffer, element (i, col) at B[i + col * ldb]
        C: caller-owned flat output buffer, element (row, col) at C[row + col * ldc]
        lda, ldb, ldc: leading dimensions, default m, k and m
        zero: additive identity used to seed each accumulator; defaults to
            the zero of C's dtype, or int 0 for plain sequences

    Raises:
        InvalidDimension: m, n or k is negative
        LayoutError: a leading dimension or buffer is too small for its view
    """
    m, n, k, lda, ldb, ldc = check_gemm_args(m, n, k, A, B, C, lda, ldb, ldc)
    if zero is None:
        zero = additive_identity(C)

    for row in range(m):
        for col in range(n):
            accumulator = zero
            for i in range(k):
                accumulator += A[row + i * lda] * B[i + col * ldb]
            C[row + col * ldc] = accumulator


def multiply(A, B):
    """
    Compute A @ B for two Matrix objects using the element accessor.

    Args:
        A: Matrix of shape (m, k)
        B: Matrix of shape (k, n)

    Returns:
        New Matrix of shape (m, n) with the promoted dtype of A and B

    Raises:
        DimensionMismatch: A.num_cols() != B.num_rows()
    """
    check_compatible(A, B)
    m = A.num_rows()
    n = B.num_cols()
    k = A.num_cols()

    C = Matrix(m, n, dtype=np.result_type(A.dtype, B.dtype))
    zero = C.dtype.type(0)
    for row in range(m):
        for col in range(n):
            accumulator = zero
            for i in range(k):
                accumulator += A[row, i] * B[i, col]
            C[row, col] = accumulator

    return C


if __name__ == "__main__":
    from gemmlab.kernels.gemm_numpy import verify_correctness

    # Test with small matrices
    rng = np.random.default_rng(42)
    M, K, N = 32, 64, 16
    A = Matrix.from_array(rng.standard_normal((M, K)))
    B = Matrix.from_array(rng.standard_normal((K, N)))

    print("Running baseline gemm...")
    C = Matrix(M, N)
    gemm(M, N, K, A.data, B.data, C.data)
    print("Running baseline multiply...")
    C_obj = multiply(A, B)

    if verify_correctness(A, B, C) and C == C_obj:
        print("Correctness check passed!")
    else:
        print("Correctness check failed!")

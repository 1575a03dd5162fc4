"""
NumPy GEMM reference implementation.
Uses @ operator (BLAS-backed); summation order is BLAS's, so compare with a tolerance.
"""

import numpy as np

from gemmlab.layout import check_compatible, check_gemm_args
from gemmlab.matrix import Matrix


def _view(buffer, rows, cols, ld):
    """Fortran-ordered rows x cols view of a flat buffer with leading dimension ld."""
    if rows == 0 or cols == 0:
        return np.zeros((rows, cols), dtype=buffer.dtype)
    step = buffer.strides[0]
    return np.lib.stride_tricks.as_strided(
        buffer, shape=(rows, cols), strides=(step, step * ld), writeable=False
    )


def gemm_numpy(m, n, k, A, B, C, lda=None, ldb=None, ldc=None):
    """
    Compute C = A @ B on column-major numpy buffers using BLAS.

    Same layout contract and validation as gemmlab.kernels.gemm_baseline.gemm.
    """
    A = np.asarray(A)
    B = np.asarray(B)
    m, n, k, lda, ldb, ldc = check_gemm_args(m, n, k, A, B, C, lda, ldb, ldc)
    product = _view(A, m, k, lda) @ _view(B, k, n, ldb)
    for col in range(n):
        C[col * ldc:col * ldc + m] = product[:, col]


def multiply_numpy(A, B):
    """Compute A @ B for two Matrix objects using BLAS."""
    check_compatible(A, B)
    return Matrix.from_array(A.to_array() @ B.to_array())


def verify_correctness(A, B, C_result, rtol=1e-5, atol=1e-8):
    """Verify that the Matrix C_result matches A @ B (reference implementation)."""
    C_ref = multiply_numpy(A, B)
    return C_result.allclose(C_ref, rtol=rtol, atol=atol)


if __name__ == "__main__":
    # Test with small matrices
    rng = np.random.default_rng(42)
    M, K, N = 128, 256, 64
    A = Matrix.from_array(rng.standard_normal((M, K)).astype(np.float32))
    B = Matrix.from_array(rng.standard_normal((K, N)).astype(np.float32))

    print("Running NumPy gemm...")
    C = Matrix(M, N, dtype=np.float32)
    gemm_numpy(M, N, K, A.data, B.data, C.data)

    if verify_correctness(A, B, C, rtol=1e-4, atol=1e-4):
        print("Correctness check passed!")
    else:
        print("Correctness check failed!")

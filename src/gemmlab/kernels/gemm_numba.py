"""
Numba JIT compiled GEMM implementation.
Features:
- Parallel loop over output columns (each cell is still summed by one thread)
- Column-major access: the inner loop walks A across columns and B down one column
- No fastmath, so the accumulation order and rounding match the baseline kernel
"""

import numpy as np
from numba import njit, prange

from gemmlab.layout import check_compatible, check_gemm_args
from gemmlab.matrix import Matrix

# dtype kinds compiled by the kernel: signed, unsigned, float (not float16), complex
SUPPORTED_KINDS = "iufc"


@njit(parallel=True, cache=True)
def _gemm_kernel(m, n, k, A, lda, B, ldb, C, ldc, zero):
    for col in prange(n):
        for row in range(m):
            acc = zero
            for i in range(k):
                acc += A[row + i * lda] * B[i + col * ldb]
            C[row + col * ldc] = acc


def _cast_input(name, buffer, dtype):
    buffer = np.asarray(buffer)
    if buffer.size and not np.can_cast(buffer.dtype, dtype, casting="same_kind"):
        raise TypeError(f"{name} has dtype {buffer.dtype}, which does not cast to {dtype} within its kind")
    return buffer.astype(dtype, copy=False)


def gemm_numba(m, n, k, A, B, C, lda=None, ldb=None, ldc=None):
    """
    Compute C = A @ B on raw column-major numpy buffers using a JIT kernel.

    Same layout contract and validation as gemmlab.kernels.gemm_baseline.gemm.
    A and B are converted to C's dtype before the call, which must stay
    within the same kind (float to int or complex to float is rejected).

    Raises:
        TypeError: C is not a writable, native-order numpy array of a supported
            numeric dtype, or A or B would change kind when cast to it
    """
    if not isinstance(C, np.ndarray):
        raise TypeError(f"C must be a numpy array, got {type(C).__name__}")
    if C.dtype.kind not in SUPPORTED_KINDS or C.dtype == np.float16 or not C.dtype.isnative:
        raise TypeError(f"unsupported dtype for the numba kernel: {C.dtype}")
    if not C.flags.writeable:
        raise TypeError("C must be writable")

    A = _cast_input("A", A, C.dtype)
    B = _cast_input("B", B, C.dtype)
    m, n, k, lda, ldb, ldc = check_gemm_args(m, n, k, A, B, C, lda, ldb, ldc)
    if m == 0 or n == 0:
        return
    _gemm_kernel(m, n, k, A, lda, B, ldb, C, ldc, C.dtype.type(0))


def multiply_numba(A, B):
    """Compute A @ B for two Matrix objects using the JIT kernel."""
    check_compatible(A, B)
    m = A.num_rows()
    n = B.num_cols()
    k = A.num_cols()

    C = Matrix(m, n, dtype=np.result_type(A.dtype, B.dtype))
    gemm_numba(m, n, k, A.data, B.data, C.data)
    return C


if __name__ == "__main__":
    from gemmlab.kernels.gemm_numpy import verify_correctness

    # Test with small matrices
    rng = np.random.default_rng(42)
    M, K, N = 128, 256, 64
    A = Matrix.from_array(rng.standard_normal((M, K)))
    B = Matrix.from_array(rng.standard_normal((K, N)))

    print("Running Numba gemm...")
    # Warmup
    _ = multiply_numba(A, B)

    C = multiply_numba(A, B)

    if verify_correctness(A, B, C):
        print("Correctness check passed!")
    else:
        print("Correctness check failed!")
        print(f"Max diff: {np.max(np.abs(C.to_array() - A.to_array() @ B.to_array())):.6e}")

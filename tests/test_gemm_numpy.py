import numpy as np
import pytest

from gemmlab import DimensionMismatch, Matrix, multiply
from gemmlab.kernels.gemm_numpy import gemm_numpy, multiply_numpy, verify_correctness


def test_gemm_numpy_column_major_layout():
    A = np.array([1.0, 3.0, 2.0, 4.0])
    B = np.array([5.0, 7.0, 6.0, 8.0])
    C = np.zeros(4)
    gemm_numpy(2, 2, 2, A, B, C)
    # [[1, 2], [3, 4]] @ [[5, 6], [7, 8]] = [[19, 22], [43, 50]]
    assert C.tolist() == [19.0, 43.0, 22.0, 50.0]


def test_gemm_numpy_leading_dimensions():
    A = np.array([1.0, 3.0, -1.0, 2.0, 4.0, -1.0])
    B = np.array([1.0, 0.0, 0.0, 1.0])
    C = np.array([0.0, 0.0, 99.0, 0.0, 0.0, 99.0])
    gemm_numpy(2, 2, 2, A, B, C, lda=3, ldc=3)
    assert C.tolist() == [1.0, 3.0, 99.0, 2.0, 4.0, 99.0]


def test_gemm_numpy_k_zero():
    C = np.full(6, 1.0)
    gemm_numpy(3, 2, 0, np.empty(0), np.empty(0), C)
    assert C.tolist() == [0.0] * 6


def test_multiply_numpy_agrees_with_baseline_within_tolerance():
    rng = np.random.default_rng(5)
    A = Matrix.from_array(rng.standard_normal((8, 16)).astype(np.float32))
    B = Matrix.from_array(rng.standard_normal((16, 4)).astype(np.float32))
    C = multiply(A, B)
    assert C.dtype == np.float32
    assert verify_correctness(A, B, C, rtol=1e-4, atol=1e-4)


def test_verify_correctness_detects_wrong_result():
    A = Matrix.identity(2)
    B = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
    assert not verify_correctness(A, B, Matrix(2, 2))


def test_multiply_numpy_dimension_mismatch():
    with pytest.raises(DimensionMismatch):
        multiply_numpy(Matrix(1, 2), Matrix(1, 2))

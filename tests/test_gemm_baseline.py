from fractions import Fraction

import numpy as np
import pytest

from gemmlab import InvalidDimension, LayoutError, gemm


def test_gemm_identity_right_returns_left_operand():
    # A = [[1, 2], [3, 4]] in column-major order
    A = [1, 3, 2, 4]
    I = [1, 0, 0, 1]
    C = [0] * 4
    gemm(2, 2, 2, A, I, C)
    assert C == [1, 3, 2, 4]


def test_gemm_identity_left_returns_right_operand():
    I = np.array([1.0, 0.0, 0.0, 1.0])
    B = np.array([5.0, 7.0, 6.0, 8.0])  # [[5, 6], [7, 8]]
    C = np.full(4, np.nan)
    gemm(2, 2, 2, I, B, C)
    np.testing.assert_array_equal(C, B)


def test_gemm_all_ones():
    A = np.ones(6)  # 2x3
    B = np.ones(6)  # 3x2
    C = np.zeros(4)
    gemm(2, 2, 3, A, B, C)
    np.testing.assert_array_equal(C, [3.0, 3.0, 3.0, 3.0])


def test_gemm_matches_numpy_on_rectangular_operands():
    rng = np.random.default_rng(0)
    A2 = rng.standard_normal((4, 3))
    B2 = rng.standard_normal((3, 5))
    C = np.empty(20)
    gemm(4, 5, 3, A2.ravel(order="F"), B2.ravel(order="F"), C)
    np.testing.assert_allclose(C.reshape((4, 5), order="F"), A2 @ B2, rtol=1e-12)


def test_gemm_k_zero_fills_additive_identity():
    C = np.full(6, 7.0)
    gemm(2, 3, 0, np.empty(0), np.empty(0), C)
    np.testing.assert_array_equal(C, np.zeros(6))


@pytest.mark.parametrize("m,n", [(0, 3), (3, 0), (0, 0)])
def test_gemm_empty_output_is_a_no_op(m, n):
    C = []
    gemm(m, n, 2, [1.0] * (2 * m), [1.0] * (2 * n), C)
    assert C == []


def test_gemm_leading_dimensions_address_sub_views():
    # A is the top-left 2x2 block of a 3x2 buffer; C is written into a 3x2 buffer.
    A = [1, 3, -1, 2, 4, -1]
    B = [1, 0, 0, 1]
    C = [0, 0, 99, 0, 0, 99]
    gemm(2, 2, 2, A, B, C, lda=3, ldc=3)
    assert C == [1, 3, 99, 2, 4, 99]


def test_gemm_accumulates_in_element_type():
    A = np.array([1, 2], dtype=np.int64)
    B = np.array([3, 4], dtype=np.int64)
    C = np.zeros(1, dtype=np.int64)
    gemm(1, 1, 2, A, B, C)
    assert C[0] == 11
    assert C.dtype == np.int64


def test_gemm_generic_fraction_is_exact():
    A = [Fraction(1, 3), Fraction(1, 6)]
    B = [Fraction(3), Fraction(2)]
    C = [None]
    gemm(1, 1, 2, A, B, C)
    assert C == [Fraction(4, 3)]


def test_gemm_custom_zero():
    C = [None]
    gemm(1, 1, 0, [], [], C, zero=Fraction(0))
    assert C == [Fraction(0)]
    assert isinstance(C[0], Fraction)


def test_gemm_accumulation_order_is_increasing_k():
    # Left-to-right float addition: (1e16 + 1) + -1e16 == 0, while 1e16 + (1 + -1e16) == 2.
    A = [1e16, 1.0, -1e16]
    B = [1.0, 1.0, 1.0]
    C = [None]
    gemm(1, 1, 3, A, B, C)
    assert C == [(1e16 + 1.0) + -1e16]


def test_gemm_nan_propagates():
    C = np.zeros(1)
    gemm(1, 1, 2, np.array([np.nan, 1.0]), np.array([1.0, 1.0]), C)
    assert np.isnan(C[0])


@pytest.mark.parametrize("m,n,k", [(-1, 2, 2), (2, -1, 2), (2, 2, -1)])
def test_gemm_negative_dimension_raises(m, n, k):
    with pytest.raises(InvalidDimension):
        gemm(m, n, k, [0.0] * 4, [0.0] * 4, [0.0] * 4)


def test_gemm_rejects_non_integral_dimension():
    with pytest.raises(TypeError):
        gemm(2.0, 2, 2, [0.0] * 4, [0.0] * 4, [0.0] * 4)


def test_gemm_short_output_buffer_raises_before_writing():
    C = np.full(3, -1.0)
    with pytest.raises(LayoutError):
        gemm(2, 2, 2, np.ones(4), np.ones(4), C)
    np.testing.assert_array_equal(C, [-1.0, -1.0, -1.0])


def test_gemm_short_input_buffer_raises():
    with pytest.raises(LayoutError):
        gemm(2, 2, 3, np.ones(5), np.ones(6), np.zeros(4))


def test_gemm_leading_dimension_smaller_than_rows_raises():
    with pytest.raises(LayoutError):
        gemm(2, 2, 2, np.ones(4), np.ones(4), np.zeros(4), lda=1)


def test_gemm_rejects_two_dimensional_buffers():
    with pytest.raises(LayoutError):
        gemm(2, 2, 2, np.ones((2, 2)), np.ones(4), np.zeros(4))


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        gemm(-1, 1, 1, [], [], [])

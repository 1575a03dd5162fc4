"""
gemmlab: column-major dense matrix multiplication kernels.
"""

from gemmlab.errors import DimensionMismatch, GemmError, InvalidDimension, LayoutError
from gemmlab.kernels.gemm_baseline import gemm, multiply
from gemmlab.matrix import Matrix

__all__ = [
    "DimensionMismatch",
    "GemmError",
    "InvalidDimension",
    "LayoutError",
    "Matrix",
    "gemm",
    "multiply",
]

__version__ = "0.1.0"

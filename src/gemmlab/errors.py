"""
Errors raised by the GEMM kernels.
All checks run before any output is written, so a failed call leaves C untouched.
"""


class GemmError(ValueError):
    """Base class for invalid GEMM arguments."""


class DimensionMismatch(GemmError):
    """Inner dimensions of the operands differ (A.num_cols() != B.num_rows())."""

    def __init__(self, a_cols, b_rows):
        super().__init__(
            f"Dimension mismatch: A.num_cols()={a_cols} != B.num_rows()={b_rows}"
        )
        self.a_cols = a_cols
        self.b_rows = b_rows


class InvalidDimension(GemmError):
    """A size is negative, or an input has the wrong number of axes."""


class LayoutError(GemmError):
    """A buffer is too short for its layout, or a leading dimension is too small."""

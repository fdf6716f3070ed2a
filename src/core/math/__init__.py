"""
Core math modules для nonzero-int

Чистые битовые примитивы над неотрицательными int.
"""

from src.core.math.bit_ops import (
    # Constants
    MIN_BITS,
    # Validation
    fits_in_width,
    validate_bits,
    validate_unsigned,
    # Masks
    bit_mask,
    wrap_to_width,
    # Bit counts
    count_ones,
    count_zeros,
    leading_ones,
    leading_zeros,
    trailing_ones,
    trailing_zeros,
    # Transforms
    strip_trailing_zeros,
)

__all__ = [
    # Bit Ops: Constants
    "MIN_BITS",
    # Bit Ops: Validation
    "fits_in_width",
    "validate_bits",
    "validate_unsigned",
    # Bit Ops: Masks
    "bit_mask",
    "wrap_to_width",
    # Bit Ops: Bit counts
    "count_ones",
    "count_zeros",
    "leading_ones",
    "leading_zeros",
    "trailing_ones",
    "trailing_zeros",
    # Bit Ops: Transforms
    "strip_trailing_zeros",
]

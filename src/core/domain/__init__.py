"""
Domain models and value objects.

Contains the nonzero integer value type, its integer domains, arithmetic
configuration and the NonZero range iterator.
"""

from src.core.domain.arithmetic_settings import (
    ArithmeticConfig,
    arithmetic_config,
    get_arithmetic_config,
    set_arithmetic_config,
)
from src.core.domain.nonzero import (
    DomainCapabilityError,
    DomainMismatchError,
    NonZero,
    NonZeroInvariantViolation,
    NonZeroOverflowViolation,
    to_nonzero,
)
from src.core.domain.ranges import NonZeroRange
from src.core.domain.uint_domain import (
    BIGUINT,
    DOMAINS,
    POINTER_BITS,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    UintDomain,
    get_domain,
)

__all__ = [
    # Uint domains
    "UintDomain",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
    "BIGUINT",
    "DOMAINS",
    "POINTER_BITS",
    "get_domain",
    # Arithmetic config
    "ArithmeticConfig",
    "arithmetic_config",
    "get_arithmetic_config",
    "set_arithmetic_config",
    # NonZero
    "NonZero",
    "to_nonzero",
    "NonZeroInvariantViolation",
    "NonZeroOverflowViolation",
    "DomainMismatchError",
    "DomainCapabilityError",
    # Ranges
    "NonZeroRange",
]

"""
Core domain models and mathematical primitives.

This module contains the nonzero integer value type and the bit-level
primitives it is built on. Nothing here performs I/O.
"""

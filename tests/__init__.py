"""
Test suite for nonzero-int

Contains:
- tests/unit/          : Unit tests for individual modules
"""

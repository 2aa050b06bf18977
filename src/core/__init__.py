"""
Core arithmetic primitives, domain models, and contracts.

This module contains the foundational building blocks for exact
`a * b / c` scaling over 128-bit unsigned magnitudes.
"""

"""
Test suite for exact128

Contains:
- tests/unit/          : Unit tests for individual modules
"""

"""
Test suite for decimal-pi-bench

Contains:
- tests/unit/          : Unit tests for individual modules
"""

"""
Core decimal arithmetic, report models, and contracts.

This module contains the foundational building blocks that are independent
of any particular workload (π series, elementary operation suites).
"""

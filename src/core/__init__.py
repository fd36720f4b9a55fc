"""
Core time primitives and invariants.

This module contains time-frame classification and UTC timestamp arithmetic
that are independent of external systems (exchanges, databases, etc.).
"""

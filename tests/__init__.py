"""
Test suite for ATS time frames

Contains:
- tests/unit/          : Unit tests for individual modules
"""

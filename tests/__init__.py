"""
Test suite for ledger-fixedpoint

Contains:
- tests/unit/          : Unit tests for individual modules
"""

"""
Test suite for batchcalc

Contains:
- tests/unit/          : Unit tests for individual modules
"""

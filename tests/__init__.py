"""
Test suite for superclasses

Contains:
- tests/unit/          : Unit tests for individual modules
"""

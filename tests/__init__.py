"""Test package for the documentation assistant

Shared fakes live in tests/fakes.py.
"""

"""
Test support utilities for sqlbridge tests.

Helpers that are not fixtures but are shared across test packages.
"""

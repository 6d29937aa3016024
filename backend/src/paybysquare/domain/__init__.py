"""
Domain package - Payment request model and validation rules.

This package contains pure Python domain models and validation rules
with no dependencies outside the standard library.
"""

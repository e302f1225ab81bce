"""Client entity resolution.

This package maps free-text client names from legacy exports onto
canonical client ids through an ordered chain of alias lookups.
"""

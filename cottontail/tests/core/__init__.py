"""Unit tests for core domain logic.

Covers models, hashing, default generation, the registration builder
and the mock registry's dispatch algorithm.
"""

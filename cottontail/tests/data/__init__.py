"""Tests for data helpers."""

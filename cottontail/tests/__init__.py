"""Test suite for the Cottontail mock engine.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - No external dependencies, fast execution
   - Uses the fake value generator for deterministic defaults

2. data/: Tests for the type conversion helpers

3. fakes/: Test doubles and sample classes to wrap
   - FakeValueGenerator: canned values per type, records requests
   - Calculator, UserRepository, OrderService: classes under mock
"""

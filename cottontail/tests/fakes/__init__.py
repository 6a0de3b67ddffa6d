"""Fake collaborators and sample classes for testing.

- FakeValueGenerator: Canned default values keyed by type
- Calculator: Synchronous class with an output parameter
- UserRepository: Abstract async port
- OrderService: Object wired with nested mocks by the factory
"""

from .generator import FakeValueGenerator
from .services import Calculator, OrderService, User, UserRepository

__all__ = [
    "Calculator",
    "FakeValueGenerator",
    "OrderService",
    "User",
    "UserRepository",
]

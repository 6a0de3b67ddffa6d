"""Cottontail: a programmable mock engine.

Wraps any class's public method surface in a scriptable stand-in whose
methods can return canned values, fill output parameters, raise faults,
or vary by argument, falling back to the real method when unconfigured.
"""

from cottontail.core import (
    BuilderCommittedError,
    DefaultValueGenerator,
    MemberNotFoundError,
    MissingMethodError,
    MockError,
    MockPort,
    MockRegistry,
    Ref,
    RegistrationBuilder,
)
from cottontail.factory import MockSpec, Mocker, bootstrap, mock

__all__ = [
    "BuilderCommittedError",
    "DefaultValueGenerator",
    "MemberNotFoundError",
    "MissingMethodError",
    "MockError",
    "MockPort",
    "MockRegistry",
    "MockSpec",
    "Mocker",
    "Ref",
    "RegistrationBuilder",
    "bootstrap",
    "mock",
]

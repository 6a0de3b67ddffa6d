"""Core domain logic for the Cottontail mock engine.

This package contains zero external dependencies: the mock registry,
the registration builder, and the collaborators they rely on.
Configuration and wiring live in the top-level package.
"""

from .builder import RegistrationBuilder
from .defaults import DefaultValueGenerator
from .errors import (
    BuilderCommittedError,
    MemberNotFoundError,
    MissingMethodError,
    MockError,
)
from .hashing import SignatureHasher
from .models import (
    Condition,
    FaultBinding,
    Invocation,
    OutputBinding,
    Ref,
    Registration,
    RegistrationCommitted,
)
from .ports import MockPort, ValueGeneratorPort
from .registry import MockRegistry

__all__ = [
    "BuilderCommittedError",
    "Condition",
    "DefaultValueGenerator",
    "FaultBinding",
    "Invocation",
    "MemberNotFoundError",
    "MissingMethodError",
    "MockError",
    "MockPort",
    "MockRegistry",
    "OutputBinding",
    "Ref",
    "Registration",
    "RegistrationBuilder",
    "RegistrationCommitted",
    "SignatureHasher",
    "ValueGeneratorPort",
]

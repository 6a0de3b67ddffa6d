"""Signature hashing for condition-qualified registration keys.

Turns an ordered sequence of opaque condition descriptors into a stable
integer so that conditioned registrations get a reproducible identity.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from .models import Condition

_SEED = 17
_FACTOR = 23
_MASK = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


class SignatureHasher:
    """Order-sensitive digest over opaque values.

    Pure functions over their inputs; all methods are static as the class
    carries no state. Equal sequences always hash equal within a process.
    Unequal sequences usually differ, but collisions are possible and are
    resolved by the registry as a plain upsert.
    """

    @staticmethod
    def hash_key(values: Iterable[Any]) -> int:
        """Fold ``hash = hash * 23 + item`` from 17, wrapping to signed 32 bits."""
        digest = _SEED
        for value in values:
            digest = (digest * _FACTOR + SignatureHasher.hash_item(value)) & _MASK
        return digest - (_MASK + 1) if digest & _SIGN_BIT else digest

    @staticmethod
    def hash_item(value: Any) -> int:
        """Hash one value; None contributes 0, unhashables hash by repr."""
        if value is None:
            return 0
        try:
            return hash(value)
        except TypeError:
            return hash(repr(value))

    @staticmethod
    def compose_key(method_name: str, conditions: Sequence[Condition]) -> str:
        """Build the registration key for a condition-qualified method.

        Examples:
        ('divide', [b equals 0]) → 'divide_<digest>'
        """
        digest = SignatureHasher.hash_key(
            condition.descriptor for condition in conditions
        )
        return f"{method_name}_{digest}"

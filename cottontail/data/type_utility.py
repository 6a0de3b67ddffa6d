"""Type conversion utilities.

Fault-safe conversions built on pydantic's lax validation, enum helpers,
JSON serialization and the shared hash-key fold.
"""

from enum import Enum
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from cottontail.core.hashing import SignatureHasher

T = TypeVar("T")

generate_hash_key = SignatureHasher.hash_key


def _convert_enum(value: Any, enum_type: type[Enum]) -> Enum:
    """Integers convert by value; anything else by member name, then value."""
    if isinstance(value, enum_type):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return enum_type(value)
    try:
        return enum_type[str(value)]
    except KeyError:
        return enum_type(value)


def try_convert(
    value: Any, target_type: type[T], default: T | None = None
) -> tuple[bool, T | None]:
    """Convert value to target_type without raising.

    Args:
        value: The thing being converted.
        target_type: The type to convert to.
        default: Returned in place of the value when conversion fails.

    Returns:
        (True, converted) on success, (False, default) otherwise.
        None never converts.
    """
    if value is None:
        return False, default
    try:
        if isinstance(target_type, type) and issubclass(target_type, Enum):
            return True, _convert_enum(value, target_type)  # type: ignore[return-value]
        return True, TypeAdapter(target_type).validate_python(value)
    except (ValidationError, ValueError, KeyError, TypeError):
        return False, default


def convert(value: Any, target_type: type[T], default: T | None = None) -> T | None:
    """Convert value to target_type, returning default on failure."""
    _, converted = try_convert(value, target_type, default)
    return converted


def enum_description(member: Enum) -> str:
    """Human-readable description of an enum member.

    Uses a ``description`` attribute on the member when present,
    otherwise the member name.
    """
    description = getattr(member, "description", None)
    if isinstance(description, str) and description:
        return description
    return member.name


def to_json(value: Any, indent: int | None = None) -> str:
    """Serialize value to JSON.

    Raises:
        TypeError: If value contains objects pydantic cannot serialize.
    """
    try:
        return TypeAdapter(Any).dump_json(value, indent=indent).decode()
    except PydanticSerializationError as e:
        raise TypeError(f"Cannot serialize {type(value).__qualname__} to JSON: {e}") from e


__all__ = ["convert", "enum_description", "generate_hash_key", "to_json", "try_convert"]

"""General-purpose data helpers shared by the engine and its users."""

from .type_utility import convert, enum_description, generate_hash_key, to_json, try_convert

__all__ = ["convert", "enum_description", "generate_hash_key", "to_json", "try_convert"]

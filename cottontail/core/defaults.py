"""Default value generation for auto-seeded method stubs.

Given a return annotation, produces a plausible value: random scalars for
primitive types, small collections for container generics, and
structurally generated instances for dataclasses, pydantic-style models,
named tuples and plain classes.
"""

import collections.abc
import dataclasses
import inspect
import logging
import random
import string
import types
import typing
import uuid
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

from .ports import ValueGeneratorPort

logger = logging.getLogger(__name__)

_EPOCH = datetime(2000, 1, 1, tzinfo=UTC)
_SPAN_SECONDS = 30 * 365 * 24 * 3600

_SEQUENCE_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
}
_SET_ORIGINS = {set, collections.abc.Set, collections.abc.MutableSet}
_MAPPING_ORIGINS = {
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}


def _type_hints(obj: Any) -> dict[str, Any]:
    """Resolve annotations, falling back to the raw ones on unresolved names."""
    try:
        return typing.get_type_hints(obj)
    except Exception:  # forward references that cannot be resolved
        return dict(getattr(obj, "__annotations__", {}))


class DefaultValueGenerator(ValueGeneratorPort):
    """Produces type-appropriate default values.

    Deterministic for a given seed. Never raises: anything that cannot be
    built yields None.
    """

    def __init__(
        self,
        seed: int | None = None,
        string_length: int = 12,
        int_min: int = 0,
        int_max: int = 1000,
        collection_size: int = 2,
        max_depth: int = 4,
    ):
        """Initialize the generator.

        Args:
            seed: Seed for the random source. None draws from the OS.
            string_length: Length of generated str and bytes values.
            int_min: Lower bound for generated integers.
            int_max: Upper bound for generated integers.
            collection_size: Number of items in generated collections.
            max_depth: Nesting limit for structural generation. Structured
                values deeper than this are generated as None.
        """
        if int_min > int_max:
            raise ValueError(f"int_min ({int_min}) cannot exceed int_max ({int_max})")
        self.random = random.Random(seed)
        self.string_length = string_length
        self.int_min = int_min
        self.int_max = int_max
        self.collection_size = collection_size
        self.max_depth = max_depth

    def generate(self, type_descriptor: Any) -> Any:
        try:
            return self._generate(type_descriptor, 0)
        except Exception as e:
            logger.debug(
                f"Could not generate a value for {type_descriptor!r}: {e}",
                extra={"type_descriptor": repr(type_descriptor)},
            )
            return None

    def _generate(self, tp: Any, depth: int) -> Any:
        if tp is None or tp is type(None) or tp is Any or tp is inspect.Parameter.empty:
            return None

        origin = typing.get_origin(tp)
        if origin is not None:
            return self._generate_generic(tp, origin, typing.get_args(tp), depth)

        if not isinstance(tp, type):
            # TypeVars, unresolved string annotations, NoReturn and friends
            return None

        scalar = self._generate_scalar(tp)
        if scalar is not None:
            return scalar

        if depth >= self.max_depth:
            return None
        return self._generate_structure(tp, depth)

    def _generate_generic(
        self, tp: Any, origin: Any, args: tuple[Any, ...], depth: int
    ) -> Any:
        if origin is typing.Annotated:
            return self._generate(args[0], depth)
        if origin is typing.Literal:
            return self.random.choice(args) if args else None
        if origin is typing.Union or origin is types.UnionType:
            candidates = [arg for arg in args if arg is not type(None)]
            return self._generate(candidates[0], depth) if candidates else None
        if origin is type:
            return args[0] if args and isinstance(args[0], type) else None
        if origin is collections.abc.Callable:
            return_type = args[-1] if args else None
            return lambda *a, **kw: self.generate(return_type)

        if depth >= self.max_depth:
            return None
        item_type = args[0] if args else None
        count = self.collection_size

        if origin in _SEQUENCE_ORIGINS:
            return [self._generate(item_type, depth + 1) for _ in range(count)]
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(self._generate(item_type, depth + 1) for _ in range(count))
            return tuple(self._generate(arg, depth + 1) for arg in args)
        if origin in _SET_ORIGINS:
            return {self._generate(item_type, depth + 1) for _ in range(count)}
        if origin is frozenset:
            return frozenset(self._generate(item_type, depth + 1) for _ in range(count))
        if origin in _MAPPING_ORIGINS:
            value_type = args[1] if len(args) > 1 else None
            return {
                self._generate(item_type, depth + 1): self._generate(value_type, depth + 1)
                for _ in range(count)
            }

        # A parametrized user generic such as Box[int]
        if isinstance(origin, type):
            return self._generate(origin, depth)
        return None

    def _generate_scalar(self, tp: type) -> Any:
        """Return a random value for primitive types, None for anything else."""
        if issubclass(tp, bool):
            return self.random.choice((True, False))
        if issubclass(tp, Enum):
            members = list(tp)
            return self.random.choice(members) if members else None
        if issubclass(tp, int):
            return tp(self.random.randint(self.int_min, self.int_max))
        if issubclass(tp, float):
            return tp(round(self.random.uniform(self.int_min, self.int_max), 4))
        if issubclass(tp, complex):
            return tp(self.random.random(), self.random.random())
        if issubclass(tp, str):
            return tp(
                "".join(
                    self.random.choice(string.ascii_letters)
                    for _ in range(self.string_length)
                )
            )
        if issubclass(tp, (bytes, bytearray)):
            return tp(self.random.randbytes(self.string_length))
        if issubclass(tp, Decimal):
            return Decimal(f"{self.random.uniform(self.int_min, self.int_max):.2f}")
        if issubclass(tp, uuid.UUID):
            return uuid.UUID(int=self.random.getrandbits(128), version=4)
        if issubclass(tp, datetime):
            return _EPOCH + timedelta(seconds=self.random.randint(0, _SPAN_SECONDS))
        if issubclass(tp, date):
            return (_EPOCH + timedelta(days=self.random.randint(0, _SPAN_SECONDS // 86400))).date()
        if issubclass(tp, time):
            return time(
                self.random.randint(0, 23),
                self.random.randint(0, 59),
                self.random.randint(0, 59),
            )
        if issubclass(tp, timedelta):
            return timedelta(seconds=self.random.randint(self.int_min, self.int_max))
        return None

    def _generate_structure(self, tp: type, depth: int) -> Any:
        """Build an instance of a structured type from its field annotations."""
        if tp in (list, dict, set, frozenset, tuple):
            return tp()
        if dataclasses.is_dataclass(tp):
            hints = _type_hints(tp)
            kwargs = {
                f.name: self._generate(hints.get(f.name, f.type), depth + 1)
                for f in dataclasses.fields(tp)
                if f.init
            }
            return tp(**kwargs)
        if hasattr(tp, "model_fields") and hasattr(tp, "model_construct"):
            # pydantic models: construct without validation
            kwargs = {
                name: self._generate(info.annotation, depth + 1)
                for name, info in tp.model_fields.items()
            }
            return tp.model_construct(**kwargs)
        if issubclass(tp, tuple) and hasattr(tp, "_fields"):
            hints = _type_hints(tp)
            return tp(*(self._generate(hints.get(name), depth + 1) for name in tp._fields))
        if inspect.isabstract(tp):
            return None
        return self._construct(tp, depth)

    def _construct(self, tp: type, depth: int) -> Any:
        """Call a plain class's constructor with generated arguments."""
        try:
            signature = inspect.signature(tp)
        except (TypeError, ValueError):
            return tp()

        hints = _type_hints(tp.__init__)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in signature.parameters.values():
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue
            annotation = hints.get(parameter.name, parameter.annotation)
            if annotation is parameter.empty:
                if parameter.default is not parameter.empty:
                    continue
                annotation = None
            value = self._generate(annotation, depth + 1)
            if parameter.kind is parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value
        return tp(*args, **kwargs)

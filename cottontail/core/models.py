"""Domain models for the Cottontail mock engine.

All models in this module use only Python standard library types,
keeping the core free of external dependencies.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, Literal, TypeAlias, TypeVar

T = TypeVar("T")

Predicate: TypeAlias = Callable[[Any], bool]

ExceptionSpec: TypeAlias = type[BaseException] | BaseException

Outcome: TypeAlias = Literal["fault", "registration", "pass_through"]


class Ref(Generic[T]):
    """A caller-owned box for an output parameter.

    A method parameter annotated ``Ref[...]`` is treated as an output
    parameter. Callers pass a ``Ref()`` and read ``.value`` after the call.
    """

    __slots__ = ("value",)

    def __init__(self, value: T | None = None) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


def _hashable(value: Any) -> Any:
    """Return value itself when hashable, else its repr."""
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


@dataclass(frozen=True, eq=False)
class Condition:
    """A parameter-level predicate attached to one method name.

    ``kind`` and ``operand`` describe how the predicate was built. Two
    conditions built the same way (e.g. ``equals 0`` on ``b``) share a
    descriptor and therefore a registration key; custom predicates use the
    callable itself as their operand.
    """

    method_name: str
    parameter_name: str
    predicate: Predicate = field(repr=False)
    kind: str = "is_true"
    operand: Any = None

    def __post_init__(self) -> None:
        """Validate condition invariants on creation."""
        if not self.method_name or not self.method_name.strip():
            raise ValueError("method_name must be a non-empty string")
        if not self.parameter_name or not self.parameter_name.strip():
            raise ValueError("parameter_name must be a non-empty string")
        if self.kind == "is_true" and self.operand is None:
            object.__setattr__(self, "operand", self.predicate)

    @property
    def descriptor(self) -> tuple[Any, ...]:
        """Opaque, hashable identity handed to the signature hasher."""
        return (
            self.method_name,
            self.parameter_name.lower(),
            self.kind,
            type(self.operand).__qualname__,
            _hashable(self.operand),
        )

    def applies_to(self, parameter_name: str) -> bool:
        """Parameter names compare case-insensitively."""
        return self.parameter_name.lower() == parameter_name.lower()

    def matches(self, value: Any) -> bool:
        return bool(self.predicate(value))


@dataclass(frozen=True)
class OutputBinding:
    """A value written into an output parameter after the thunk runs."""

    parameter_name: str
    value: Any


@dataclass(frozen=True)
class FaultBinding:
    """A configured failure that pre-empts the return value for a key.

    ``exception`` may be a class (instantiated with no arguments each time
    it fires) or an instance (raised as-is).
    """

    key: str
    exception: ExceptionSpec

    def __post_init__(self) -> None:
        """Reject anything that cannot be raised."""
        exception = self.exception
        if isinstance(exception, type):
            if not issubclass(exception, BaseException):
                raise TypeError(f"{exception!r} is not an exception type")
        elif not isinstance(exception, BaseException):
            raise TypeError(f"{exception!r} is not an exception")

    def build(self) -> BaseException:
        if isinstance(self.exception, type):
            return self.exception()
        return self.exception


@dataclass(frozen=True)
class Registration:
    """One stored behavior, keyed by bare or condition-qualified method name."""

    key: str
    thunk: Callable[[], Any] = field(repr=False)
    output_bindings: tuple[OutputBinding, ...] = ()

    def execute(self) -> Any:
        return self.thunk()

    def output_for(self, parameter_name: str) -> OutputBinding | None:
        """Return the binding for an exact parameter name, if any."""
        for binding in self.output_bindings:
            if binding.parameter_name == parameter_name:
                return binding
        return None


@dataclass(frozen=True)
class RegistrationCommitted:
    """Payload of the one-shot builder-to-registry commit callback."""

    method_name: str
    conditions: tuple[Condition, ...]
    faults: tuple[FaultBinding, ...]
    return_value: Any
    output_bindings: tuple[OutputBinding, ...]

    @property
    def is_fault(self) -> bool:
        return bool(self.faults)


@dataclass(frozen=True)
class Invocation:
    """Record of a single call dispatched through a mock."""

    method_name: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any] | MappingProxyType[str, Any]  # converted to proxy in __post_init__
    key: str
    outcome: Outcome

    def __post_init__(self) -> None:
        """Convert kwargs dict to read-only proxy."""
        if isinstance(self.kwargs, dict):
            object.__setattr__(self, "kwargs", MappingProxyType(self.kwargs))

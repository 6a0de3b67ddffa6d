"""The mock object: per-instance registry of method behaviors.

A MockRegistry wraps one class. At construction it seeds every public
method with a generated default; test code then layers overrides on top
through RegistrationBuilder. Each call resolves, in order:

1. which committed condition set (if any) the arguments satisfy,
2. a fault bound to the resolved key,
3. a registration bound to the resolved key,
4. the real method on the wrapped class (pass-through).

Member reads and writes normalize names to lower case; method invocation
compares names with their original casing against the wrapped class.
The two lookup paths are intentionally kept separate.
"""

import inspect
import logging
import typing
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Literal

from .builder import RegistrationBuilder
from .errors import MemberNotFoundError, MissingMethodError
from .hashing import SignatureHasher
from .models import (
    Condition,
    FaultBinding,
    Invocation,
    Outcome,
    Ref,
    Registration,
    RegistrationCommitted,
)
from .ports import MockPort, ValueGeneratorPort

logger = logging.getLogger(__name__)

MethodKind = Literal["instance", "class", "static"]


@dataclass(frozen=True)
class MethodShape:
    """What the registry needs to know about one real method."""

    name: str
    function: Callable[..., Any]
    kind: MethodKind
    parameters: tuple[inspect.Parameter, ...]
    return_type: Any
    output_parameters: frozenset[str]
    is_async: bool


def _is_ref(annotation: Any) -> bool:
    if annotation is Ref or typing.get_origin(annotation) is Ref:
        return True
    return isinstance(annotation, str) and annotation.split("[", 1)[0].strip() == "Ref"


def _is_method(member: Any) -> bool:
    return (
        isinstance(member, (staticmethod, classmethod))
        or inspect.isfunction(member)
        or inspect.isbuiltin(member)
        or (inspect.ismethoddescriptor(member) and callable(member))
    )


def describe_method(owner: type, name: str) -> MethodShape | None:
    """Inspect a real method by exact name.

    Returns:
        The method's shape, or None when owner has no such method.
    """
    try:
        member = inspect.getattr_static(owner, name)
    except AttributeError:
        return None
    if not _is_method(member):
        return None

    if isinstance(member, staticmethod):
        kind: MethodKind = "static"
        function = member.__func__
    elif isinstance(member, classmethod):
        kind = "class"
        function = member.__func__
    else:
        kind = "instance"
        function = member

    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        parameters = []
    if kind != "static" and parameters:
        parameters = parameters[1:]  # self / cls

    try:
        hints = typing.get_type_hints(function)
    except Exception:  # unresolved forward references
        hints = dict(getattr(function, "__annotations__", {}))

    output_parameters = frozenset(
        parameter.name
        for parameter in parameters
        if _is_ref(hints.get(parameter.name, parameter.annotation))
    )
    return MethodShape(
        name=name,
        function=function,
        kind=kind,
        parameters=tuple(parameters),
        return_type=hints.get("return"),
        output_parameters=output_parameters,
        is_async=inspect.iscoroutinefunction(function),
    )


def public_methods(owner: type) -> list[MethodShape]:
    """All public (non-underscore) methods of a class, in dir() order."""
    shapes = []
    for name in dir(owner):
        if name.startswith("_"):
            continue
        shape = describe_method(owner, name)
        if shape is not None:
            shapes.append(shape)
    return shapes


def bind_arguments(
    shape: MethodShape | None,
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
) -> dict[str, Any]:
    """Map lower-cased parameter names to the values supplied for them.

    Parameters that were not supplied take their declared default, or
    None when they have none.
    """
    if shape is None:
        return {name.lower(): value for name, value in kwargs.items()}

    bound: dict[str, Any] = {}
    remaining = list(args)
    leftovers = dict(kwargs)
    for parameter in shape.parameters:
        key = parameter.name.lower()
        if parameter.kind is parameter.VAR_POSITIONAL:
            bound[key] = tuple(remaining)
            remaining = []
        elif parameter.kind is parameter.VAR_KEYWORD:
            continue
        elif parameter.kind is not parameter.KEYWORD_ONLY and remaining:
            bound[key] = remaining.pop(0)
        elif parameter.name in leftovers:
            bound[key] = leftovers.pop(parameter.name)
        elif parameter.default is not parameter.empty:
            bound[key] = parameter.default
        else:
            bound[key] = None

    for parameter in shape.parameters:
        if parameter.kind is parameter.VAR_KEYWORD:
            bound[parameter.name.lower()] = leftovers
    return bound


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


class MockRegistry(MockPort):
    """Programmable stand-in for an instance of a wrapped class.

    Holds all registered behaviors for the wrapped class and resolves
    member access and method calls against them. Public methods of the
    wrapped class are reachable as attributes (``mock.divide(11, 2, r)``)
    as well as through ``invoke``. Wrapped methods that share a name with
    this class's own API must be called through ``invoke``. Those names
    are the methods ``get``, ``set``, ``invoke``, ``for_method``,
    ``calls_to`` and ``registration_keys``, and the properties
    ``base_type``, ``mock_type_name`` and ``invocations``.

    Not thread-safe: configure and exercise a registry from one thread.
    """

    def __init__(
        self,
        base_type: type,
        generator: ValueGeneratorPort,
        instance: Any | None = None,
    ):
        """Create a mock of base_type and seed its public methods.

        Args:
            base_type: The class to mock.
            generator: Produces default return values for seeded stubs.
            instance: Optional real object. When given, pass-through calls
                go to its bound methods; otherwise the class function is
                called with this mock as ``self``.
        """
        self._base_type = base_type
        self._generator = generator
        self._instance = instance
        self._members: dict[str, Any] = {}
        self._condition_sets: dict[str, dict[str, tuple[Condition, ...]]] = {}
        self._faults: dict[str, FaultBinding] = {}
        self._invocations: list[Invocation] = []

        self._seed()

    # ------------------------------------------------------------------
    # MockPort
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        key = name.lower()
        try:
            return self._members[key]
        except KeyError:
            raise MemberNotFoundError(self.mock_type_name, name) from None

    def set(self, name: str, value: Any) -> None:
        self._members[name.lower()] = value

    def invoke(
        self,
        name: str,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        kwargs = {} if kwargs is None else dict(kwargs)
        shape = describe_method(self._base_type, name)
        key = self._resolve_key(name, bind_arguments(shape, args, kwargs))

        if shape is not None and shape.is_async:
            return self._dispatch_async(name, shape, key, args, kwargs)
        return self._dispatch(name, shape, key, args, kwargs)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def for_method(self, method_name: str) -> RegistrationBuilder:
        """Start configuring an override for method_name."""
        return RegistrationBuilder(method_name, self._upsert_from_commit)

    @property
    def base_type(self) -> type:
        return self._base_type

    @property
    def mock_type_name(self) -> str:
        return self._base_type.__qualname__

    @property
    def invocations(self) -> list[Invocation]:
        return self._invocations

    def calls_to(self, method_name: str) -> list[Invocation]:
        """Invocations of one method, in call order."""
        return [call for call in self._invocations if call.method_name == method_name]

    def registration_keys(self, method_name: str) -> list[str]:
        """Keys of the registrations stored for method_name, bare key first."""
        keys = [method_name] if isinstance(self._members.get(method_name), Registration) else []
        keys.extend(
            key
            for key in self._condition_sets.get(method_name, {})
            if isinstance(self._members.get(key), Registration)
        )
        return keys

    # ------------------------------------------------------------------
    # Dynamic member access
    # ------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found through normal lookup.
        if name.startswith("_"):
            raise AttributeError(name)
        if describe_method(self._base_type, name) is not None:
            return self._invoker(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __repr__(self) -> str:
        return f"<MockRegistry of {self.mock_type_name}>"

    def _invoker(self, name: str) -> Callable[..., Any]:
        def call(*args: Any, **kwargs: Any) -> Any:
            return self.invoke(name, args, kwargs)

        call.__name__ = name
        call.__qualname__ = f"{self.mock_type_name}.{name}"
        return call

    # ------------------------------------------------------------------
    # Registration storage
    # ------------------------------------------------------------------

    def _seed(self) -> None:
        """Register a generated-default stub for every public method."""
        shapes = public_methods(self._base_type)
        for shape in shapes:
            self._members[shape.name] = Registration(
                key=shape.name,
                thunk=self._default_thunk(shape.return_type),
            )
        logger.debug(
            f"Seeded {len(shapes)} methods on mock of {self.mock_type_name}",
            extra={"mock_type": self.mock_type_name, "method_count": len(shapes)},
        )

    def _default_thunk(self, return_type: Any) -> Callable[[], Any]:
        return lambda: self._generator.generate(return_type)

    def _upsert_from_commit(self, event: RegistrationCommitted) -> None:
        key = event.method_name
        if event.conditions:
            key = SignatureHasher.compose_key(event.method_name, event.conditions)
            condition_sets = self._condition_sets.setdefault(event.method_name, {})
            # Re-committing a key moves it to the most recent position
            condition_sets.pop(key, None)
            condition_sets[key] = event.conditions

        if event.is_fault:
            for fault in event.faults:
                self._faults[key] = replace(fault, key=key)
            logger.debug(
                f"Registered fault for {key}",
                extra={"mock_type": self.mock_type_name, "key": key},
            )
            return

        if key in self._members:
            logger.debug(
                f"Replacing registration {key}",
                extra={"mock_type": self.mock_type_name, "key": key},
            )
        self._members[key] = Registration(
            key=key,
            thunk=_constant(event.return_value),
            output_bindings=event.output_bindings,
        )

    # ------------------------------------------------------------------
    # Resolution and dispatch
    # ------------------------------------------------------------------

    def _resolve_key(self, method_name: str, bound: Mapping[str, Any]) -> str:
        """Pick the key of the most specific fully satisfied condition set.

        Every condition in a set must pass. Among satisfied sets the one
        with the most conditions wins; ties go to the latest committed.
        """
        best_key = method_name
        best_size = 0
        for key, conditions in self._condition_sets.get(method_name, {}).items():
            if len(conditions) >= best_size and all(
                self._condition_passes(condition, bound) for condition in conditions
            ):
                best_key = key
                best_size = len(conditions)
        logger.debug(
            f"Resolved {method_name} to {best_key}",
            extra={"mock_type": self.mock_type_name, "key": best_key},
        )
        return best_key

    @staticmethod
    def _condition_passes(condition: Condition, bound: Mapping[str, Any]) -> bool:
        name = condition.parameter_name.lower()
        if name not in bound:
            return False
        return condition.matches(bound[name])

    def _handles(self, key: str) -> bool:
        return key in self._faults or isinstance(self._members.get(key), Registration)

    def _dispatch(
        self,
        name: str,
        shape: MethodShape | None,
        key: str,
        args: Sequence[Any],
        kwargs: dict[str, Any],
    ) -> Any:
        fault = self._faults.get(key)
        if fault is not None:
            self._record(name, args, kwargs, key, "fault")
            raise fault.build()

        entry = self._members.get(key)
        if isinstance(entry, Registration):
            self._record(name, args, kwargs, key, "registration")
            result = entry.execute()
            self._apply_outputs(entry, shape, args, kwargs)
            return result

        self._record(name, args, kwargs, key, "pass_through")
        return self._pass_through(name, shape, args, kwargs)

    async def _dispatch_async(
        self,
        name: str,
        shape: MethodShape,
        key: str,
        args: Sequence[Any],
        kwargs: dict[str, Any],
    ) -> Any:
        if self._handles(key):
            return self._dispatch(name, shape, key, args, kwargs)
        self._record(name, args, kwargs, key, "pass_through")
        return await self._pass_through(name, shape, args, kwargs)

    def _apply_outputs(
        self,
        registration: Registration,
        shape: MethodShape | None,
        args: Sequence[Any],
        kwargs: dict[str, Any],
    ) -> None:
        """Write bound output values into the caller's output arguments."""
        if shape is None or not registration.output_bindings:
            return
        for index, parameter in enumerate(shape.parameters):
            if parameter.name not in shape.output_parameters:
                continue
            binding = registration.output_for(parameter.name)
            if binding is None:
                continue

            if parameter.name in kwargs:
                slot = kwargs[parameter.name]
            elif index < len(args):
                slot = args[index]
            else:
                continue

            if isinstance(slot, Ref):
                slot.value = binding.value
            elif parameter.name not in kwargs and isinstance(args, list):
                args[index] = binding.value
            else:
                logger.debug(
                    f"Output parameter {parameter.name} of {shape.name} "
                    "was not passed as a Ref; binding ignored",
                    extra={"mock_type": self.mock_type_name, "parameter": parameter.name},
                )

    def _pass_through(
        self,
        name: str,
        shape: MethodShape | None,
        args: Sequence[Any],
        kwargs: dict[str, Any],
    ) -> Any:
        if shape is None:
            raise MissingMethodError(self.mock_type_name, name)

        logger.info(
            f"No behavior registered for {self.mock_type_name}.{name}; calling real method",
            extra={"mock_type": self.mock_type_name, "method_name": name},
        )
        if self._instance is not None:
            return getattr(self._instance, name)(*args, **kwargs)
        if shape.kind == "instance":
            return shape.function(self, *args, **kwargs)
        return getattr(self._base_type, name)(*args, **kwargs)

    def _record(
        self,
        name: str,
        args: Sequence[Any],
        kwargs: dict[str, Any],
        key: str,
        outcome: Outcome,
    ) -> None:
        self._invocations.append(
            Invocation(
                method_name=name,
                args=tuple(args),
                kwargs=dict(kwargs),
                key=key,
                outcome=outcome,
            )
        )

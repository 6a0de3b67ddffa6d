"""Mock factory: the composition root for building mocks.

This module is the only place that combines configuration with the core
registry. It constructs objects under test through an explicitly declared
constructor and wires a freshly seeded MockRegistry into every attribute
that should hold a nested mock.

Example::

    spec = MockSpec(
        constructor=OrderService.for_testing,
        nested={"repository": OrderRepository, "calculator": Calculator},
    )
    service = Mocker().mock(OrderService, spec)
    service.repository.for_method("find").returns(order)
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from cottontail.config import Settings, configure_logging, load_settings
from cottontail.core.defaults import DefaultValueGenerator
from cottontail.core.ports import ValueGeneratorPort
from cottontail.core.registry import MockRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MockSpec:
    """How to build one mockable object.

    Attributes:
        constructor: Zero-argument callable producing the object. When None,
            the class itself is called with no arguments.
        nested: Attribute name → class; each attribute receives its own
            MockRegistry of that class.
    """

    constructor: Callable[[], Any] | None = None
    nested: Mapping[str, type] | MappingProxyType[str, type] = field(
        default_factory=dict
    )  # converted to proxy in __post_init__

    def __post_init__(self) -> None:
        """Validate nested declarations and freeze the mapping."""
        for attribute, nested_type in self.nested.items():
            if not attribute or not attribute.strip():
                raise ValueError("nested attribute names must be non-empty strings")
            if not isinstance(nested_type, type):
                raise TypeError(
                    f"nested[{attribute!r}] must be a class, got {nested_type!r}"
                )
        if isinstance(self.nested, dict):
            object.__setattr__(self, "nested", MappingProxyType(self.nested))


def build_generator(settings: Settings) -> DefaultValueGenerator:
    """Create the default value generator described by settings."""
    return DefaultValueGenerator(
        seed=settings.random_seed,
        string_length=settings.string_length,
        int_min=settings.int_min,
        int_max=settings.int_max,
        collection_size=settings.collection_size,
        max_depth=settings.max_depth,
    )


class Mocker:
    """Builds mock registries and objects wired with nested mocks.

    All registries produced by one Mocker share its value generator, so a
    seeded Mocker produces a reproducible sequence of default values.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        generator: ValueGeneratorPort | None = None,
    ):
        """Initialize the factory.

        Args:
            settings: Engine settings. Loaded from the environment if None.
            generator: Value generator override. Built from settings if None.
        """
        self.settings = settings if settings is not None else load_settings()
        self.generator = generator if generator is not None else build_generator(self.settings)

    def registry_for(self, target_type: type, instance: Any | None = None) -> MockRegistry:
        """Create a seeded mock of target_type.

        Args:
            target_type: Class to mock.
            instance: Optional real object used for pass-through calls.
        """
        return MockRegistry(target_type, self.generator, instance=instance)

    def mock(self, target_type: type[T], spec: MockSpec | None = None) -> T:
        """Construct target_type and fill its nested-mock attributes.

        Args:
            target_type: Class of the object to build.
            spec: Construction declaration. Defaults to calling the class
                with no arguments and wiring no nested mocks.

        Returns:
            The constructed object.

        Raises:
            TypeError: If the constructor does not return a target_type.
            Exception: Whatever the constructor raises.
        """
        spec = spec if spec is not None else MockSpec()
        constructor = spec.constructor if spec.constructor is not None else target_type
        instance = constructor()
        if not isinstance(instance, target_type):
            raise TypeError(
                f"Constructor for {target_type.__qualname__} returned "
                f"{type(instance).__qualname__}"
            )

        for attribute, nested_type in spec.nested.items():
            setattr(instance, attribute, self.registry_for(nested_type))

        logger.debug(
            f"Built {target_type.__qualname__} with {len(spec.nested)} nested mocks",
            extra={
                "mock_type": target_type.__qualname__,
                "nested": sorted(spec.nested),
            },
        )
        return instance


def bootstrap(env_file: str | None = None) -> Mocker:
    """Load settings, configure logging, and create a Mocker.

    Intended to be called once per test session, for example from a
    session-scoped fixture in ``conftest.py``.

    Args:
        env_file: Optional path to a .env file.

    Returns:
        A Mocker built from the loaded settings.

    Raises:
        ValidationError: If settings validation fails.
    """
    settings = load_settings(env_file)
    configure_logging(settings.log_level, settings.log_format)
    logger.info(
        f"Cottontail ready (seed={settings.random_seed}, max_depth={settings.max_depth})",
        extra={"random_seed": settings.random_seed, "log_level": settings.log_level},
    )
    return Mocker(settings=settings)


def mock(target_type: type[T], spec: MockSpec | None = None) -> T:
    """Build target_type with a Mocker configured from the environment."""
    return Mocker().mock(target_type, spec)


__all__ = ["MockSpec", "Mocker", "bootstrap", "build_generator", "mock"]

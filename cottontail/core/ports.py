"""Port interfaces for the Cottontail mock engine.

These abstract base classes define the seams between the mock registry
and its collaborators.

1. **Driving Port** (test code calls into the core)
   - MockPort: capability interface every mock object implements

2. **Driven Port** (core calls out to collaborators)
   - ValueGeneratorPort: produces default return values for seeded stubs
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any


class MockPort(ABC):
    """Capability interface for addressing a mock by member name.

    Test code may also use plain attribute access on concrete mocks;
    this interface is the explicit form of the same operations.
    """

    @abstractmethod
    def get(self, name: str) -> Any:
        """Read a member value.

        Args:
            name: Member name. Normalized to lower case before lookup.

        Returns:
            The stored value.

        Raises:
            MemberNotFoundError: If nothing was written or seeded under name.
        """

    @abstractmethod
    def set(self, name: str, value: Any) -> None:
        """Write a member value, replacing any previous one.

        Args:
            name: Member name. Normalized to lower case before storing.
            value: Value to store.
        """

    @abstractmethod
    def invoke(
        self,
        name: str,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        """Invoke a method by name.

        Args:
            name: Method name, compared with its original casing.
            args: Positional arguments. When a mutable list is given, output
                parameters that are not Ref boxes are written into its slots.
            kwargs: Keyword arguments.

        Returns:
            The configured, seeded, or real return value. For coroutine
            methods, an awaitable producing that value.

        Raises:
            MissingMethodError: If pass-through is needed and the wrapped
                type has no such method.
            BaseException: Any configured fault, raised verbatim.
        """


class ValueGeneratorPort(ABC):
    """Port for producing plausible default values for a type.

    Implementations must never raise; types they cannot build yield None.
    """

    @abstractmethod
    def generate(self, type_descriptor: Any) -> Any:
        """Produce a value appropriate to a type annotation.

        Args:
            type_descriptor: A class, typing construct, or None.

        Returns:
            A generated value, or None when nothing sensible can be built.
        """

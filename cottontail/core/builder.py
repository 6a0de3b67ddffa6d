"""Fluent construction of per-method mock behaviors.

A RegistrationBuilder accumulates conditions and output bindings for one
method name, then commits them to its owning registry through a single
callback when one of its terminal operations is called.
"""

from collections.abc import Callable
from typing import Any

from .errors import BuilderCommittedError
from .models import (
    Condition,
    ExceptionSpec,
    FaultBinding,
    OutputBinding,
    Predicate,
    RegistrationCommitted,
)

CommitCallback = Callable[[RegistrationCommitted], None]


class RegistrationBuilder:
    """Accumulates one method's override and commits it exactly once.

    Usage::

        mock.for_method("divide").is_equal_to("b", 0).raises(ZeroDivisionError)
        (
            mock.for_method("divide")
            .is_equal_to("b", 2)
            .passes_out_parameter("remainder", 1)
            .returns(5)
        )

    A builder that never reaches a terminal operation leaves the registry
    untouched.
    """

    def __init__(self, method_name: str, on_commit: CommitCallback):
        """Start a registration.

        Args:
            method_name: Name of the method being configured.
            on_commit: Called once with the completed registration.
        """
        if not method_name or not method_name.strip():
            raise ValueError("method_name must be a non-empty string")
        self.method_name = method_name
        self._on_commit = on_commit
        self._conditions: list[Condition] = []
        self._output_bindings: dict[str, OutputBinding] = {}
        self._committed = False

    @property
    def conditions(self) -> tuple[Condition, ...]:
        return tuple(self._conditions)

    @property
    def committed(self) -> bool:
        return self._committed

    # ------------------------------------------------------------------
    # Parameter conditions
    # ------------------------------------------------------------------

    def is_true(self, parameter_name: str, predicate: Predicate) -> "RegistrationBuilder":
        """Require predicate(argument) to be true."""
        return self._expects(parameter_name, predicate, "is_true", predicate)

    def is_false(self, parameter_name: str, predicate: Predicate) -> "RegistrationBuilder":
        """Require predicate(argument) to be false."""
        return self._expects(
            parameter_name, lambda value: not predicate(value), "is_false", predicate
        )

    def is_equal_to(self, parameter_name: str, expected: Any) -> "RegistrationBuilder":
        """Require the argument to equal expected. None never matches."""
        return self._expects(
            parameter_name,
            lambda value: value is not None and expected is not None and value == expected,
            "equals",
            expected,
        )

    def is_same_type_as(self, parameter_name: str, sample: Any) -> "RegistrationBuilder":
        """Require the argument to have exactly the same type as sample."""
        return self._expects(
            parameter_name,
            lambda value: value is not None and sample is not None and type(value) is type(sample),
            "same_type",
            type(sample),
        )

    def is_not_none(self, parameter_name: str) -> "RegistrationBuilder":
        return self._expects(parameter_name, lambda value: value is not None, "not_none")

    def is_none(self, parameter_name: str) -> "RegistrationBuilder":
        return self._expects(parameter_name, lambda value: value is None, "none")

    def _expects(
        self,
        parameter_name: str,
        predicate: Predicate,
        kind: str,
        operand: Any = None,
    ) -> "RegistrationBuilder":
        self._conditions.append(
            Condition(
                method_name=self.method_name,
                parameter_name=parameter_name,
                predicate=predicate,
                kind=kind,
                operand=operand,
            )
        )
        return self

    # ------------------------------------------------------------------
    # Output parameters
    # ------------------------------------------------------------------

    def passes_out_parameter(self, parameter_name: str, value: Any) -> "RegistrationBuilder":
        """Write value into the named output parameter after the call.

        Only takes effect when the real method declares the parameter as
        ``Ref[...]``. Binding the same name twice keeps the later value.
        """
        self._output_bindings[parameter_name] = OutputBinding(parameter_name, value)
        return self

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def returns(self, value: Any) -> None:
        """Commit with a fixed return value."""
        self._commit(value, tuple(self._output_bindings.values()), ())

    def returns_none(self) -> None:
        """Commit with a None return value."""
        self._commit(None, tuple(self._output_bindings.values()), ())

    def raises(self, exception: ExceptionSpec) -> None:
        """Commit a fault instead of a return value.

        Output bindings gathered so far are discarded: a fault never
        produces output side effects.

        Args:
            exception: Exception class (instantiated per call) or instance.
        """
        fault = FaultBinding(key=self.method_name, exception=exception)
        self._commit(None, (), (fault,))

    def _commit(
        self,
        return_value: Any,
        output_bindings: tuple[OutputBinding, ...],
        faults: tuple[FaultBinding, ...],
    ) -> None:
        if self._committed:
            raise BuilderCommittedError(self.method_name)
        self._committed = True
        self._on_commit(
            RegistrationCommitted(
                method_name=self.method_name,
                conditions=tuple(self._conditions),
                faults=faults,
                return_value=return_value,
                output_bindings=output_bindings,
            )
        )

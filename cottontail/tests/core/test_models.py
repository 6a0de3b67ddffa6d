"""Tests for core domain models.

Verifies condition identity, fault construction and the small
value objects exchanged between builder and registry.
"""

import pytest

from cottontail.core.models import (
    Condition,
    FaultBinding,
    Invocation,
    OutputBinding,
    Ref,
    Registration,
    RegistrationCommitted,
)


def _equals(expected):
    return lambda value: value == expected


# ============================================================================
# Condition
# ============================================================================


class TestCondition:
    """Tests for Condition."""

    def test_matches_applies_predicate(self) -> None:
        condition = Condition("divide", "b", _equals(2), kind="equals", operand=2)
        assert condition.matches(2) is True
        assert condition.matches(3) is False

    def test_matches_coerces_truthy_results(self) -> None:
        condition = Condition("find", "name", lambda value: value)
        assert condition.matches("x") is True
        assert condition.matches("") is False

    def test_applies_to_is_case_insensitive(self) -> None:
        condition = Condition("divide", "Remainder", _equals(1))
        assert condition.applies_to("remainder")
        assert condition.applies_to("REMAINDER")
        assert not condition.applies_to("b")

    def test_descriptor_equal_for_same_kind_and_operand(self) -> None:
        first = Condition("divide", "b", _equals(0), kind="equals", operand=0)
        second = Condition("divide", "B", _equals(0), kind="equals", operand=0)
        assert first.descriptor == second.descriptor

    def test_descriptor_differs_by_operand_type(self) -> None:
        as_int = Condition("divide", "b", _equals(1), kind="equals", operand=1)
        as_float = Condition("divide", "b", _equals(1.0), kind="equals", operand=1.0)
        assert as_int.descriptor != as_float.descriptor

    def test_descriptor_for_custom_predicates_uses_callable(self) -> None:
        first = Condition("divide", "b", lambda v: v > 0)
        second = Condition("divide", "b", lambda v: v > 0)
        assert first.descriptor != second.descriptor

    def test_custom_predicate_defaults_operand_to_callable(self) -> None:
        predicate = lambda v: v > 0  # noqa: E731
        condition = Condition("divide", "b", predicate)
        assert condition.operand is predicate
        assert condition.descriptor == Condition("divide", "b", predicate).descriptor

    def test_explicit_operand_is_kept(self) -> None:
        condition = Condition("divide", "b", _equals(0), kind="equals", operand=0)
        assert condition.operand == 0

    def test_descriptor_hashable_with_unhashable_operand(self) -> None:
        condition = Condition(
            "find", "tags", _equals(["a"]), kind="equals", operand=["a"]
        )
        hash(condition.descriptor)
        assert "['a']" in condition.descriptor

    def test_rejects_empty_parameter_name(self) -> None:
        with pytest.raises(ValueError, match="parameter_name"):
            Condition("divide", " ", _equals(1))

    def test_rejects_empty_method_name(self) -> None:
        with pytest.raises(ValueError, match="method_name"):
            Condition("", "b", _equals(1))


# ============================================================================
# FaultBinding
# ============================================================================


class TestFaultBinding:
    """Tests for FaultBinding."""

    def test_build_instantiates_exception_class(self) -> None:
        fault = FaultBinding("divide", ZeroDivisionError)
        first = fault.build()
        second = fault.build()
        assert isinstance(first, ZeroDivisionError)
        assert first is not second

    def test_build_returns_exception_instance(self) -> None:
        error = ValueError("bad input")
        fault = FaultBinding("divide", error)
        assert fault.build() is error

    def test_rejects_non_exception_class(self) -> None:
        with pytest.raises(TypeError, match="not an exception type"):
            FaultBinding("divide", int)

    def test_rejects_non_exception_value(self) -> None:
        with pytest.raises(TypeError, match="not an exception"):
            FaultBinding("divide", "boom")  # type: ignore[arg-type]


# ============================================================================
# Registration and friends
# ============================================================================


class TestRegistration:
    """Tests for Registration."""

    def test_execute_calls_thunk_each_time(self) -> None:
        calls = []
        registration = Registration("add", lambda: calls.append(1) or len(calls))
        assert registration.execute() == 1
        assert registration.execute() == 2

    def test_output_for_exact_name(self) -> None:
        registration = Registration(
            "divide",
            lambda: 5,
            output_bindings=(OutputBinding("remainder", 1),),
        )
        assert registration.output_for("remainder") == OutputBinding("remainder", 1)
        assert registration.output_for("Remainder") is None
        assert registration.output_for("quotient") is None


def test_ref_defaults_to_none() -> None:
    ref: Ref[int] = Ref()
    assert ref.value is None
    ref.value = 3
    assert repr(ref) == "Ref(3)"


def test_registration_committed_is_fault() -> None:
    event = RegistrationCommitted(
        method_name="divide",
        conditions=(),
        faults=(FaultBinding("divide", ZeroDivisionError),),
        return_value=None,
        output_bindings=(),
    )
    assert event.is_fault


def test_invocation_kwargs_are_read_only() -> None:
    invocation = Invocation(
        method_name="add",
        args=(1,),
        kwargs={"b": 2},
        key="add",
        outcome="registration",
    )
    with pytest.raises(TypeError):
        invocation.kwargs["b"] = 3  # type: ignore[index]

"""Tests for RegistrationBuilder.

The builder is exercised in isolation by capturing its commit events.
"""

import pytest

from cottontail.core.builder import RegistrationBuilder
from cottontail.core.errors import BuilderCommittedError
from cottontail.core.models import OutputBinding, RegistrationCommitted


@pytest.fixture
def events() -> list[RegistrationCommitted]:
    """Collected commit events."""
    return []


@pytest.fixture
def builder(events: list[RegistrationCommitted]) -> RegistrationBuilder:
    """Create a builder for the divide method."""
    return RegistrationBuilder("divide", events.append)


# ============================================================================
# Conditions
# ============================================================================


class TestConditions:
    """Tests for condition-adding operations."""

    def test_condition_operations_chain(self, builder: RegistrationBuilder) -> None:
        result = (
            builder.is_true("a", lambda v: v > 0)
            .is_false("a", lambda v: v > 100)
            .is_equal_to("b", 2)
            .is_same_type_as("b", 0)
            .is_not_none("remainder")
            .is_none("extra")
        )
        assert result is builder
        assert [c.kind for c in builder.conditions] == [
            "is_true",
            "is_false",
            "equals",
            "same_type",
            "not_none",
            "none",
        ]
        assert all(c.method_name == "divide" for c in builder.conditions)

    def test_is_false_negates_predicate(self, builder: RegistrationBuilder) -> None:
        (condition,) = builder.is_false("a", lambda v: v > 10).conditions
        assert condition.matches(5) is True
        assert condition.matches(50) is False

    def test_is_equal_to_never_matches_none(self, builder: RegistrationBuilder) -> None:
        (condition,) = builder.is_equal_to("b", 2).conditions
        assert condition.matches(2)
        assert not condition.matches(3)
        assert not condition.matches(None)

    def test_is_equal_to_none_never_matches(self, builder: RegistrationBuilder) -> None:
        (condition,) = builder.is_equal_to("b", None).conditions
        assert not condition.matches(None)

    def test_is_same_type_as(self, builder: RegistrationBuilder) -> None:
        (condition,) = builder.is_same_type_as("b", 1).conditions
        assert condition.matches(42)
        assert not condition.matches(True)
        assert not condition.matches("1")
        assert not condition.matches(None)

    def test_null_checks(self, builder: RegistrationBuilder) -> None:
        not_none, none = builder.is_not_none("b").is_none("b").conditions
        assert not_none.matches(0) and not not_none.matches(None)
        assert none.matches(None) and not none.matches(0)

    def test_rejects_empty_method_name(self) -> None:
        with pytest.raises(ValueError, match="method_name"):
            RegistrationBuilder("", lambda event: None)


# ============================================================================
# Terminal operations
# ============================================================================


class TestCommit:
    """Tests for terminal operations."""

    def test_returns_emits_single_event(
        self, builder: RegistrationBuilder, events: list[RegistrationCommitted]
    ) -> None:
        builder.is_equal_to("b", 2).passes_out_parameter("remainder", 1).returns(5)

        assert len(events) == 1
        event = events[0]
        assert event.method_name == "divide"
        assert event.return_value == 5
        assert event.output_bindings == (OutputBinding("remainder", 1),)
        assert len(event.conditions) == 1
        assert event.faults == ()
        assert builder.committed

    def test_returns_none(
        self, builder: RegistrationBuilder, events: list[RegistrationCommitted]
    ) -> None:
        builder.returns_none()
        assert events[0].return_value is None
        assert not events[0].is_fault

    def test_raises_discards_output_bindings(
        self, builder: RegistrationBuilder, events: list[RegistrationCommitted]
    ) -> None:
        builder.is_equal_to("b", 0).passes_out_parameter("remainder", 1).raises(
            ZeroDivisionError
        )

        event = events[0]
        assert event.is_fault
        assert event.output_bindings == ()
        assert event.faults[0].exception is ZeroDivisionError
        assert event.faults[0].key == "divide"

    def test_output_binding_last_write_wins(
        self, builder: RegistrationBuilder, events: list[RegistrationCommitted]
    ) -> None:
        builder.passes_out_parameter("remainder", 1).passes_out_parameter(
            "remainder", 2
        ).passes_out_parameter("quotient", 3).returns(0)

        assert events[0].output_bindings == (
            OutputBinding("remainder", 2),
            OutputBinding("quotient", 3),
        )

    def test_second_commit_raises(
        self, builder: RegistrationBuilder, events: list[RegistrationCommitted]
    ) -> None:
        builder.returns(1)
        with pytest.raises(BuilderCommittedError, match="divide"):
            builder.returns(2)
        with pytest.raises(BuilderCommittedError):
            builder.raises(RuntimeError)
        assert len(events) == 1

    def test_uncommitted_builder_emits_nothing(
        self, builder: RegistrationBuilder, events: list[RegistrationCommitted]
    ) -> None:
        builder.is_equal_to("b", 2).passes_out_parameter("remainder", 1)
        assert events == []
        assert not builder.committed

    def test_invalid_fault_does_not_commit(
        self, builder: RegistrationBuilder, events: list[RegistrationCommitted]
    ) -> None:
        with pytest.raises(TypeError):
            builder.raises("not an exception")  # type: ignore[arg-type]
        assert events == []
        assert not builder.committed

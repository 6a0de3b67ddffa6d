"""Exception taxonomy for the Cottontail mock engine.

Every failure the engine raises on its own behalf derives from MockError.
Faults configured by test authors are raised verbatim and are NOT wrapped
in any of these types.
"""


class MockError(Exception):
    """Base class for errors raised by the mock engine itself."""


class MemberNotFoundError(MockError, AttributeError):
    """A member was read from a mock before it was written or seeded.

    Reading an unregistered member is a test misconfiguration, so it
    always propagates instead of yielding a default.
    """

    def __init__(self, mock_type: str, member_name: str):
        self.mock_type = mock_type
        self.member_name = member_name
        super().__init__(
            f"Mock of {mock_type} has no registered member {member_name!r}"
        )


class MissingMethodError(MockError, AttributeError):
    """Pass-through was required but the wrapped type has no such method."""

    def __init__(self, mock_type: str, method_name: str):
        self.mock_type = mock_type
        self.method_name = method_name
        super().__init__(
            f"{mock_type} has no method {method_name!r} to pass through to"
        )


class BuilderCommittedError(MockError):
    """A terminal operation was called on a builder that already committed."""

    def __init__(self, method_name: str):
        self.method_name = method_name
        super().__init__(
            f"Registration builder for {method_name!r} has already been committed"
        )

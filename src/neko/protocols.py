#
# src/neko/protocols.py
#
"""
Defines the runtime protocols the organizers depend on: the execution
context a run reports into, and the mocks it resets and verifies.
"""
from collections.abc import Callable
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from attrs import define, field


class TestStatus(Enum):
    """Final status of an execution scope."""
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@define(frozen=True, slots=True)
class TestOutcome:
    """
    Structured result of a single execution scope.
    """
    __test__ = False

    name: str
    status: TestStatus
    failures: tuple[str, ...] = field(factory=tuple)

    @property
    def passed(self) -> bool:
        return self.status is TestStatus.PASSED


@runtime_checkable
class ExecutionContext(Protocol):
    """
    Protocol for the host that executes tests and reports their outcome.

    A context can open named child scopes whose failures are attributed to
    the child and do not stop its siblings.
    """
    name: str

    @property
    def failed(self) -> bool:
        ...

    def log(self, message: str) -> None:
        """Write a status line."""
        ...

    def error(self, message: str) -> None:
        """Record a failure and keep going."""
        ...

    def fail_now(self, message: str) -> None:
        """Record a failure and abort the current scope."""
        ...

    def skip(self, message: str) -> None:
        """End the current scope without failing it."""
        ...

    def subtest(self, name: str) -> AbstractContextManager["ExecutionContext"]:
        """
        Opens an isolated child scope labeled ``name``.

        Args:
            name: Label the child's outcome is reported under.

        Returns:
            A context manager yielding the child context.
        """
        ...

    def defer(self, action: Callable[[], Any]) -> None:
        """Register an action to run when this scope exits."""
        ...


@runtime_checkable
class CheckableMock(Protocol):
    """
    Protocol for a mock whose expectations are cleared before, and checked
    after, every test.
    """
    def reset(self) -> None:
        """Forget all expectations and recorded calls."""
        ...

    def verify(self, ctx: ExecutionContext) -> bool:
        """
        Checks every expectation was met.

        Args:
            ctx: Context unmet expectations are reported to.

        Returns:
            True when all expectations were met.
        """
        ...


# 🔼⚙️

#
# src/neko/mock.py
#
"""
Mocks that an organizer can reset before, and verify after, every test.

``Mock`` is meant to be embedded in a hand-written test double::

    class FakeStore(Mock):
        def get(self, key):
            return self.called("get", key)

    store = FakeStore("store")
    store.on("get", "a").returns(1).once()

``MockAdapter`` lets a ``unittest.mock`` object take part in the same
reset/verify cycle.
"""
from collections.abc import Callable
from typing import Any

import structlog
from attrs import define, field

from neko.exceptions import MockExpectationError
from neko.protocols import CheckableMock, ExecutionContext
from neko.telemetry import StructLogger

log: StructLogger = structlog.get_logger("mock")


class _AnyArgument:
    def __eq__(self, other: object) -> bool:
        return True

    def __hash__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "ANY"


ANY = _AnyArgument()


def _render(method: str, args: tuple) -> str:
    return f"{method}({', '.join(repr(a) for a in args)})"


@define(frozen=True, slots=True)
class Call:
    """A call recorded by a Mock."""
    method: str
    args: tuple = field(factory=tuple)

    def __str__(self) -> str:
        return _render(self.method, self.args)


@define(slots=True)
class Expectation:
    """
    An expected call. Built by ``Mock.on`` and tuned with the chained setters.

    A repeatability of 0 means the call may happen any number of times, but
    must happen at least once unless the expectation is optional.
    """
    method: str
    args: tuple = field(factory=tuple)
    return_values: tuple = field(factory=tuple)
    repeatability: int = field(default=0)
    optional: bool = field(default=False)
    error: BaseException | None = field(default=None)
    total_calls: int = field(default=0, init=False)

    def __str__(self) -> str:
        return _render(self.method, self.args)

    def returns(self, *values: Any) -> "Expectation":
        self.return_values = values
        return self

    def raises(self, error: BaseException) -> "Expectation":
        self.error = error
        return self

    def times(self, count: int) -> "Expectation":
        if not isinstance(count, int) or count <= 0:
            raise ValueError(f"times() needs a positive integer, got {count!r}")
        self.repeatability = count
        return self

    def once(self) -> "Expectation":
        return self.times(1)

    def twice(self) -> "Expectation":
        return self.times(2)

    def maybe(self) -> "Expectation":
        self.optional = True
        return self

    @property
    def exhausted(self) -> bool:
        return self.repeatability > 0 and self.total_calls >= self.repeatability

    @property
    def satisfied(self) -> bool:
        if self.optional:
            return True
        if self.repeatability:
            return self.total_calls == self.repeatability
        return self.total_calls > 0

    def matches(self, method: str, args: tuple) -> bool:
        if method != self.method or len(args) != len(self.args):
            return False
        return all(expected == actual for expected, actual in zip(self.args, args))

    def result(self) -> Any:
        if self.error is not None:
            raise self.error
        if not self.return_values:
            return None
        if len(self.return_values) == 1:
            return self.return_values[0]
        return self.return_values


class Mock(CheckableMock):
    """Records expected calls and the calls actually made."""

    def __init__(self, name: str = "mock"):
        self.name = name
        self.expected_calls: list[Expectation] = []
        self.calls: list[Call] = []

    def __repr__(self) -> str:
        return f"<Mock {self.name!r} expected={len(self.expected_calls)} calls={len(self.calls)}>"

    def on(self, method: str, *args: Any) -> Expectation:
        expectation = Expectation(method=method, args=args)
        self.expected_calls.append(expectation)
        return expectation

    def called(self, method: str, *args: Any) -> Any:
        """
        Records a call and returns what the matching expectation was set up
        to return.

        Raises:
            MockExpectationError: No expectation matches, or every matching
                one has already been called as often as it allows.
        """
        self.calls.append(Call(method, args))
        matching = [e for e in self.expected_calls if e.matches(method, args)]
        if not matching:
            raise MockExpectationError(method, args)

        for expectation in matching:
            if not expectation.exhausted:
                expectation.total_calls += 1
                return expectation.result()

        raise MockExpectationError(method, args, reason="too many calls")

    def reset(self) -> None:
        self.expected_calls = []
        self.calls = []

    def verify(self, ctx: ExecutionContext) -> bool:
        ok = True
        for expectation in self.expected_calls:
            if expectation.satisfied:
                continue
            ok = False
            if expectation.repeatability:
                ctx.error(
                    f"{self.name}: expected {expectation} to be called "
                    f"{expectation.repeatability} time(s), got {expectation.total_calls}"
                )
            else:
                ctx.error(f"{self.name}: expected call {expectation} was never made")
        log.debug("Mock verified", mock=self.name, ok=ok, calls=len(self.calls))
        return ok

    def _count(self, method: str, args: tuple | None = None) -> int:
        return sum(
            1
            for call in self.calls
            if call.method == method and (args is None or Expectation(method, args).matches(call.method, call.args))
        )

    def assert_called(self, method: str, *args: Any) -> None:
        if not self._count(method, args):
            raise AssertionError(f"{self.name}: {_render(method, args)} was not called")

    def assert_not_called(self, method: str, *args: Any) -> None:
        if self._count(method, args):
            raise AssertionError(f"{self.name}: {_render(method, args)} was called")

    def assert_number_of_calls(self, method: str, expected: int) -> None:
        actual = self._count(method)
        if actual != expected:
            raise AssertionError(f"{self.name}: expected {method} to be called {expected} time(s), got {actual}")


class MockAdapter(CheckableMock):
    """
    Wraps a ``unittest.mock`` object.

    Each check is called with the wrapped mock; an AssertionError it raises
    is reported as a verification failure.
    """

    def __init__(self, mock: Any, *checks: Callable[[Any], Any], name: str | None = None):
        self.mock = mock
        self.checks = list(checks)
        self.name = name or getattr(mock, "_mock_name", None) or "mock"

    def reset(self) -> None:
        self.mock.reset_mock(return_value=True, side_effect=True)

    def verify(self, ctx: ExecutionContext) -> bool:
        ok = True
        for check in self.checks:
            try:
                check(self.mock)
            except AssertionError as e:
                ok = False
                ctx.error(f"{self.name}: {e}")
        return ok


# 🔼⚙️

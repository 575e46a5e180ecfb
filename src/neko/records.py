#
# src/neko/records.py
#
"""
Test records: a name paired with either a runnable body or nothing at all.
"""
from collections.abc import Callable
from typing import Any, TypeAlias

from attrs import define, field


@define(frozen=True, slots=True)
class Enabled:
    """A test that will run."""
    body: Callable[..., Any] = field()

    @body.validator
    def _check_body(self, attribute, value):
        if not callable(value):
            raise TypeError(f"Test body must be callable, got {type(value).__name__}")


@define(frozen=True, slots=True)
class Disabled:
    """A test that was switched off with ``nit``. Reported, never run."""


TestState: TypeAlias = Enabled | Disabled


@define(frozen=True, slots=True)
class TestRecord:
    """
    One declared test case.

    Ordering inside an organizer is insertion order, which is also the
    execution order.
    """
    __test__ = False

    name: str = field()
    state: TestState = field(factory=Disabled)

    @classmethod
    def enabled(cls, name: str, body: Callable[..., Any]) -> "TestRecord":
        return cls(name=name, state=Enabled(body))

    @classmethod
    def disabled(cls, name: str) -> "TestRecord":
        return cls(name=name, state=Disabled())

    @property
    def is_enabled(self) -> bool:
        return isinstance(self.state, Enabled)

    @property
    def body(self) -> Callable[..., Any] | None:
        if isinstance(self.state, Enabled):
            return self.state.body
        return None


# 🔼⚙️

#
# src/neko/context.py
#
"""
The built-in execution context: collects log lines and failures, opens
isolated sub-test scopes, and runs deferred actions when a scope exits.
"""
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from neko.exceptions import SuiteFailure, TestFailure, TestSkipped
from neko.protocols import TestOutcome, TestStatus
from neko.telemetry import StructLogger

log: StructLogger = structlog.get_logger("context")

# Never recorded on a sub-test; they end the whole run.
_PROPAGATED = (KeyboardInterrupt, SystemExit, GeneratorExit)


def _describe(exc: BaseException) -> str:
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


class RunContext:
    """
    Records what happens while a suite (or one test inside it) runs.

    A failure recorded on a child scope marks every ancestor as failed, but
    never stops sibling scopes from running.

    ``skip_exceptions`` lists the exception types that mark a scope skipped
    rather than failed; a host adds its own (pytest adds ``Skipped``).
    Children inherit the parent's list.
    """

    def __init__(
        self,
        name: str = "suite",
        parent: "RunContext | None" = None,
        skip_exceptions: tuple[type[BaseException], ...] = (),
    ):
        self.name = name
        self.parent = parent
        self.skip_exceptions = (TestSkipped, *skip_exceptions)
        self.skip_reason: str | None = None
        self.output: list[str] = []
        self.failures: list[str] = []
        self.children: list[RunContext] = []
        self._deferred: list[Callable[[], Any]] = []
        self._closed = False
        self._log = log.bind(context=self.full_name)

    def __repr__(self) -> str:
        return f"<RunContext {self.full_name!r} status={self.outcome.status.value}>"

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def full_name(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.full_name}/{self.name}"

    @property
    def failed(self) -> bool:
        return bool(self.failures) or any(child.failed for child in self.children)

    @property
    def outcome(self) -> TestOutcome:
        if self.failed:
            status = TestStatus.FAILED
        elif self.skip_reason is not None:
            status = TestStatus.SKIPPED
        else:
            status = TestStatus.PASSED
        return TestOutcome(name=self.name, status=status, failures=tuple(self.failures))

    @property
    def outcomes(self) -> tuple[TestOutcome, ...]:
        """Outcomes of the direct child scopes, in the order they ran."""
        return tuple(child.outcome for child in self.children)

    def log(self, message: str) -> None:
        self.output.append(message)
        self._log.info(message)

    def error(self, message: str) -> None:
        self.failures.append(message)
        self._log.error("Failure recorded", failure=message)

    def fail_now(self, message: str) -> None:
        self.error(message)
        raise TestFailure(message)

    def skip(self, message: str = "skipped") -> None:
        raise TestSkipped(message)

    def defer(self, action: Callable[[], Any]) -> None:
        self._deferred.append(action)

    @contextmanager
    def subtest(self, name: str) -> Iterator["RunContext"]:
        """
        Runs the ``with`` block as an isolated child scope.

        Exceptions raised inside the block, including BaseExceptions such as
        a test framework's skip and fail outcomes, are recorded on the child
        and do not propagate. KeyboardInterrupt, SystemExit and GeneratorExit
        still do. Deferred actions registered on the child always run when the
        block exits.
        """
        child = RunContext(name, parent=self, skip_exceptions=self.skip_exceptions)
        self.children.append(child)
        child._log.debug("Entering sub-test")
        try:
            yield child
        except TestFailure as e:
            if not child.failures:
                child.failures.append(str(e))
        except _PROPAGATED:
            raise
        except BaseException as e:
            if isinstance(e, self.skip_exceptions):
                child.skip_reason = str(e) or "skipped"
            else:
                child._log.exception("Sub-test raised an exception")
                child.failures.append(_describe(e))
        finally:
            child.close()
        status = child.outcome.status.value
        child._log.info("Sub-test finished", status=status, emoji_key=status)

    def close(self) -> None:
        """Runs deferred actions, last registered first. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        while self._deferred:
            action = self._deferred.pop()
            try:
                action()
            except Exception as e:
                self._log.exception("Deferred action failed")
                self.failures.append(f"deferred action failed: {_describe(e)}")

    def walk(self) -> Iterator["RunContext"]:
        """Yields this context and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def report(self) -> str:
        lines: list[str] = []
        for ctx in self.walk():
            if not ctx.failures:
                continue
            lines.append(f"--- FAIL: {ctx.full_name}")
            lines.extend(f"    {failure}" for failure in ctx.failures)
        return "\n".join(lines)

    def raise_for_failures(self) -> None:
        """Raises SuiteFailure if this context or any descendant failed."""
        if not self.failed:
            return
        failed = [ctx.full_name for ctx in self.walk() if ctx.failures]
        raise SuiteFailure(self.report(), failed=failed)


# 🔼⚙️

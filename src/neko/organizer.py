#
# src/neko/organizer.py
#
"""
The sequential organizer: runs each registered test in order, with setup
hooks before it and mock reset/verification around it.
"""
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeAlias

import structlog

from neko.config import NekoConfig
from neko.exceptions import RegistrationError
from neko.protocols import CheckableMock, ExecutionContext
from neko.records import TestRecord
from neko.telemetry import StructLogger

log: StructLogger = structlog.get_logger("organizer")

Hook: TypeAlias = Callable[[], Any]
Body: TypeAlias = Callable[..., Any]


class BaseOrganizer(ABC):
    """
    Keeps track of mocks, setup hooks and tests so they can be coordinated
    later by ``run``.

    All registration happens before ``run``; nothing is locked.
    """

    def __init__(self, ctx: ExecutionContext, config: NekoConfig | None = None):
        self.ctx = ctx
        self.config = config or NekoConfig()
        self.mocks: list[CheckableMock] = []
        self.setup_hooks: list[Hook] = []
        self.tests: list[TestRecord] = []
        self._log = log.bind(suite=ctx.name, organizer=type(self).__name__)

    def check_mock(self, mock: CheckableMock) -> CheckableMock:
        """Track a mock so it is reset before and verified after every test."""
        if not (callable(getattr(mock, "reset", None)) and callable(getattr(mock, "verify", None))):
            raise RegistrationError(
                f"{type(mock).__name__} cannot be checked: it needs reset() and verify(ctx) methods"
            )
        self.mocks.append(mock)
        return mock

    def setup(self, hook: Hook) -> Hook:
        """Add some work to be done before each test. Usable as a decorator."""
        self.setup_hooks.append(hook)
        return hook

    def it(self, name: str, body: Body | None = None):
        """
        Add a test.

        Called without a body it returns a decorator::

            @o.it("adds numbers")
            def _():
                ...
        """
        return self._register(name, body, TestRecord.enabled)

    def nit(self, name: str, body: Body | None = None):
        """
        Add a disabled test. Putting an ``n`` in front of ``it`` switches a
        test off while keeping its name in the output.

        The test is registered right away, so ``o.nit("name")`` on its own is
        enough; used as a decorator it hands the function back untouched.
        """
        self._add(TestRecord.disabled(name))
        if body is None:
            return lambda fn: fn
        return body

    def _register(self, name: str, body: Body | None, build: Callable[[str, Body], TestRecord]):
        def add(fn: Body) -> Body:
            self._add(build(name, fn))
            return fn

        if body is None:
            return add
        return add(body)

    def _add(self, record: TestRecord) -> None:
        self.tests.append(record)
        self._log.debug("Test registered", test=record.name, enabled=record.is_enabled, position=len(self.tests))

    def _reset_mocks(self) -> None:
        for mock in self.mocks:
            mock.reset()

    def _run_setups(self) -> None:
        for hook in self.setup_hooks:
            hook()

    def _verify_mocks(self, ctx: ExecutionContext) -> None:
        for mock in self.mocks:
            mock.verify(ctx)

    def _report_disabled(self, test: TestRecord) -> None:
        self.ctx.log(f"==== DISABLED: {test.name} ====")

    @abstractmethod
    def run(self) -> None:
        """Coordinate running the registered tests."""

    def meow(self) -> None:
        """Have fun with neko!"""
        if self.config.banner:
            self.ctx.log(f"Meow! Neko is on the case! Running {len(self.tests)} tests now!")
        self.run()


class Organizer(BaseOrganizer):
    """
    Runs tests one after another with no isolation. Bodies take no
    arguments; an exception raised by a setup hook or body ends the run.
    """

    def run(self) -> None:
        """Coordinate running the tests with the setups and mocks."""
        for test in self.tests:
            if not test.is_enabled:
                self._report_disabled(test)
                continue

            self.ctx.log(f"==== {test.name} ====")
            self._reset_mocks()
            self._run_setups()
            test.body()
            self._verify_mocks(self.ctx)


def start(ctx: ExecutionContext, config: NekoConfig | None = None) -> Organizer:
    """Create a new Organizer against an execution context."""
    return Organizer(ctx, config)


# 🔼⚙️

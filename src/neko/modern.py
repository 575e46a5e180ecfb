#
# src/neko/modern.py
#
"""
The isolating organizer. Every test runs in its own named sub-test scope,
cleanup hooks run after every test, and ``only`` narrows a run to a single
test.
"""
from collections.abc import Callable

from neko.config import NekoConfig, VerifyScope
from neko.organizer import BaseOrganizer, Body, Hook
from neko.protocols import ExecutionContext
from neko.records import TestRecord


class ModernOrganizer(BaseOrganizer):
    """
    Organizer whose test bodies receive their own execution context.

    A failing test is recorded against its sub-test scope; the tests after
    it still run with their full setup, cleanup and mock lifecycle.
    """

    def __init__(self, ctx: ExecutionContext, config: NekoConfig | None = None):
        super().__init__(ctx, config)
        self.cleanup_hooks: list[Hook] = []
        self.only_test: TestRecord | None = None

    def cleanup(self, hook: Hook) -> Hook:
        """Add some work to be done after each test, pass or fail."""
        self.cleanup_hooks.append(hook)
        return hook

    def only(self, name: str, body: Body | None = None):
        """Run just this test. Calling it again replaces the previous one."""

        def assign(fn: Body) -> Body:
            if self.only_test is not None and self.config.warn_on_only_override:
                self._log.warning(
                    "Replacing an earlier only() test",
                    previous=self.only_test.name,
                    replacement=name,
                )
            self.only_test = TestRecord.enabled(name, fn)
            return fn

        if body is None:
            return assign
        return assign(body)

    def run(self) -> None:
        """Coordinate running the tests with the setups, cleanups and mocks."""
        if self.only_test is not None:
            self._log.info("Running only one test", test=self.only_test.name, registered=len(self.tests))
            self._run_test(self.only_test)
            return

        for test in self.tests:
            self._run_test(test)

    def _verification_context(self, test_ctx: ExecutionContext) -> ExecutionContext:
        if self.config.verify_scope is VerifyScope.TEST:
            return test_ctx
        return self.ctx

    def _run_test(self, test: TestRecord) -> None:
        if not test.is_enabled:
            self._report_disabled(test)
            return

        body: Callable[[ExecutionContext], object] = test.body
        with self.ctx.subtest(test.name) as t:
            self._reset_mocks()
            # Cleanup hooks run before anything the body deferred on t.
            try:
                self._run_setups()
                body(t)
                self._verify_mocks(self._verification_context(t))
            finally:
                self._run_cleanup()

    def _run_cleanup(self) -> None:
        for hook in self.cleanup_hooks:
            hook()


def modern(ctx: ExecutionContext, config: NekoConfig | None = None) -> ModernOrganizer:
    """Create a new ModernOrganizer against an execution context."""
    return ModernOrganizer(ctx, config)


# 🔼⚙️

import logging

import pytest
import structlog

from neko import Mock, RunContext


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any structlog/stdlib logging configuration a test installed."""
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture
def ctx() -> RunContext:
    return RunContext("suite")


@pytest.fixture
def foo_mock() -> Mock:
    """A Mock with a single ``Foo`` method, the way a hand-written double embeds one."""

    class FooMock(Mock):
        def foo(self, *args):
            return self.called("Foo", *args)

    return FooMock("foo")

#
# src/neko/pytest_plugin.py
#
"""
pytest integration: hands a test an organizer bound to a RunContext and
fails the test when that context recorded any failure.
"""
import pytest
import structlog

from neko.config import NekoConfig, load_config
from neko.context import RunContext
from neko.exceptions import ConfigurationError
from neko.modern import ModernOrganizer
from neko.organizer import Organizer
from neko.telemetry import StructLogger

log: StructLogger = structlog.get_logger("pytest_plugin")

CONFIG_KEY = pytest.StashKey[NekoConfig]()
CONTEXT_KEY = pytest.StashKey[RunContext]()


def pytest_configure(config: pytest.Config) -> None:
    try:
        neko_config = load_config(config.rootpath / "pyproject.toml")
    except ConfigurationError as e:
        raise pytest.UsageError(f"neko: {e}") from e
    config.stash[CONFIG_KEY] = neko_config

    # A project that configured structlog itself keeps its own setup.
    if not structlog.is_configured():
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(neko_config.numeric_log_level)
        )


def pytest_report_header(config: pytest.Config) -> str | None:
    neko_config = config.stash.get(CONFIG_KEY, None)
    if neko_config is None:
        return None
    return f"neko: verify_scope={neko_config.verify_scope.value}"


@pytest.fixture
def neko_config(request: pytest.FixtureRequest) -> NekoConfig:
    return request.config.stash.get(CONFIG_KEY, None) or NekoConfig()


@pytest.fixture
def neko_context(request: pytest.FixtureRequest) -> RunContext:
    """
    A RunContext named after the current test; checked when the test returns.

    ``pytest.skip`` inside a sub-test marks that sub-test skipped; ``pytest.fail``
    is recorded on it like any other failure.
    """
    ctx = RunContext(request.node.nodeid, skip_exceptions=(pytest.skip.Exception,))
    request.node.stash[CONTEXT_KEY] = ctx
    return ctx


@pytest.fixture
def neko(neko_context: RunContext, neko_config: NekoConfig) -> Organizer:
    return Organizer(neko_context, neko_config)


@pytest.fixture
def neko_modern(neko_context: RunContext, neko_config: NekoConfig) -> ModernOrganizer:
    return ModernOrganizer(neko_context, neko_config)


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item):
    ctx = item.stash.get(CONTEXT_KEY, None)
    try:
        result = yield
    finally:
        if ctx is not None:
            ctx.close()

    if ctx is not None and ctx.failed:
        log.debug("Failing test from recorded failures", test=item.nodeid)
        pytest.fail(ctx.report(), pytrace=False)
    return result


# 🔼⚙️

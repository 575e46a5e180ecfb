#
# src/neko/__init__.py
#
"""
neko: a small behavior-driven test organizer.

Declare setup and cleanup hooks, mocks to check and named tests, then let
an organizer run them in order with the same isolation every time.
"""
from .config import NekoConfig, VerifyScope, load_config
from .context import RunContext
from .exceptions import (
    ConfigurationError,
    MockExpectationError,
    NekoError,
    RegistrationError,
    SuiteFailure,
    TestFailure,
    TestSkipped,
)
from .mock import ANY, Mock, MockAdapter
from .modern import ModernOrganizer, modern
from .organizer import Organizer, start
from .protocols import CheckableMock, ExecutionContext, TestOutcome, TestStatus
from .records import Disabled, Enabled, TestRecord

__all__ = [
    "ANY",
    "CheckableMock",
    "ConfigurationError",
    "Disabled",
    "Enabled",
    "ExecutionContext",
    "Mock",
    "MockAdapter",
    "MockExpectationError",
    "ModernOrganizer",
    "NekoConfig",
    "NekoError",
    "Organizer",
    "RegistrationError",
    "RunContext",
    "SuiteFailure",
    "TestFailure",
    "TestOutcome",
    "TestRecord",
    "TestSkipped",
    "TestStatus",
    "VerifyScope",
    "load_config",
    "modern",
    "start",
]

# 🔼⚙️

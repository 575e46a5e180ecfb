# src/neko/exceptions.py

"""
Custom exceptions for neko.
"""


class NekoError(Exception):
    """Base class for all neko errors."""

    pass


class ConfigurationError(NekoError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        full_message = message
        if path:
            full_message += f" (File: '{path}')"
        super().__init__(full_message)


class RegistrationError(NekoError):
    """Raised when something is registered on an organizer that it cannot use."""

    pass


class MockExpectationError(NekoError, AssertionError):
    """Raised when a mock receives a call nothing was set up for."""

    def __init__(self, method: str, args: tuple, reason: str = "unexpected call"):
        self.method = method
        self.args_received = args
        rendered = ", ".join(repr(a) for a in args)
        super().__init__(f"mock: {reason} to {method}({rendered})")


class TestFailure(NekoError, AssertionError):
    """Raised by ``fail_now`` to abort the current test scope."""

    __test__ = False


class TestSkipped(NekoError):
    """Raised by ``skip`` to end the current test scope without failing it."""

    __test__ = False


class SuiteFailure(NekoError):
    """Raised when a finished run has recorded failures."""

    def __init__(self, report: str, failed: list[str] | None = None):
        self.failed = failed or []
        super().__init__(report)


# 🔼⚙️

#
# config/models.py
#
"""
Attrs-based data models for neko configuration.
"""

import logging
from enum import Enum
from typing import Any

from attrs import define, field


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    if not isinstance(value, str):
        raise TypeError(f"log_level must be a level name such as 'INFO', got {value!r}")
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


class VerifyScope(Enum):
    """Which context mock verification failures are reported to."""

    SUITE = "suite"  # The context the organizer was created with.
    TEST = "test"  # The per-test sub-scope.


def _to_verify_scope(value: Any) -> VerifyScope:
    if isinstance(value, VerifyScope):
        return value
    try:
        return VerifyScope(str(value).lower())
    except ValueError:
        choices = [scope.value for scope in VerifyScope]
        raise ValueError(f"Invalid verify_scope '{value}'. Must be one of {choices}.") from None


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("1", "true", "yes", "on", "0", "false", "no", "off"):
        return value.lower() in ("1", "true", "yes", "on")
    raise ValueError(f"Expected a boolean, got {value!r}")


@define(frozen=True, slots=True)
class NekoConfig:
    """Settings shared by every organizer."""
    log_level: str = field(default="INFO", validator=_validate_log_level)
    verify_scope: VerifyScope = field(default=VerifyScope.SUITE, converter=_to_verify_scope)
    warn_on_only_override: bool = field(default=True, converter=_to_bool)
    banner: bool = field(default=True, converter=_to_bool)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


# 🔼⚙️

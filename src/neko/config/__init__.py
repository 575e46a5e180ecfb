#
# config/__init__.py
#
"""
Configuration handling sub-package for neko.

Exports the loading function and the configuration model.
"""

from .loader import build_config, load_config
from .models import NekoConfig, VerifyScope

__all__ = [
    "NekoConfig",
    "VerifyScope",
    "build_config",
    "load_config",
]

# 🔼⚙️

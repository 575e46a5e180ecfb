#
# src/neko/cli/__init__.py
#
"""
Command line interface for inspecting neko's configuration.
"""
from .main import cli

__all__ = ["cli"]

# 🖥️⚙️

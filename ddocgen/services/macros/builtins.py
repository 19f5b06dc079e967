"""
Built-in macro registrations.
Call register_all_builtins() once at application startup.
"""

from __future__ import annotations

from .registry import MacroRegistry, macro_registry
from . import macro_chars, macro_date


def register_all_builtins(registry: MacroRegistry | None = None) -> MacroRegistry:
    """Register every built-in macro (with the shared registry by default)."""
    registry = registry if registry is not None else macro_registry
    macro_chars.register(registry)
    macro_date.register(registry)
    return registry

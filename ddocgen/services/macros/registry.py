"""
MacroRegistry — central store of builtin macro handlers.

Builtins are Python callables that compute their text instead of reading a
template from the macro table:

    def my_macro(inv: Invocation, ctx: MacroContext) -> str

Register with the decorator:
    @macro_registry.register("YEAR")
    def year_macro(inv, ctx):
        return str(ctx.now.year)

A table entry with the same name always takes precedence over a builtin.
"""

from __future__ import annotations

import html
import logging
from typing import Callable

from .args import Invocation

logger = logging.getLogger(__name__)


MacroHandler = Callable[..., str]


class MacroRegistry:
    def __init__(self) -> None:
        self._handlers: dict[str, MacroHandler] = {}

    # ---------------------------------------------------------------- register

    def register(self, name: str):
        """
        Decorator that registers a function as a builtin macro.

        Usage::

            @macro_registry.register("LF")
            def lf_macro(inv, ctx):
                return "\\n"
        """
        def decorator(fn: MacroHandler) -> MacroHandler:
            self._handlers[name] = fn
            logger.debug("Registered macro: %s", name)
            return fn
        return decorator

    # ------------------------------------------------------------------ lookup

    def has(self, name: str) -> bool:
        return name in self._handlers

    def call(self, name: str, inv: Invocation, ctx) -> str:
        """Invoke a registered handler; failures render as an error span."""
        handler = self._handlers.get(name)
        if handler is None:
            return inv.text   # leave unknown macros intact

        try:
            return handler(inv, ctx)
        except Exception as exc:
            logger.exception("Macro %s raised an error", name)
            return f'<span class="macro-error">[Macro {name} error: {html.escape(str(exc))}]</span>'

    # ---------------------------------------------------------- introspection

    def registered_names(self) -> list[str]:
        return sorted(self._handlers.keys())


# Singleton shared across the application
macro_registry = MacroRegistry()

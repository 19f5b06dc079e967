"""
MacroEngine
===========
The core expansion loop.  Scans text for $(NAME args...) invocations and
replaces each with its template, positional arguments substituted, then
expands the result again.

Placeholders inside a template:
    $0        — the whole argument text
    $1 .. $9  — individual comma-separated arguments ("" when missing)
    $+        — everything after the first argument

Expansion is recursive.  Three per-render guards bound it: a depth limit,
an expansion budget, and an output limit for arguments that grow on every
level ($(G $0$0)).  When one trips, the offending invocation is emitted
verbatim and the rest of the text still renders.
"""

from __future__ import annotations

import re
import logging
from typing import Mapping, Optional

from .args import Invocation, find_closing_paren, parse_invocation
from .context import MacroContext
from .registry import MacroRegistry, macro_registry
from .table import MacroTable

logger = logging.getLogger(__name__)

_INVOKE = "$("
_PLACEHOLDER = re.compile(r'\$([0-9+])')

MAX_EXPANSION_DEPTH = 64          # nested expansions per invocation chain
MAX_EXPANSIONS = 100_000          # total expansions per render
MAX_OUTPUT = 5_000_000            # characters produced per render


def substitute(template: str, inv: Invocation) -> str:
    """Replace $0-$9 and $+ in *template* with parts of *inv*."""

    def repl(m: re.Match) -> str:
        key = m.group(1)
        if key == "0":
            return inv.raw
        if key == "+":
            return inv.rest
        return inv.arg(int(key))

    return _PLACEHOLDER.sub(repl, template)


class MacroEngine:
    """
    Expand all macro invocations in a piece of documentation text.

    Usage::

        engine = MacroEngine()
        result = engine.expand(raw_text, table)
    """

    def __init__(
        self,
        registry: Optional[MacroRegistry] = None,
        max_depth: int = MAX_EXPANSION_DEPTH,
        max_expansions: int = MAX_EXPANSIONS,
        max_output: int = MAX_OUTPUT,
    ) -> None:
        self._registry = registry if registry is not None else macro_registry
        self.max_depth = max_depth
        self.max_expansions = max_expansions
        self.max_output = max_output

    # ----------------------------------------------------------------- public

    def new_context(self, table: Mapping[str, str] | None = None) -> MacroContext:
        if table is not None and not isinstance(table, MacroTable):
            table = MacroTable(table)
        return MacroContext(
            table=table if table is not None else MacroTable(),
            registry=self._registry,
            max_depth=self.max_depth,
            max_expansions=self.max_expansions,
            max_output=self.max_output,
        )

    def expand(self, text: str, table: Mapping[str, str] | None = None) -> str:
        """Fully expand *text* against *table* in a fresh context."""
        return self.expand_in(text, self.new_context(table))

    def expand_in(self, text: str, ctx: MacroContext) -> str:
        """Fully expand *text* using an existing context."""
        if not text:
            return text
        return self._expand(text, ctx, 0)

    # ----------------------------------------------------------------- private

    def _expand(self, text: str, ctx: MacroContext, depth: int) -> str:
        """Scan *text* once, expanding each invocation recursively."""
        if _INVOKE not in text:
            return text

        result_parts: list[str] = []
        pos = 0

        while True:
            start = text.find(_INVOKE, pos)
            if start < 0:
                result_parts.append(text[pos:])
                break

            # Append literal text before this invocation
            result_parts.append(text[pos:start])

            end = find_closing_paren(text, start + 1)
            if end < 0:
                # Unterminated: nothing after this point can close
                result_parts.append(text[start:])
                break

            inv = parse_invocation(text[start + 2:end], text[start:end + 1])
            if inv is None:
                # "$(" not followed by a name; keep scanning inside it
                result_parts.append(_INVOKE)
                pos = start + 2
                continue

            result_parts.append(self._invoke(inv, ctx, depth))
            pos = end + 1

        return "".join(result_parts)

    def _invoke(self, inv: Invocation, ctx: MacroContext, depth: int) -> str:
        name = inv.name

        if name in ctx.verbatim:
            return ctx.verbatim[name]

        template = ctx.lookup(name)
        if template is None and not ctx.is_builtin(name):
            return inv.text   # unknown macro, pass through

        if depth >= ctx.max_depth:
            ctx.report_limit("depth", name)
            return inv.text
        if not ctx.budget_left:
            ctx.report_limit("budget", name)
            return inv.text
        ctx.expansions += 1

        if template is not None:
            body = substitute(template, inv)
        else:
            body = ctx.registry.call(name, inv, ctx)

        if not ctx.charge(body):
            ctx.report_limit("size", name)
            return inv.text

        return self._expand(body, ctx, depth + 1)

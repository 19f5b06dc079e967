"""
MacroContext — per-render state handed to the engine and to builtins.

A fresh context is created for every render pass, so nothing leaks from
one document into the next.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .registry import MacroRegistry
from .table import MacroTable

logger = logging.getLogger(__name__)


@dataclass
class MacroContext:
    table: MacroTable = field(default_factory=MacroTable)
    registry: Optional[MacroRegistry] = None
    max_depth: int = 64
    max_expansions: int = 100_000
    max_output: int = 5_000_000
    now: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    # Values inserted as-is, without another expansion pass (BODY, TITLE).
    verbatim: dict[str, str] = field(default_factory=dict)

    expansions: int = 0
    output_chars: int = 0           # characters produced by all expansions so far
    _reported: set[str] = field(default_factory=set, repr=False)

    @property
    def budget_left(self) -> bool:
        return self.expansions < self.max_expansions

    def charge(self, body: str) -> bool:
        """Account for *body*; False once the render has produced too much text."""
        self.output_chars += len(body)
        return self.output_chars <= self.max_output

    def lookup(self, name: str) -> Optional[str]:
        return self.table.get(name)

    def is_builtin(self, name: str) -> bool:
        return self.registry is not None and self.registry.has(name)

    def report_limit(self, kind: str, name: str) -> None:
        """Log the first time each guard trips during this render."""
        if kind in self._reported:
            return
        self._reported.add(kind)
        if kind == "depth":
            logger.warning(
                "Macro expansion depth limit (%d) reached at $(%s); emitting it unexpanded",
                self.max_depth, name,
            )
        elif kind == "size":
            logger.warning(
                "Macro output limit (%d chars) exceeded at $(%s); emitting it unexpanded",
                self.max_output, name,
            )
        else:
            logger.warning(
                "Macro expansion budget (%d) exhausted at $(%s); emitting the rest unexpanded",
                self.max_expansions, name,
            )

    @property
    def limits_hit(self) -> list[str]:
        return sorted(self._reported)

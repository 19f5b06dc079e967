"""
RenderPipeline
==============
Turns documentation text into output using a macro table.

    render_text      — macro expansion only
    render_document  — expand the body, then wrap it in $(DDOC) with
                       $(BODY) and $(TITLE) bound for that pass

If the table defines no DDOC, DEFAULT_DDOC is used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ddocgen.core.config import get_settings
from ddocgen.services.macros import MacroEngine, MacroRegistry, MacroTable

logger = logging.getLogger(__name__)

DEFAULT_DDOC = (
    "<html><head><title>$(TITLE)</title></head>"
    "<body>$(BODY)</body></html>"
)


@dataclass
class RenderResult:
    output: str
    limits_hit: list[str] = field(default_factory=list)


class RenderPipeline:
    """
    Parameters
    ----------
    registry : MacroRegistry, optional
        Builtin macros; the shared registry when omitted.
    max_depth, max_expansions, max_output : int, optional
        Guard limits; taken from settings when omitted.
    """

    def __init__(
        self,
        registry: Optional[MacroRegistry] = None,
        max_depth: Optional[int] = None,
        max_expansions: Optional[int] = None,
        max_output: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self.engine = MacroEngine(
            registry=registry,
            max_depth=max_depth if max_depth is not None else settings.max_depth,
            max_expansions=max_expansions if max_expansions is not None else settings.max_expansions,
            max_output=max_output if max_output is not None else settings.max_output,
        )

    def render_text(self, text: str, table: Mapping[str, str] | None = None) -> RenderResult:
        ctx = self.engine.new_context(table)
        output = self.engine.expand_in(text, ctx)
        return RenderResult(output, ctx.limits_hit)

    def render_document(
        self,
        body: str,
        table: Mapping[str, str] | None = None,
        title: str = "",
    ) -> RenderResult:
        ctx = self.engine.new_context(table)

        rendered_body  = self.engine.expand_in(body, ctx)
        rendered_title = self.engine.expand_in(title, ctx)

        ctx.verbatim["BODY"] = rendered_body
        ctx.verbatim["TITLE"] = rendered_title

        page = ctx.table.get("DDOC", DEFAULT_DDOC)
        output = self.engine.expand_in(page, ctx)

        logger.debug(
            "Rendered document %r: %d expansions", rendered_title, ctx.expansions,
        )
        return RenderResult(output, ctx.limits_hit)


def merge_tables(*tables: Mapping[str, str]) -> MacroTable:
    """Layer several tables in order, later ones winning."""
    return MacroTable().merged(*tables)

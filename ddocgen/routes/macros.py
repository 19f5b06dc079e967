#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Macros router
=============
GET  /api/v1/macros         — the default table (configured macro files)
POST /api/v1/macros/parse   — parse definition text, return table + warnings
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends

from ddocgen.routes.deps import get_default_macros
from ddocgen.schemas import MacroTableOut, ParseRequest, WarningOut
from ddocgen.services.macros import LoadResult, macro_registry, parse_macros

# -----------------------------------------------------------------------------

router = APIRouter(prefix="/macros", tags=["Macros"])


def _table_out(result: LoadResult) -> MacroTableOut:
    return MacroTableOut(
        macros=dict(result.table),
        warnings=[
            WarningOut(source=w.source, line=w.line, text=w.text, reason=w.reason)
            for w in result.warnings
        ],
        builtins=macro_registry.registered_names(),
    )


# -----------------------------------------------------------------------------

@router.get("", response_model=MacroTableOut)
async def list_macros(defaults: LoadResult = Depends(get_default_macros)):
    return _table_out(defaults)


@router.post("/parse", response_model=MacroTableOut)
async def parse(body: ParseRequest):
    """Parse definition text without rendering anything."""
    return _table_out(parse_macros(body.text, source="<request>"))


# -----------------------------------------------------------------------------

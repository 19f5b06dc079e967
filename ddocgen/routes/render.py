#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render router
=============
POST /api/v1/render

Expands the submitted text against the configured macro files, layered
with any macros sent in the request (request macros win).  With
``wrap=true`` the result is wrapped in $(DDOC).
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from ddocgen.routes.deps import get_default_macros
from ddocgen.schemas import RenderRequest, RenderResponse, WarningOut
from ddocgen.services.macros import LoadResult, parse_macros
from ddocgen.services.renderer import RenderPipeline, merge_tables

# -----------------------------------------------------------------------------

router = APIRouter(prefix="/render", tags=["Render"])


# -----------------------------------------------------------------------------

@router.post("", response_model=RenderResponse)
async def render(
    body: RenderRequest,
    defaults: LoadResult = Depends(get_default_macros),
):
    """Render text (optionally as a full page) and report loader warnings."""
    parsed = parse_macros(body.macro_text, source="<request>")
    table = merge_tables(defaults.table, parsed.table, body.macros)

    # synchronous expansion runs in a worker thread
    pipeline = RenderPipeline()
    if body.wrap:
        result = await run_in_threadpool(pipeline.render_document, body.text, table, title=body.title)
    else:
        result = await run_in_threadpool(pipeline.render_text, body.text, table)

    warnings = [
        WarningOut(source=w.source, line=w.line, text=w.text, reason=w.reason)
        for w in defaults.warnings + parsed.warnings
    ]
    return RenderResponse(output=result.output, warnings=warnings, limits_hit=result.limits_hit)


# -----------------------------------------------------------------------------

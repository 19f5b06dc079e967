"""
Shared FastAPI dependencies.
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, status

from ddocgen.core.config import Settings, get_settings
from ddocgen.core.errors import MacroFileError
from ddocgen.services.macros import LoadResult, load_macro_files_async

logger = logging.getLogger(__name__)


async def get_default_macros(settings: Settings = Depends(get_settings)) -> LoadResult:
    """Load the configured macro files for this request."""
    try:
        return await load_macro_files_async(settings.macro_files)
    except MacroFileError as exc:
        logger.error("%s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Macro file unavailable: {exc.path}",
        )

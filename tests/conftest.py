#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Test fixtures
=============
The HTTP app is configured with tests/fixtures/std.ddoc as its default
macro file.  Each test gets a fresh app and an httpx AsyncClient bound to
it through ASGITransport.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from httpx import ASGITransport, AsyncClient

FIXTURES = Path(__file__).parent / "fixtures"
STD_DDOC = FIXTURES / "std.ddoc"

# ── Env vars must be set before importing ddocgen modules ────────────────────
os.environ.setdefault("DDOC_MACRO_FILES", json.dumps([str(STD_DDOC)]))

from ddocgen.core.config import get_settings
from ddocgen.main import create_app
from ddocgen.services.macros import MacroRegistry, MacroTable, register_all_builtins


# ── Fresh registries / tables ─────────────────────────────────────────────────

@pytest.fixture
def registry() -> MacroRegistry:
    """A private registry with every builtin registered."""
    return register_all_builtins(MacroRegistry())


@pytest.fixture
def std_table() -> MacroTable:
    from ddocgen.services.macros import load_macro_file
    return load_macro_file(STD_DDOC).table


# ── HTTP client ───────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def settings():
    return get_settings()

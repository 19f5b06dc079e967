#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via DDOC_-prefixed environment variables or a
.env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="DDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "ddocgen"
    app_version: str = "0.3.0"
    debug: bool = False
    log_level: str = "INFO"

    # ── Expansion limits ───────────────────────────────────────────────────

    max_depth: int = Field(default=64, ge=1, le=256)          # nested expansions per chain
    max_expansions: int = Field(default=100_000, ge=1)        # total expansions per render
    max_output: int = Field(default=5_000_000, ge=1)          # characters produced per render

    # ── Macro tables ───────────────────────────────────────────────────────

    # Loaded in order for every render; later files override earlier ones.
    macro_files: list[Path] = []
    default_title: str = ""


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------

"""
Pydantic v2 schemas for request validation and response serialisation.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

_MACRO_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Shared
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class WarningOut(BaseModel):
    source: str
    line: int
    text: str
    reason: str


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rendering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderRequest(BaseModel):
    text: str
    macros: dict[str, str] = Field(default_factory=dict)
    macro_text: str = ""
    title: str = ""
    wrap: bool = False   # wrap the output in $(DDOC)

    @field_validator("macros")
    @classmethod
    def names_are_identifiers(cls, v: dict[str, str]) -> dict[str, str]:
        for name in v:
            if not _MACRO_NAME.fullmatch(name):
                raise ValueError(f"Invalid macro name '{name}'")
        return v


# -----------------------------------------------------------------------------

class RenderResponse(BaseModel):
    output: str
    warnings: list[WarningOut] = []
    limits_hit: list[str] = []


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Macro tables
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ParseRequest(BaseModel):
    text: str


# -----------------------------------------------------------------------------

class MacroTableOut(BaseModel):
    macros: dict[str, str]
    warnings: list[WarningOut] = []
    builtins: list[str] = []

"""
Exceptions raised for configuration mistakes.

Content problems (malformed definitions, unknown macros, runaway recursion)
never raise; they are logged and rendered around.
"""

from __future__ import annotations

from pathlib import Path


class DdocError(Exception):
    """Base class for ddocgen errors."""


class MacroFileError(DdocError):
    """A macro definition file could not be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read macro file {self.path}: {reason}")

"""
Macro table loader
==================
Parses macro definition text into a MacroTable.

Supported forms
---------------
  NAME = value                  → {"NAME": "value"}
  NAME = <table>                → {"NAME": "<table>\\n\\t$0\\n</table>"}
  	$0
  </table>
  Macros:                       → section header, ignored

A line that is not a definition continues the definition above it.
Later definitions of the same name replace earlier ones.

Malformed lines (``= value``, ``bad name = value``, or stray text before any
definition) are skipped and reported as LoadWarning entries.  Loading never
fails on content; only an unreadable file raises MacroFileError.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import aiofiles

from ddocgen.core.errors import MacroFileError
from .table import MacroTable

logger = logging.getLogger(__name__)

# NAME = value
_DEFINITION   = re.compile(r'^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=(.*)$')
# = value  (no name)
_EMPTY_NAME   = re.compile(r'^\s*=')
_SECTION_HEAD = "Macros:"


@dataclass(frozen=True)
class LoadWarning:
    source: str
    line: int
    text: str
    reason: str

    def __str__(self) -> str:
        return f"{self.source}:{self.line}: {self.reason}: {self.text!r}"


@dataclass
class LoadResult:
    table: MacroTable = field(default_factory=MacroTable)
    warnings: list[LoadWarning] = field(default_factory=list)


# -----------------------------------------------------------------------------

def parse_macros(text: str, source: str = "<string>") -> LoadResult:
    """
    Parse definition text into a table.

    Parameters
    ----------
    text : str
        Definition text, e.g. ``"B = <b>$0</b>\\nI = <i>$0</i>"``
    source : str
        Name used in warnings (usually the file path).

    Returns
    -------
    LoadResult
        The parsed table and any warnings for skipped lines.
    """
    entries: dict[str, str] = {}
    warnings: list[LoadWarning] = []

    current: str | None = None
    lines: list[str] = []

    def close() -> None:
        nonlocal current, lines
        if current is not None:
            entries[current] = "\n".join(lines).strip()
        current, lines = None, []

    def skip(lineno: int, raw: str, reason: str) -> None:
        warning = LoadWarning(source, lineno, raw, reason)
        logger.warning("Skipping macro definition: %s", warning)
        warnings.append(warning)

    for lineno, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()

        if stripped == _SECTION_HEAD:
            close()
            continue

        m = _DEFINITION.match(raw)
        if m:
            close()
            current, lines = m.group(1), [m.group(2)]
            continue

        if _EMPTY_NAME.match(raw):
            close()
            skip(lineno, raw, "empty macro name")
            continue

        if current is not None:
            lines.append(raw.rstrip())
            continue

        if stripped:
            reason = "invalid macro name" if "=" in stripped else "no '=' in definition"
            skip(lineno, raw, reason)

    close()
    return LoadResult(MacroTable(entries), warnings)


# -----------------------------------------------------------------------------

def load_macro_file(path: str | Path) -> LoadResult:
    """Read and parse a single UTF-8 macro file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MacroFileError(path, exc.strerror or str(exc)) from exc
    result = parse_macros(text, source=str(path))
    logger.debug("Loaded %d macros from %s", len(result.table), path)
    return result


def load_macro_files(paths: Iterable[str | Path]) -> LoadResult:
    """Load several files in order; later files override earlier ones."""
    combined = LoadResult()
    for path in paths:
        result = load_macro_file(path)
        combined.table = combined.table.merged(result.table)
        combined.warnings.extend(result.warnings)
    return combined


async def load_macro_files_async(paths: Iterable[str | Path]) -> LoadResult:
    """Async variant of load_macro_files for use inside request handlers."""
    combined = LoadResult()
    for path in paths:
        path = Path(path)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as fh:
                text = await fh.read()
        except OSError as exc:
            raise MacroFileError(path, exc.strerror or str(exc)) from exc
        result = parse_macros(text, source=str(path))
        combined.table = combined.table.merged(result.table)
        combined.warnings.extend(result.warnings)
    return combined

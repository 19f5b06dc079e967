"""
MacroTable — the name → template mapping used for one render pass.

Names are case-sensitive.  A table is never mutated after construction;
layering several tables produces a new one.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class MacroTable(Mapping[str, str]):
    """
    Read-only mapping of macro names to template strings.

    Usage::

        base  = MacroTable({"B": "<b>$0</b>"})
        table = base.merged({"I": "<i>$0</i>"})
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    def __getitem__(self, name: str) -> str:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MacroTable({len(self._entries)} macros)"

    def merged(self, *others: Mapping[str, str]) -> MacroTable:
        """Return a new table with *others* layered on top, last one winning."""
        entries = dict(self._entries)
        for other in others:
            entries.update(other)
        return MacroTable(entries)

    def names(self) -> list[str]:
        return sorted(self._entries)

"""
Invocation argument parsing
===========================
Splits the text inside ``$(NAME ...)`` into a name and its arguments.

Supported forms
---------------
  $(NAME)                 → name="NAME", raw=""
  $(NAME a, b)            → raw="a, b",  args=["a", "b"]
  $(NAME, a, b)           → raw="a, b",  args=["a", "b"]
  $(NAME f(x, y), z)      → args=["f(x, y)", "z"]   (nested brackets)
  $(NAME $(B a, b), c)    → args=["$(B a, b)", "c"] (nested invocations)

Leading whitespace of each argument is dropped; trailing whitespace is kept.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_NAME = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

_OPEN  = "([{"
_CLOSE = ")]}"


@dataclass
class Invocation:
    name: str
    raw: str                                   # $0
    args: list[str] = field(default_factory=list)
    text: str = ""                             # the full $(...) source

    @property
    def rest(self) -> str:
        """Everything after the first top-level comma ($+)."""
        if len(self.args) < 2:
            return ""
        return ",".join(_split_top_level(self.raw)[1:]).lstrip()

    def arg(self, index: int) -> str:
        """1-based positional argument, empty when missing."""
        if 1 <= index <= len(self.args):
            return self.args[index - 1]
        return ""


# -----------------------------------------------------------------------------

def find_closing_paren(text: str, open_pos: int) -> int:
    """
    Return the index of the ``)`` matching the ``(`` at *open_pos*,
    or -1 when the parenthesis is never closed.
    """
    depth = 0
    for pos in range(open_pos, len(text)):
        c = text[pos]
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return pos
    return -1


def _balanced_positions(raw: str) -> set[int]:
    """Positions of brackets that have a matching partner in *raw*."""
    matched: set[int] = set()
    stack: list[tuple[str, int]] = []
    for pos, c in enumerate(raw):
        if c in _OPEN:
            stack.append((c, pos))
        elif c in _CLOSE:
            opener = _OPEN[_CLOSE.index(c)]
            # unwind past unclosed openers to the nearest matching one
            for i in range(len(stack) - 1, -1, -1):
                if stack[i][0] == opener:
                    matched.update((stack[i][1], pos))
                    del stack[i:]
                    break
    return matched


def _split_top_level(raw: str) -> list[str]:
    """Split on commas that are not nested inside a balanced bracket pair."""
    parts: list[str] = []
    start = 0
    depth = 0
    balanced = _balanced_positions(raw)
    for pos, c in enumerate(raw):
        if pos in balanced:
            depth += 1 if c in _OPEN else -1
        elif c == "," and depth == 0:
            parts.append(raw[start:pos])
            start = pos + 1
    parts.append(raw[start:])
    return parts


def split_args(raw: str) -> list[str]:
    """
    Split an argument string on top-level commas.

    ``"a, f(b, c),d"`` → ``["a", "f(b, c)", "d"]``
    """
    if not raw:
        return []
    return [part.lstrip() for part in _split_top_level(raw)]


def parse_invocation(inner: str, text: str = "") -> Invocation | None:
    """
    Parse the text between ``$(`` and its closing ``)``.

    Returns None when *inner* does not start with a macro name followed by
    whitespace, a comma, or the end of the invocation.
    """
    m = _NAME.match(inner)
    if not m:
        return None

    name = m.group(0)
    rest = inner[m.end():]
    if rest and not (rest[0].isspace() or rest[0] == ","):
        return None

    if rest.startswith(","):
        rest = rest[1:]
    raw = rest.lstrip()

    return Invocation(name=name, raw=raw, args=split_args(raw), text=text)

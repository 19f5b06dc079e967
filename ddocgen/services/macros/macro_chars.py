"""
Character macros
----------------
Emit characters that would otherwise be read as macro syntax.

$(DOLLAR)     — $
$(LPAREN)     — (
$(RPAREN)     — )
$(COMMA)      — ,
$(LF)         — newline
$(BACKTICK)   — `

Output is spliced in after expansion, so ``$(DOLLAR)(B x)`` renders the
literal text ``$(B x)``.
"""

from __future__ import annotations

from .registry import MacroRegistry

_CHARS = {
    "DOLLAR":   "$",
    "LPAREN":   "(",
    "RPAREN":   ")",
    "COMMA":    ",",
    "LF":       "\n",
    "BACKTICK": "`",
}


def register(registry: MacroRegistry) -> None:
    for name, char in _CHARS.items():
        registry.register(name)(lambda inv, ctx, _char=char: _char)

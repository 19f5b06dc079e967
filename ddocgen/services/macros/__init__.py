"""
Macro subsystem — public API.
"""

from .table import MacroTable
from .loader import (
    LoadResult,
    LoadWarning,
    load_macro_file,
    load_macro_files,
    load_macro_files_async,
    parse_macros,
)
from .args import Invocation, parse_invocation, split_args
from .registry import MacroRegistry, macro_registry
from .engine import MacroEngine, substitute
from .context import MacroContext
from .builtins import register_all_builtins

__all__ = [
    "MacroTable",
    "LoadResult",
    "LoadWarning",
    "load_macro_file",
    "load_macro_files",
    "load_macro_files_async",
    "parse_macros",
    "Invocation",
    "parse_invocation",
    "split_args",
    "MacroRegistry",
    "macro_registry",
    "MacroEngine",
    "substitute",
    "MacroContext",
    "register_all_builtins",
]

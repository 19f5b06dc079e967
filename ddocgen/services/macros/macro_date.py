"""
Date/Time macros
----------------
$(DATETIME)                      — render time   →  Mon Oct 19 14:03:07 2026
$(DATETIME $year-$month-$day)    — formatted     →  2026-10-19
$(YEAR)                          — render year   →  2026

Every macro in one render pass sees the same timestamp (ctx.now).

Format tokens:
  $seconds $minutes $hours  $day $wday $wdayname
  $month $mon $mo $year $ye $epoch  $tz $iso
"""

from __future__ import annotations

import calendar
from datetime import datetime

from .registry import MacroRegistry

_FORMAT_TOKENS = {
    "$seconds": lambda dt: f"{dt.second:02d}",
    "$minutes": lambda dt: f"{dt.minute:02d}",
    "$hours":   lambda dt: f"{dt.hour:02d}",
    "$day":     lambda dt: f"{dt.day:02d}",
    "$wday":    lambda dt: str(dt.weekday()),
    "$wdayname":lambda dt: calendar.day_name[dt.weekday()],
    "$month":   lambda dt: f"{dt.month:02d}",
    "$mon":     lambda dt: dt.strftime("%b"),
    "$mo":      lambda dt: f"{dt.month:02d}",
    "$year":    lambda dt: str(dt.year),
    "$ye":      lambda dt: dt.strftime("%y"),
    "$epoch":   lambda dt: str(int(dt.timestamp())),
    "$tz":      lambda dt: dt.strftime("%Z") or "UTC",
    "$iso":     lambda dt: dt.strftime("%Y-%m-%dT%H:%M:%SZ"),
}

# longest first so $wdayname is not eaten by $wday
_TOKEN_ORDER = sorted(_FORMAT_TOKENS, key=len, reverse=True)

_DEFAULT_FMT = "%a %b %d %H:%M:%S %Y"


def apply_format(fmt: str, dt: datetime) -> str:
    """Replace $token placeholders with dt values."""
    result = fmt
    for token in _TOKEN_ORDER:
        if token in result:
            result = result.replace(token, _FORMAT_TOKENS[token](dt))
    return result


def register(registry: MacroRegistry) -> None:

    @registry.register("DATETIME")
    def datetime_macro(inv, ctx):
        if inv.raw:
            return apply_format(inv.raw, ctx.now)
        return ctx.now.strftime(_DEFAULT_FMT)

    @registry.register("YEAR")
    def year_macro(inv, ctx):
        return str(ctx.now.year)

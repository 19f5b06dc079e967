#!/usr/bin/env python
# -----------------------------------------------------------------------------
"""
Macro table loader tests
========================
  - NAME = VALUE parsing, trimming, continuation lines
  - Duplicate names (last wins), Macros: section header
  - Malformed lines reported as warnings, never fatal
  - File loading, layering and the async variant
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import asyncio
import logging

import pytest

from ddocgen.core.errors import DdocError, MacroFileError
from ddocgen.services.macros import (
    MacroTable,
    load_macro_file,
    load_macro_files,
    load_macro_files_async,
    parse_macros,
)

from tests.conftest import STD_DDOC


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. Parsing definitions
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestParseMacros:
    def test_empty(self):
        result = parse_macros("")
        assert len(result.table) == 0
        assert result.warnings == []

    def test_single_definition(self):
        assert dict(parse_macros("B = <b>$0</b>").table) == {"B": "<b>$0</b>"}

    def test_value_and_name_trimmed(self):
        table = parse_macros("   XREF   =   <a>$1</a>   \n").table
        assert table["XREF"] == "<a>$1</a>"

    def test_no_spaces_around_equals(self):
        assert parse_macros("LF=\\n").table["LF"] == "\\n"

    def test_multiple_definitions(self):
        table = parse_macros("A = 1\nB = 2\nC = 3").table
        assert dict(table) == {"A": "1", "B": "2", "C": "3"}

    def test_names_are_case_sensitive(self):
        table = parse_macros("name = lower\nNAME = upper").table
        assert table["name"] == "lower"
        assert table["NAME"] == "upper"

    def test_duplicate_last_wins(self):
        table = parse_macros("A = first\nB = x\nA = second").table
        assert table["A"] == "second"
        assert len(table) == 2

    def test_equals_in_value_kept(self):
        table = parse_macros('LINK = <a href="$1">$2</a>').table
        assert table["LINK"] == '<a href="$1">$2</a>'

    def test_empty_value(self):
        assert parse_macros("NOTHING =").table["NOTHING"] == ""

    def test_continuation_lines(self):
        text = "BOOKTABLE = <table>\n\t$0\n</table>\nNEXT = n"
        table = parse_macros(text).table
        assert table["BOOKTABLE"] == "<table>\n\t$0\n</table>"
        assert table["NEXT"] == "n"

    def test_value_on_following_line(self):
        table = parse_macros("DDOC =\n<html>$(BODY)</html>").table
        assert table["DDOC"] == "<html>$(BODY)</html>"

    def test_continuation_with_markup(self):
        text = 'A = <p>\n<a href="x">y</a>\n</p>'
        assert parse_macros(text).table["A"] == '<p>\n<a href="x">y</a>\n</p>'

    def test_indented_name_equals_starts_new_definition(self):
        table = parse_macros('A = <a\n  href="x">y</a>').table
        assert table["A"] == "<a"
        assert table["href"] == '"x">y</a>'

    def test_blank_lines_inside_value_trimmed_at_end(self):
        table = parse_macros("A = one\n\ntwo\n\n\nB = b").table
        assert table["A"] == "one\n\ntwo"

    def test_macros_section_header_ignored(self):
        result = parse_macros("Macros:\nB = <b>$0</b>")
        assert dict(result.table) == {"B": "<b>$0</b>"}
        assert result.warnings == []

    def test_crlf_line_endings(self):
        table = parse_macros("A = 1\r\nB = 2\r\n").table
        assert dict(table) == {"A": "1", "B": "2"}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. Malformed lines
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestMalformed:
    def test_empty_name_skipped(self):
        result = parse_macros("= value\nA = 1")
        assert dict(result.table) == {"A": "1"}
        assert len(result.warnings) == 1
        w = result.warnings[0]
        assert w.line == 1
        assert w.reason == "empty macro name"

    def test_empty_name_closes_open_definition(self):
        result = parse_macros("A = 1\n= stray\nmore")
        assert result.table["A"] == "1"
        assert [w.reason for w in result.warnings] == ["empty macro name", "no '=' in definition"]

    def test_text_before_any_definition(self):
        result = parse_macros("just some prose\nA = 1")
        assert dict(result.table) == {"A": "1"}
        assert result.warnings[0].reason == "no '=' in definition"

    def test_invalid_name(self):
        result = parse_macros("two words = x")
        assert len(result.table) == 0
        assert result.warnings[0].reason == "invalid macro name"

    def test_warning_carries_source(self):
        result = parse_macros("= x", source="site.ddoc")
        assert str(result.warnings[0]).startswith("site.ddoc:1: empty macro name")

    def test_warnings_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ddocgen.services.macros.loader"):
            parse_macros("= nope")
        assert "empty macro name" in caplog.text


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 3. MacroTable
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestMacroTable:
    def test_mapping_behaviour(self):
        table = MacroTable({"A": "1"})
        assert table["A"] == "1"
        assert "A" in table
        assert table.get("B") is None
        assert list(table) == ["A"]

    def test_merged_returns_new_table(self):
        base = MacroTable({"A": "1", "B": "2"})
        layered = base.merged({"B": "override"}, {"C": "3"})
        assert dict(layered) == {"A": "1", "B": "override", "C": "3"}
        assert base["B"] == "2"

    def test_no_item_assignment(self):
        table = MacroTable({"A": "1"})
        with pytest.raises(TypeError):
            table["A"] = "2"  # type: ignore[index]

    def test_names_sorted(self):
        assert MacroTable({"b": "", "A": "", "a": ""}).names() == ["A", "a", "b"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 4. Files
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestLoadFiles:
    def test_fixture_file(self):
        result = load_macro_file(STD_DDOC)
        assert result.table["B"] == "<b>$0</b>"
        assert result.table["BOOKTABLE"] == "<table><caption>$1</caption>\n\t$+\n\t</table>"
        assert result.table["DDOC"].startswith("<!DOCTYPE html>")
        assert result.table["DDOC"].endswith("</body></html>")
        assert len(result.warnings) == 1
        assert result.warnings[0].source == str(STD_DDOC)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(MacroFileError) as exc_info:
            load_macro_file(tmp_path / "nope.ddoc")
        assert isinstance(exc_info.value, DdocError)
        assert exc_info.value.path.name == "nope.ddoc"

    def test_later_files_override(self, tmp_path):
        first = tmp_path / "first.ddoc"
        second = tmp_path / "second.ddoc"
        first.write_text("A = first\nB = only-first\n", encoding="utf-8")
        second.write_text("A = second\n= bad\n", encoding="utf-8")

        result = load_macro_files([first, second])
        assert dict(result.table) == {"A": "second", "B": "only-first"}
        assert [w.source for w in result.warnings] == [str(second)]

    def test_no_files(self):
        result = load_macro_files([])
        assert len(result.table) == 0

    def test_async_matches_sync(self, tmp_path):
        extra = tmp_path / "extra.ddoc"
        extra.write_text("B = <strong>$0</strong>\n", encoding="utf-8")

        sync = load_macro_files([STD_DDOC, extra])
        async_ = asyncio.run(load_macro_files_async([STD_DDOC, extra]))
        assert dict(async_.table) == dict(sync.table)
        assert async_.table["B"] == "<strong>$0</strong>"
        assert len(async_.warnings) == len(sync.warnings)

    def test_async_missing_file_raises(self, tmp_path):
        with pytest.raises(MacroFileError):
            asyncio.run(load_macro_files_async([tmp_path / "missing.ddoc"]))

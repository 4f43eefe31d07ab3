"""Tests for usage line tokenizing."""

import pytest

from helpdoc.parsing.usage import build_usage_doc, extract_usage_tokens, parse_usage_line, split_optional_segments


class TestSplitOptionalSegments:
    """Tests for structural bracket handling."""

    def test_segments(self):
        segments = split_optional_segments("git [-C <path>] <command> [<args>]")
        assert [(s.text, s.optional) for s in segments] == [
            ("git", False),
            ("-C <path>", True),
            ("<command>", False),
            ("<args>", True),
        ]

    def test_embedded_brackets_are_literal(self):
        """Test brackets inside a token do not open a segment."""
        segments = split_optional_segments("tool --opt[=VALUE] <x>")
        assert [(s.text, s.optional) for s in segments] == [("tool --opt[=VALUE] <x>", False)]


class TestParseUsageLine:
    """Tests for parse_usage_line function."""

    def test_flag_and_required(self):
        tokens = parse_usage_line("cmd [-v] <file>", "cmd")
        assert tokens.required_args == ["<file>"]
        assert tokens.optional_args == []
        assert tokens.flags == ["-v"]

    def test_inline_alternatives(self):
        """Test a parenthesised alternation keeps its first choice."""
        tokens = parse_usage_line("tool (start|stop|restart)", "tool")
        assert tokens.required_args == ["start"]

    def test_optional_positional_placeholder(self):
        tokens = parse_usage_line("tool [--verbose] <path> [extra...]", "tool")
        assert tokens.required_args == ["<path>"]
        assert tokens.optional_args == ["<extra...>"]
        assert tokens.flags == ["--verbose"]

    def test_flag_with_value(self):
        tokens = parse_usage_line("git [-C <path>] <command> [<args>]", "git")
        assert tokens.flags == ["-C <path>"]
        assert tokens.required_args == ["<command>"]
        assert tokens.optional_args == ["<args>"]

    @pytest.mark.parametrize("line", ["tool [-v | --verbose]", "tool [-v|--verbose]"])
    def test_flag_alternatives_prefer_long(self, line):
        assert parse_usage_line(line, "tool").flags == ["--verbose"]

    def test_binary_path(self):
        """Test both the full path and the basename are dropped."""
        tokens = parse_usage_line("tool run <x>", "/usr/local/bin/tool")
        assert tokens.required_args == ["run", "<x>"]
        tokens = parse_usage_line("/usr/local/bin/tool <x>", "/usr/local/bin/tool")
        assert tokens.required_args == ["<x>"]

    def test_embedded_option_value(self):
        tokens = parse_usage_line("tool --opt[=VALUE]", "tool")
        assert tokens.flags == ["--opt[=VALUE]"]
        assert tokens.required_args == []

    def test_duplicates_removed(self):
        tokens = parse_usage_line("tool <x> <x> [-v] [-v]", "tool")
        assert tokens.required_args == ["<x>"]
        assert tokens.flags == ["-v"]


def test_extract_usage_tokens_merges_lines():
    """Test tokens of every usage line are merged in order."""
    lines = ["gh <command> <subcommand> [flags]", "", "gh <command> --help"]
    tokens = extract_usage_tokens(lines, "gh")
    assert tokens.required_args == ["<command>", "<subcommand>"]
    assert tokens.optional_args == ["<flags>"]
    assert tokens.flags == ["--help"]


def test_build_usage_doc_drops_flags():
    doc = build_usage_doc(["cmd [-v] <file> [more]"], "cmd")
    assert doc.required_args == ["<file>"]
    assert doc.optional_args == ["<more>"]
    assert not hasattr(doc, "flags")

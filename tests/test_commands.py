"""Tests for command listing extraction."""

from helpdoc.parsing.commands import candidate_command_lines, extract_commands, parse_command_lines
from helpdoc.parsing.sections import split_sections


def names(commands):
    return [command.name for command in commands]


class TestLineShapes:
    """Tests for the individual command line shapes."""

    def test_two_column(self):
        """Test name and summary separated by two spaces or more."""
        commands = parse_command_lines(["  build     Build the project", "  run\tRun it"])
        assert names(commands) == ["build", "run"]
        assert commands[0].summary == "Build the project"
        assert commands[1].summary == "Run it"

    def test_two_column_colon_suffix(self):
        """Test the gh style trailing colon is removed from the name."""
        commands = parse_command_lines(["  issue:      Manage issues"])
        assert names(commands) == ["issue"]
        assert commands[0].summary == "Manage issues"

    def test_bullet(self):
        """Test man-page style `o name` lists."""
        commands = parse_command_lines(["  o s3", "", "  o ec2-instance-connect"])
        assert names(commands) == ["s3", "ec2-instance-connect"]
        assert all(command.summary == "" for command in commands)

    def test_two_line(self):
        """Test a signature line followed by a deeper description line."""
        lines = [
            "  commit [<options>] [--] <pathspec>...",
            "      Record changes to the repository",
            "  remote <command> [<args>]",
            "",
            "      Manage set of tracked repositories",
        ]
        commands = parse_command_lines(lines)
        assert names(commands) == ["commit", "remote"]
        assert commands[0].summary == "Record changes to the repository"
        assert commands[0].has_subcommands is None
        assert commands[1].summary == "Manage set of tracked repositories"
        assert commands[1].has_subcommands is True

    def test_two_line_needs_deeper_description(self):
        """Test a signature followed by a sibling line is not a command."""
        commands = parse_command_lines(["  commit [<options>]", "  push <remote>"])
        assert commands == []

    def test_flag_and_unindented_lines_skipped(self):
        """Test lines starting with `-` and flush-left lines never yield commands."""
        commands = parse_command_lines(["  -v, --verbose   Be loud", "top    Not indented", "  ok    Fine"])
        assert names(commands) == ["ok"]

    def test_single_word_lines_skipped(self):
        """Test prose lines without a column gap are ignored."""
        assert parse_command_lines(["  see the manual for details"]) == []


class TestCandidateLines:
    """Tests for the candidate line fallbacks."""

    def test_command_sections_first(self):
        """Test command-like sections come before the other sections."""
        split = split_sections("Other:\n  skip   Not this\nCommands:\n  keep   This one\nServices:\n  svc   A service\n")
        commands = extract_commands(split)
        assert names(commands) == ["keep", "svc", "skip"]

    def test_category_sections_with_commands(self):
        """Test commands grouped under category headers next to a command section."""
        text = (
            "COMMANDS\n"
            "  docs   Open the documentation\n"
            "\n"
            "ACCOUNT\n"
            "  login    Log in\n"
            "  logout   Log out\n"
            "\n"
            "STORAGE\n"
            "  kv   Manage key-value namespaces\n"
        )
        assert names(extract_commands(split_sections(text))) == ["docs", "login", "logout", "kv"]

    def test_non_command_sections_excluded(self):
        """Test options, usage, examples and environment stay out of the command list."""
        text = (
            "Usage:\n"
            "  tool  <command>  [flags]\n"
            "Commands:\n"
            "  run   Run it\n"
            "Global Options:\n"
            "  verbose   Talk more\n"
            "Flags:\n"
            "  quiet   Talk less\n"
            "Examples:\n"
            "  tool run   Run the default target\n"
            "Environment:\n"
            "  TOOL_HOME   Where state lives\n"
        )
        split = split_sections(text)
        assert names(extract_commands(split)) == ["run"]
        assert candidate_command_lines(split) == ["  run   Run it"]

    def test_all_sections_fallback(self):
        """Test any section is used when none is command-like."""
        split = split_sections("Things:\n  build   Build it\nMore:\n  clean   Clean it\n")
        assert names(extract_commands(split)) == ["build", "clean"]

    def test_preamble_fallback(self):
        """Test the preamble is used when there is no header at all."""
        split = split_sections("mytool does things\n\n  build   Build it\n  clean   Clean it\n")
        assert candidate_command_lines(split) == split.preamble
        assert names(extract_commands(split)) == ["build", "clean"]

    def test_duplicate_command_sections(self):
        """Test commands from every matching section, in document order."""
        text = "CORE COMMANDS\n  issue:  Manage issues\n\nADDITIONAL COMMANDS\n  alias:  Create shortcuts\n"
        assert names(extract_commands(split_sections(text))) == ["issue", "alias"]

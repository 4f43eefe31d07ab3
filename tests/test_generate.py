"""Tests for document_tool and document_tools."""

import os

import pytest

from helpdoc.config import SETTINGS_SCHEMA, Configuration
from helpdoc.constants import NO_COMMANDS_WARNING
from helpdoc.discovery.generate import document_tool, document_tools, runner_from_settings
from helpdoc.discovery.models import HelpPattern, ToolSpec
from helpdoc.process import ReplayRunner

from .testtools import ScriptedRunner

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures", "gh")

TOP_HELP = "Commands:\n  remote   Manage remotes\n  status   Show status\n\nOptions:\n  -v  Verbose\n"
REMOTE_HELP = "Commands:\n  add   Add a remote\n"


def settings(test_logger, **values):
    return Configuration(values, logger=test_logger, schema=SETTINGS_SCHEMA)


class TestDocumentTool:
    """Tests for document_tool function."""

    @pytest.mark.asyncio
    async def test_probed_pattern(self):
        run = ScriptedRunner({("--help",): TOP_HELP, ("remote", "--help"): REMOTE_HELP})
        docs = await document_tool(ToolSpec(id="tool", binary="tool"), run, generated_at="t0")
        assert docs.pattern == HelpPattern(("{command}", "--help"))
        assert [c.doc_path for c in docs.tool.commands] == ["commands/remote/command.md", "commands/status/command.md"]
        assert [doc.command for doc in docs.commands] == ["remote", "remote add", "status"]
        assert all(doc.generated_at == "t0" for doc in docs.commands)

    @pytest.mark.asyncio
    async def test_configured_pattern_skips_probing(self):
        run = ScriptedRunner({("--help",): TOP_HELP, ("help", "remote"): REMOTE_HELP})
        tool = ToolSpec(id="tool", binary="tool", command_help_args=("help", "{command}"))
        docs = await document_tool(tool, run, generated_at="t0")
        assert docs.pattern == HelpPattern(("help", "{command}"))
        assert run.calls == [("--help",), ("help", "remote"), ("help", "remote", "add"), ("help", "status")]

    @pytest.mark.asyncio
    async def test_configured_pattern_without_placeholder(self):
        """Test a template lacking {command} falls back to probing instead of failing."""
        run = ScriptedRunner({("--help",): TOP_HELP, ("remote", "--help"): REMOTE_HELP})
        tool = ToolSpec(id="tool", binary="tool", command_help_args=("help",))
        docs = await document_tool(tool, run, generated_at="t0")
        assert docs.pattern == HelpPattern(("{command}", "--help"))
        assert [doc.command for doc in docs.commands] == ["remote", "remote add", "status"]

    @pytest.mark.asyncio
    async def test_no_pattern_no_command_docs(self):
        """Test a tool without subcommand help yields only its root document."""
        run = ScriptedRunner({("--help",): TOP_HELP})
        docs = await document_tool(ToolSpec(id="tool", binary="tool"), run, generated_at="t0")
        assert docs.pattern is None
        assert docs.commands == []
        assert all(c.doc_path is None for c in docs.tool.commands)
        assert docs.to_dict()["command_help_args"] is None

    @pytest.mark.asyncio
    async def test_probing_disabled(self, test_logger):
        run = ScriptedRunner({("--help",): TOP_HELP, ("remote", "--help"): REMOTE_HELP})
        docs = await document_tool(ToolSpec(id="tool", binary="tool"), run, settings(test_logger, probe=False))
        assert docs.pattern is None
        assert run.calls == [("--help",)]

    @pytest.mark.asyncio
    async def test_max_depth_setting(self, test_logger):
        run = ScriptedRunner({("--help",): TOP_HELP, ("remote", "--help"): REMOTE_HELP})
        docs = await document_tool(ToolSpec(id="tool", binary="tool"), run, settings(test_logger, max_depth=1))
        assert [doc.command for doc in docs.commands] == ["remote", "status"]

    @pytest.mark.asyncio
    async def test_previous_pattern(self):
        run = ScriptedRunner({("--help",): TOP_HELP, ("help", "remote"): REMOTE_HELP})
        docs = await document_tool(ToolSpec(id="tool", binary="tool"), run, previous_pattern=["help", "{command}"])
        assert docs.pattern == HelpPattern(("help", "{command}"))
        assert run.calls[1] == ("help", "remote")


@pytest.mark.asyncio
async def test_document_tools_order_and_enabled():
    class AnyBinaryRunner(ScriptedRunner):
        async def __call__(self, binary, args):
            self.binary = binary
            return await super().__call__(binary, args)

    run = AnyBinaryRunner({("--help",): "Options:\n  -v  Verbose\n"})
    tools = [
        ToolSpec(id="zeta", binary="zeta"),
        ToolSpec(id="off", binary="off", enabled=False),
        ToolSpec(id="alpha", binary="alpha"),
    ]
    docs = await document_tools(tools, run)
    assert [doc.tool.id for doc in docs] == ["alpha", "zeta"]


@pytest.mark.asyncio
async def test_document_tools_bad_template_keeps_others():
    """Test one tool with a broken template or previous template does not stop the others."""

    class AnyBinaryRunner(ScriptedRunner):
        async def __call__(self, binary, args):
            self.binary = binary
            return await super().__call__(binary, args)

    run = AnyBinaryRunner({("--help",): TOP_HELP, ("remote", "--help"): REMOTE_HELP})
    tools = [
        ToolSpec(id="broken", binary="broken", command_help_args=("help",)),
        ToolSpec(id="fine", binary="fine"),
    ]
    docs = await document_tools(tools, run, previous_patterns={"fine": ["help"]})
    assert [doc.tool.id for doc in docs] == ["broken", "fine"]
    assert all(doc.pattern == HelpPattern(("{command}", "--help")) for doc in docs)


@pytest.mark.asyncio
async def test_replayed_gh():
    """Test a full run against recorded gh help outputs."""
    run = ReplayRunner(FIXTURES)
    docs = await document_tool(ToolSpec(id="gh", binary="gh", display_name="GitHub CLI"), run, generated_at="t0")

    assert docs.pattern == HelpPattern(("{command}", "--help"))
    assert [c.name for c in docs.tool.commands] == ["issue", "pr", "alias"]
    assert [o.flags for o in docs.tool.options] == ["--help", "--version"]
    assert [e.name for e in docs.tool.env] == ["GH_TOKEN", "GH_HOST"]
    assert len(docs.tool.examples) == 3
    assert docs.tool.warnings == []

    by_command = {doc.command: doc for doc in docs.commands}
    assert list(by_command) == [
        "issue",
        "issue create",
        "issue list",
        "issue close",
        "pr",
        "pr list",
        "alias",
        "alias list",
        "alias set",
    ]

    issue_list = by_command["issue list"]
    assert issue_list.summary == "List issues in a repository"
    assert issue_list.usage.required_args == ["issue", "list"]
    assert [o.flags for o in issue_list.options] == [
        "-a, --assignee string",
        "-L, --limit int",
        "-s, --state string",
        "--help",
    ]
    assert issue_list.warnings == [NO_COMMANDS_WARNING]
    assert by_command["issue create"].warnings[-1] == "no recording for: gh issue create --help"
    assert by_command["issue"].subcommands[1].doc_path == "commands/issue-list/command.md"


@pytest.mark.asyncio
async def test_replayed_gh_is_deterministic():
    """Test two runs over the same recordings serialize identically."""
    tool = ToolSpec(id="gh", binary="gh", display_name="GitHub CLI")
    first = await document_tool(tool, ReplayRunner(FIXTURES), generated_at="t0")
    second = await document_tool(tool, ReplayRunner(FIXTURES), generated_at="t0")
    assert first.to_dict() == second.to_dict()
    assert [doc["command"] for doc in first.to_dict()["commands"]][:2] == ["issue", "issue create"]


@pytest.mark.asyncio
async def test_runner_from_settings(test_logger):
    """Test the configured timeout reaches the subprocess runner."""
    run = runner_from_settings(settings(test_logger, timeout=0.2))
    result = await run("sleep", ["5"])
    assert result.error == "timed out after 0.2s"

"""Help text parsing for helpdoc.

This package provides:
- models: Data structures (Section, CommandSummary, OptionDoc, EnvDoc, UsageTokens, ParsedHelp)
- sections: Header classification and section splitting
- commands: Command listing extraction
- options: Flag and environment variable blocks
- usage: Usage line tokenizing
- assembler: parse_help, combining all of the above
"""

from .assembler import parse_help
from .models import CommandSummary, EnvDoc, OptionDoc, ParsedHelp, Section, UsageDoc, UsageTokens
from .usage import build_usage_doc, extract_usage_tokens

__all__ = [
    "CommandSummary",
    "EnvDoc",
    "OptionDoc",
    "ParsedHelp",
    "Section",
    "UsageDoc",
    "UsageTokens",
    "build_usage_doc",
    "extract_usage_tokens",
    "parse_help",
]

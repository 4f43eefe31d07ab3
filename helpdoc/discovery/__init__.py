"""Subcommand discovery for helpdoc.

This package provides:
- models: HelpPattern, ToolSpec and the ToolDoc / CommandDoc records
- documents: Record building from a help invocation
- prober: Top-level help fallback and subcommand help convention probing
- traversal: Depth-bounded command tree walk
- generate: document_tool, tying it all together
"""

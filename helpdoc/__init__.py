"""helpdoc - structured documentation extracted from CLI help output.

Parses the free-form `--help` text of arbitrary command-line programs into
usage, commands, options, examples and environment variables, and probes a
live binary to discover how it exposes help for its own subcommands.
"""

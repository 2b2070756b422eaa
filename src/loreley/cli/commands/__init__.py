# topmark:header:start
#
#   project      : Loreley
#   file         : __init__.py
#   file_relpath : src/loreley/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley CLI subcommands."""

# topmark:header:start
#
#   project      : Loreley
#   file         : __init__.py
#   file_relpath : src/loreley/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Click-based command line interface for Loreley.

The entry point is `loreley.cli.main.cli`, installed as the ``loreley``
console script.
"""

# topmark:header:start
#
#   project      : Loreley
#   file         : __init__.py
#   file_relpath : src/loreley/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Click-independent helpers shared by the CLI and the configuration layer."""

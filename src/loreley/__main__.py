# topmark:header:start
#
#   project      : Loreley
#   file         : __main__.py
#   file_relpath : src/loreley/__main__.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Allow ``python -m loreley``."""

from loreley.cli.main import cli

if __name__ == "__main__":
    cli(prog_name="loreley")

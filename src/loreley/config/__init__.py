# topmark:header:start
#
#   project      : Loreley
#   file         : __init__.py
#   file_relpath : src/loreley/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Configuration handling for Loreley.

Submodules:
    - `loreley.config.logging`: logging setup with a TRACE level.
    - `loreley.config.model`: the immutable `LoreleyConfig` dataclass.
    - `loreley.config.io`: discovery and loading of ``loreley.toml`` or the
      ``[tool.loreley]`` table of ``pyproject.toml`` with tomlkit.

This package deliberately imports nothing at package level: the core library
imports `loreley.config.logging`, and the other submodules import the core.
"""

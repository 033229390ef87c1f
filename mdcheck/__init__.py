"""
mdcheck package

This package implements `check`, a CLI that turns a markdown checklist into a
process exit status.

Key responsibilities are split across modules:
- `template.py`: strip comments and `@status` directives from template text
- `scaffold.py`: render and write the starter template for `check init`
- `cli.py`: CLI entrypoint and orchestration (resolve path -> read -> process -> exit)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"

"""
scaffold.py

Responsibility: Render the starter template written by `check init` and put it on disk.

Rules:
- The scaffold is a Jinja2 template rendered with StrictUndefined, so a missing
  context value fails loudly instead of producing an empty directive.
- Trailing newlines are kept and output is written with `\\n` line endings.
- Existing files are only replaced when `force` is set.

This module intentionally does NOT know about argument parsing or template processing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined

logger = logging.getLogger(__name__)

SCAFFOLD_TEMPLATE = """\
<!-- {{ name }} template -->
# {{ name }}

@status {{ status }}
"""


class ScaffoldError(RuntimeError):
    pass


def _environment() -> Environment:
    return Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def render_scaffold(*, status: int = 0, name: str = "check", template: str = SCAFFOLD_TEMPLATE) -> str:
    context: dict[str, Any] = {"name": name, "status": status}
    try:
        return _environment().from_string(template).render(**context)
    except Exception as e:  # noqa: BLE001 - surface as ScaffoldError
        raise ScaffoldError("Failed rendering scaffold template") from e


def write_template_file(path: str | Path, content: str, *, force: bool = False) -> Path:
    """
    Write `content` to `path`, creating parent directories as needed.

    Refuses to overwrite an existing file unless `force` is set.
    """
    dst = Path(path)
    if not force and dst.exists():
        raise ScaffoldError(f"file already exists: {dst}")

    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise ScaffoldError(f"failed to write template {str(dst)!r}: {e}") from e

    logger.debug("Wrote scaffold to %s (%d bytes)", dst, len(content))
    return dst

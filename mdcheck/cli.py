"""
cli.py

Responsibility: CLI entrypoint for `check`.

Commands:
- (none) / `run`: read the template, print the cleaned text, exit with its status
- `init`: write a starter template
- `help`, `version`

Any first argument that is not a command falls through to template mode, so
`check whatever` behaves like `check`.

This module should orchestrate behavior but keep concerns isolated:
- Template processing: `template.py`
- Scaffold rendering and writing: `scaffold.py`
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Mapping

from mdcheck import __version__
from mdcheck.scaffold import ScaffoldError, render_scaffold, write_template_file
from mdcheck.template import process_template

logger = logging.getLogger(__name__)

PROG = "check"
DEFAULT_FILE_NAME = ".check.md"
FILE_ENV = "CHECK_FILE"
LOG_LEVEL_ENV = "CHECK_LOG_LEVEL"

_COMMANDS = ("run", "init", "help", "version")
_GLOBAL_FLAGS = ("-h", "--help", "-v", "--verbose", "--version")

_EPILOG = """\
Environment:
  CHECK_FILE           Path to template file for template mode
  CHECK_LOG_LEVEL      Log level for diagnostics on stderr (default: WARNING)

Template format:
  - Markdown file treated as plain text
  - HTML comments <!-- ... --> are ignored
  - Optional directive: @status <code>
"""


class CLIError(RuntimeError):
    pass


def default_template_path() -> Path:
    return Path(tempfile.gettempdir()) / DEFAULT_FILE_NAME


def resolve_template_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    value = env.get(FILE_ENV) or ""
    return Path(value) if value else default_template_path()


def _read_template(path: Path) -> str:
    # newline="" keeps a lone "\r" as text; template.split_lines handles "\r\n".
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CLIError(f"failed to read template {str(path)!r}: {e}") from e


def run_cmd(args: argparse.Namespace) -> int:
    path = resolve_template_path()
    logger.debug("Reading template from %s", path)

    result = process_template(_read_template(path))
    logger.debug("Template status: %d", result.status)

    sys.stdout.write(result.text)
    sys.stdout.flush()
    return result.status


def init_cmd(args: argparse.Namespace) -> int:
    if len(args.paths) > 1:
        raise CLIError("only one path argument is supported")
    target = args.paths[0] if args.paths else str(default_template_path())

    content = render_scaffold(status=args.status)
    write_template_file(target, content, force=bool(args.force))

    print(target)
    return 0


def help_cmd(args: argparse.Namespace) -> int:
    _build_parser().print_help()
    return 0


def version_cmd(args: argparse.Namespace) -> int:
    print(f"{PROG} {__version__}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=PROG,
        description="check - process markdown template and return exit status",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")
    p.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    p.set_defaults(func=run_cmd)
    sub = p.add_subparsers(dest="command")

    r = sub.add_parser("run", help="Run template mode (default)")
    r.set_defaults(func=run_cmd)

    i = sub.add_parser("init", help="Write a starter template")
    i.add_argument("paths", nargs="*", metavar="path", help="Where to write it (default: $TMPDIR/.check.md)")
    i.add_argument("-f", "--force", action="store_true", help="Overwrite existing file")
    i.add_argument("--status", type=int, default=0, help="Status code for the @status directive (default: 0)")
    i.set_defaults(func=init_cmd)

    h = sub.add_parser("help", help="Show help")
    h.set_defaults(func=help_cmd)

    v = sub.add_parser("version", help="Show version")
    v.set_defaults(func=version_cmd)
    return p


def _route_argv(argv: list[str]) -> list[str]:
    """
    Send anything that is not a known command to template mode.

    Leading global flags are kept; the first other token decides.
    """
    for idx, token in enumerate(argv):
        if token in _GLOBAL_FLAGS:
            continue
        if token in _COMMANDS:
            return argv
        return argv[:idx] + ["run"]
    return argv


def _configure_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        name = (os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
        level = getattr(logging, name, None)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(_route_argv(argv))
    _configure_logging(bool(args.verbose))

    try:
        return int(args.func(args))
    except (CLIError, ScaffoldError) as e:
        print(e, file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

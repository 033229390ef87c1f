"""
template.py

Responsibility: Turn template text into (cleaned text, status code).

Pipeline, applied in order:
- strip a leading byte-order mark
- remove `<!-- ... -->` comments (non-nested; the first `-->` closes)
- drop `@status` directive lines, remembering the last valid status
- trim leading/trailing blank lines and collapse blank runs to one
- rejoin with `\\n`, restoring the trailing newline of the comment-stripped text

Everything here is pure: no I/O, no module state. The CLI owns reading files and
turning the status into an exit code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

BOM = "\ufeff"
COMMENT_START = "<!--"
COMMENT_END = "-->"
STATUS_DIRECTIVE = "@status"
DEFAULT_STATUS = 0

# Malformed input never raises; these are the only two fallbacks.
POLICIES = {
    "malformed_directive": "ignore",  # status unchanged, line still removed
    "unterminated_comment": "preserve",  # marker and the rest of the text kept verbatim
}

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Values outside a signed 64-bit int are malformed.
STATUS_MIN = -(2**63)
STATUS_MAX = 2**63 - 1


@dataclass(frozen=True)
class TemplateResult:
    """Cleaned template text and the status code selected by its directives."""

    text: str
    status: int = DEFAULT_STATUS

    def __iter__(self) -> Iterator[str | int]:
        # Allows `text, status = process_template(...)`.
        yield self.text
        yield self.status


def strip_bom(text: str) -> str:
    if text.startswith(BOM):
        return text[len(BOM) :]
    return text


def strip_html_comments(text: str) -> str:
    """
    Remove every `<!--` ... `-->` span, markers included, scanning left to right.

    An opening marker with no closing marker after it ends the scan; that marker and
    everything following it are kept as-is.
    """
    parts: list[str] = []
    pos = 0
    while True:
        start = text.find(COMMENT_START, pos)
        if start == -1:
            break
        end = text.find(COMMENT_END, start + len(COMMENT_START))
        if end == -1:
            break
        parts.append(text[pos:start])
        pos = end + len(COMMENT_END)
    parts.append(text[pos:])
    return "".join(parts)


def split_lines(text: str) -> list[str]:
    """
    Split on `\\n` only. A final `\\n` terminates the last line rather than starting an
    empty one, so "a\\n" and "a" both give ["a"].

    One `\\r` at the end of a line is dropped, so CRLF files split like LF files. A `\\r`
    anywhere else is ordinary text.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_status(line: str) -> int | None:
    """
    Return the status carried by a directive line, or None when it is malformed.

    The caller has already decided the line is a directive.
    """
    fields = line.split()
    if len(fields) != 2 or not _INT_RE.fullmatch(fields[1]):
        return None
    value = int(fields[1])
    if not STATUS_MIN <= value <= STATUS_MAX:
        return None
    return value


def is_directive(line: str) -> bool:
    return line.strip().startswith(STATUS_DIRECTIVE)


def extract_directives(lines: Iterable[str], status: int = DEFAULT_STATUS) -> tuple[list[str], int]:
    """
    Separate directive lines from content lines.

    Returns (content_lines, status) where status is the value of the last valid
    directive, or the starting `status` when there is none. Content lines are returned
    untouched and in order.
    """
    content: list[str] = []
    for line in lines:
        if not is_directive(line):
            content.append(line)
            continue
        parsed = parse_status(line)
        if parsed is not None:
            status = parsed
    return content, status


def normalize_blank_lines(lines: Iterable[str]) -> list[str]:
    """
    Drop empty lines at both ends and collapse internal runs of empty lines to one.

    Only zero-length lines count as empty; whitespace-only lines are content.
    """
    out: list[str] = []
    for line in lines:
        if line == "" and (not out or out[-1] == ""):
            continue
        out.append(line)
    while out and out[-1] == "":
        out.pop()
    return out


def process_template(text: str) -> TemplateResult:
    """
    Run the whole pipeline over `text`.

    The trailing newline follows the comment-stripped text: it is kept when that text
    ended with "\\n", except when the text ends in a blank line (which normalization
    trims along with its newline) or when nothing is left to print.
    """
    stripped = strip_html_comments(strip_bom(text))
    lines = split_lines(stripped)

    content, status = extract_directives(lines)
    normalized = normalize_blank_lines(content)

    output = "\n".join(normalized)
    ends_with_blank_line = bool(lines) and lines[-1] == ""
    if normalized and stripped.endswith("\n") and not ends_with_blank_line:
        output += "\n"
    return TemplateResult(text=output, status=status)

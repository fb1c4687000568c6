"""Fenced code block scanning.

Follows the CommonMark fence rules closely enough to tell whether every
opening fence in a post body is closed. Content between fences is opaque.
Fences nested in block quotes or list items are not recognised.
"""

from __future__ import annotations

import re

from postshelf.models import CodeFence

_OPEN_RE = re.compile(r"^(?P<indent> {0,3})(?P<run>`{3,}|~{3,})(?P<info>.*)$")
_CLOSE_RE = re.compile(r"^ {0,3}(?P<run>`{3,}|~{3,})[ \t]*$")
# Only \n, \r and \r\n end a line; form feeds and Unicode separators do not.
_LINE_RE = re.compile(r".*?(?:\r\n|\r|\n)|.+\Z", re.DOTALL)


def split_lines(text: str, keepends: bool = False) -> list[str]:
    """Split ``text`` into lines on Markdown line endings only."""
    lines = _LINE_RE.findall(text)
    if keepends:
        return lines
    return [line.rstrip("\r\n") for line in lines]


def scan_fences(body: str) -> list[CodeFence]:
    """Return every fenced code block in ``body``, in document order.

    The last fence has ``end_line=None`` if the body ends while it is
    still open.
    """
    fences: list[CodeFence] = []
    open_marker = ""
    open_length = 0
    open_info = ""
    open_line = 0

    for lineno, line in enumerate(split_lines(body), start=1):
        if open_line:
            close = _CLOSE_RE.match(line)
            if (
                close is not None
                and close.group("run")[0] == open_marker
                and len(close.group("run")) >= open_length
            ):
                fences.append(
                    CodeFence(
                        marker=open_marker,
                        length=open_length,
                        info=open_info,
                        start_line=open_line,
                        end_line=lineno,
                    )
                )
                open_line = 0
            continue

        opening = _OPEN_RE.match(line)
        if opening is None:
            continue
        run = opening.group("run")
        info = opening.group("info").strip()
        # A backtick fence's info string may not contain backticks;
        # such a line is inline code, not a fence.
        if run[0] == "`" and "`" in info:
            continue
        open_marker = run[0]
        open_length = len(run)
        open_info = info
        open_line = lineno

    if open_line:
        fences.append(
            CodeFence(
                marker=open_marker,
                length=open_length,
                info=open_info,
                start_line=open_line,
            )
        )
    return fences


def unterminated_fences(body: str) -> list[CodeFence]:
    """Fences that are opened but never closed."""
    return [f for f in scan_fences(body) if not f.terminated]

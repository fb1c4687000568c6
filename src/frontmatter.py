"""Front-matter header parsing.

A post starts with a ``---`` line, then a YAML mapping, then a closing
``---`` line. Everything after the closing marker is the body.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from postshelf.errors import (
    FrontMatterError,
    MissingFrontMatterError,
    UnterminatedFrontMatterError,
)
from postshelf.fences import split_lines
from postshelf.models import FrontMatter

MARKER = "---"
_MARKER_RE = re.compile(r"^---[ \t]*$")
_BOM = "\ufeff"


def split_front_matter(text: str) -> tuple[str, str]:
    """Split a document into (header text, body).

    Raises:
        MissingFrontMatterError: first line is not ``---``.
        UnterminatedFrontMatterError: no closing ``---`` line.
    """
    text = text.removeprefix(_BOM)
    lines = split_lines(text, keepends=True)
    if not lines or not _MARKER_RE.match(lines[0].rstrip("\r\n")):
        raise MissingFrontMatterError("document does not start with '---'")

    for i in range(1, len(lines)):
        if _MARKER_RE.match(lines[i].rstrip("\r\n")):
            header = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            return header, body

    raise UnterminatedFrontMatterError("header block has no closing '---'")


def parse_header(header: str) -> dict[str, Any]:
    """YAML-parse header text into a mapping.

    An empty header is an empty mapping.
    """
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"invalid YAML in header: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"header must be a mapping, got {type(data).__name__}"
        )
    return {str(k): v for k, v in data.items()}


def parse_front_matter(text: str) -> tuple[FrontMatter, str]:
    """Parse a whole document into its FrontMatter and body."""
    header, body = split_front_matter(text)
    return FrontMatter.from_mapping(parse_header(header)), body


def dump_front_matter(data: dict[str, Any]) -> str:
    """Render a mapping as a header block, keys in insertion order."""
    dumped = yaml.safe_dump(
        data,
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        width=1000,
    )
    return f"{MARKER}\n{dumped}{MARKER}\n"

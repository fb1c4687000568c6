"""Create new, empty posts."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any

from postshelf.errors import PostExistsError
from postshelf.filenames import post_filename
from postshelf.frontmatter import dump_front_matter

logger = logging.getLogger(__name__)


def new_post(
    directory: Path,
    title: str,
    on_date: date | None = None,
    layout: str = "post",
    extra: dict[str, Any] | None = None,
    extension: str = ".md",
) -> Path:
    """Write a new post with a ``layout``/``title`` header.

    Existing posts are never overwritten.

    Raises:
        PostExistsError: a post with the same file name exists.
        FileNameError: no slug can be derived from ``title``.
    """
    on_date = on_date or date.today()
    path = directory / post_filename(on_date, title, extension)
    if path.exists():
        raise PostExistsError(path)

    header: dict[str, Any] = {"layout": layout, "title": title}
    if extra:
        header.update({k: v for k, v in extra.items() if k not in header})

    directory.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(dump_front_matter(header))
            f.write("\n")
    except FileExistsError as exc:
        raise PostExistsError(path) from exc
    logger.info("Created %s", path)
    return path

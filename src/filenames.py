"""Post file names: ``YYYY-MM-DD-slug.md``."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from datetime import date

from postshelf.errors import FileNameError
from postshelf.models import PostFileName

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md",)

_NAME_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"-(?P<slug>[A-Za-z0-9_](?:[A-Za-z0-9_-]*[A-Za-z0-9_])?)"
    r"(?P<ext>\.[A-Za-z0-9]+)$"
)


def parse_post_filename(
    name: str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> PostFileName:
    """Parse a post file name.

    Raises:
        FileNameError: the name does not match the pattern, the
            extension is not allowed, or the date is not a real day.
    """
    match = _NAME_RE.match(name)
    if match is None:
        raise FileNameError(f"{name!r} does not match YYYY-MM-DD-slug.ext")

    ext = match.group("ext")
    allowed = {e.lower() for e in extensions}
    if ext.lower() not in allowed:
        raise FileNameError(
            f"{name!r} has extension {ext!r}, expected one of {sorted(allowed)}"
        )

    try:
        post_date = date(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
        )
    except ValueError as exc:
        raise FileNameError(f"{name!r} has an invalid date: {exc}") from exc

    return PostFileName(date=post_date, slug=match.group("slug"), extension=ext)


def slugify(title: str) -> str:
    """Turn a title into a URL slug.

    >>> slugify("Building a Clojure(script) game with websockets and Reagent")
    'building-a-clojurescript-game-with-websockets-and-reagent'
    """
    text = unicodedata.normalize("NFKD", title)
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    text = re.sub(r"[^a-z0-9\s_-]", "", text)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")


def post_filename(post_date: date, title: str, extension: str = ".md") -> str:
    """Build ``YYYY-MM-DD-slug.ext`` for a title."""
    slug = slugify(title)
    if not slug:
        raise FileNameError(f"cannot derive a slug from {title!r}")
    return f"{post_date.isoformat()}-{slug}{extension}"

"""Reader-facing index page and JSON manifest, newest posts first."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from postshelf.models import Post
from postshelf.ordering import group_by_year, sort_posts

logger = logging.getLogger(__name__)


def render_index(posts: Iterable[Post], title: str = "Posts") -> str:
    """Generate a markdown index grouped by year."""
    lines: list[str] = [f"# {title}", ""]

    groups = group_by_year(posts)
    if not groups:
        lines.append("_No posts yet._")
        lines.append("")
        return "\n".join(lines)

    for year, year_posts in groups.items():
        lines.append(f"## {year}")
        lines.append("")
        for post in year_posts:
            label = post.title or post.slug
            lines.append(f"- {post.date.isoformat()} [{label}]({post.url})")
        lines.append("")

    return "\n".join(lines)


def build_manifest(posts: Iterable[Post]) -> list[dict[str, Any]]:
    """One JSON-ready entry per post, newest first."""
    return [
        {
            "date": post.date.isoformat(),
            "slug": post.slug,
            "title": post.title,
            "layout": post.layout,
            "url": post.url,
            "file": post.file_name.name,
        }
        for post in sort_posts(posts)
    ]


def write_index(posts: Iterable[Post], path: Path, title: str = "Posts") -> Path:
    """Write the markdown index to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_index(posts, title), encoding="utf-8")
    logger.info("Wrote index to %s", path)
    return path


def write_manifest(posts: Iterable[Post], path: Path) -> Path:
    """Write the JSON manifest to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(build_manifest(posts), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    logger.info("Wrote manifest to %s", path)
    return path

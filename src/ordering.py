"""Chronological ordering of posts by the date in their file name."""

from __future__ import annotations

from collections.abc import Iterable

from postshelf.models import Post


def sort_posts(posts: Iterable[Post], reverse: bool = True) -> list[Post]:
    """Order posts by file-name date, newest first by default.

    Posts sharing a date are ordered by slug ascending in both
    directions, so the result is a total order.
    """
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(by_slug, key=lambda p: p.date, reverse=reverse)


def group_by_year(posts: Iterable[Post]) -> dict[int, list[Post]]:
    """Group posts by publication year, newest year and post first."""
    groups: dict[int, list[Post]] = {}
    for post in sort_posts(posts):
        groups.setdefault(post.date.year, []).append(post)
    return groups


def adjacent(posts: Iterable[Post], post: Post) -> tuple[Post | None, Post | None]:
    """Return the (newer, older) neighbours of ``post``.

    Raises:
        ValueError: ``post`` is not among ``posts``.
    """
    ordered = sort_posts(posts)
    names = [p.file_name.name for p in ordered]
    try:
        i = names.index(post.file_name.name)
    except ValueError:
        raise ValueError(f"{post.file_name.name} is not in the post list") from None
    newer = ordered[i - 1] if i > 0 else None
    older = ordered[i + 1] if i + 1 < len(ordered) else None
    return newer, older

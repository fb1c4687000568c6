"""Discover and load posts from a directory."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from postshelf.config import PostsConfig
from postshelf.errors import PostLoadError, PostshelfError
from postshelf.filenames import DEFAULT_EXTENSIONS, parse_post_filename
from postshelf.frontmatter import parse_front_matter
from postshelf.models import Post
from postshelf.ordering import sort_posts

logger = logging.getLogger(__name__)


def load_post(path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> Post:
    """Load a single post file.

    Raises:
        PostLoadError: the file is unreadable, badly named, or has a
            missing, unterminated or invalid header. ``cause`` holds the
            underlying error.
    """
    try:
        file_name = parse_post_filename(path.name, extensions)
        text = path.read_text(encoding="utf-8")
        front_matter, body = parse_front_matter(text)
    except (OSError, UnicodeDecodeError, PostshelfError) as exc:
        raise PostLoadError(path, exc) from exc

    return Post(path=path, file_name=file_name, front_matter=front_matter, body=body)


class LoadResult(BaseModel):
    """Posts that loaded, newest first, and the files that did not."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    posts: list[Post] = Field(default_factory=list)
    failures: dict[Path, PostLoadError] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class PostLoader:
    """Discovers and reads posts from a posts directory."""

    def __init__(self, config: PostsConfig | None = None) -> None:
        self.config = config or PostsConfig()

    def discover(self, directory: Path) -> list[Path]:
        """List candidate post files, sorted by name.

        Hidden and ``_``-prefixed files and directories (drafts, VCS
        metadata) are skipped.
        """
        if not directory.is_dir():
            logger.warning("Posts directory does not exist: %s", directory)
            return []

        pattern = "**/*" if self.config.recursive else "*"
        extensions = {e.lower() for e in self.config.extensions}
        found: list[Path] = []
        for path in directory.glob(pattern):
            if not path.is_file():
                continue
            if any(part.startswith((".", "_")) for part in path.relative_to(directory).parts):
                continue
            if path.suffix.lower() not in extensions:
                continue
            found.append(path)
        return sorted(found)

    def load_all(self, directory: Path, strict: bool = False) -> LoadResult:
        """Load every post in ``directory``.

        With ``strict`` the first failure is raised; otherwise failures
        are logged and collected on the result.
        """
        result = LoadResult()
        loaded: list[Post] = []
        for path in self.discover(directory):
            try:
                loaded.append(load_post(path, self.config.extensions))
            except PostLoadError as exc:
                if strict:
                    raise
                logger.warning("Skipping %s: %s", path, exc.cause)
                result.failures[path] = exc

        result.posts = sort_posts(loaded)
        logger.debug("Loaded %d post(s) from %s", len(result.posts), directory)
        return result

"""Exception hierarchy for postshelf.

Library code raises these; the CLI catches ``PostshelfError`` and turns it
into a non-zero exit.
"""

from __future__ import annotations

from pathlib import Path


class PostshelfError(Exception):
    """Base class for every error raised by postshelf."""


class FileNameError(PostshelfError):
    """A post file name does not match ``YYYY-MM-DD-slug.ext``."""


class FrontMatterError(PostshelfError):
    """The front-matter header is malformed."""


class MissingFrontMatterError(FrontMatterError):
    """The document does not start with a header block."""


class UnterminatedFrontMatterError(FrontMatterError):
    """The header block is opened but never closed."""


class PostLoadError(PostshelfError):
    """A post file could not be loaded.

    Wraps the underlying cause and remembers which file failed.
    """

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path.name}: {cause}")


class PostExistsError(PostshelfError):
    """Refusing to overwrite an existing post."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Post already exists: {path}")

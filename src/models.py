"""Pure data models for posts.

All Pydantic models and enums live here. No I/O, no parsing. Loaders,
validators and renderers import from this module.
"""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Post
# ---------------------------------------------------------------------------


class FrontMatter(BaseModel):
    """Header of a post.

    ``layout`` and ``title`` are the recognised keys. Anything else in the
    header is kept untouched in ``extra``.
    """

    model_config = ConfigDict(frozen=True)

    layout: str = ""
    title: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> FrontMatter:
        """Build from a parsed header mapping, keeping unknown keys."""
        extra = {k: v for k, v in data.items() if k not in ("layout", "title")}
        return cls(
            layout=_as_text(data.get("layout")),
            title=_as_text(data.get("title")),
            extra=extra,
        )

    def get(self, key: str, default: Any = None) -> Any:
        if key == "layout":
            return self.layout
        if key == "title":
            return self.title
        return self.extra.get(key, default)

    def to_mapping(self) -> dict[str, Any]:
        """Header as a plain dict, recognised keys first."""
        data: dict[str, Any] = {"layout": self.layout, "title": self.title}
        data.update(self.extra)
        return data


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class PostFileName(BaseModel):
    """Parsed ``YYYY-MM-DD-slug.ext`` file name."""

    model_config = ConfigDict(frozen=True)

    date: date
    slug: str
    extension: str = ".md"

    @property
    def name(self) -> str:
        return f"{self.date.isoformat()}-{self.slug}{self.extension}"


class Post(BaseModel):
    """A single post: parsed file name, header and body text."""

    model_config = ConfigDict(frozen=True)

    path: Path
    file_name: PostFileName
    front_matter: FrontMatter
    body: str = ""

    @property
    def date(self) -> date:
        return self.file_name.date

    @property
    def slug(self) -> str:
        return self.file_name.slug

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def layout(self) -> str:
        return self.front_matter.layout

    @property
    def url(self) -> str:
        """Date-based permalink, ``/YYYY/MM/DD/slug.html``."""
        d = self.date
        return f"/{d.year:04d}/{d.month:02d}/{d.day:02d}/{self.slug}.html"


# ---------------------------------------------------------------------------
# Code fences
# ---------------------------------------------------------------------------


class CodeFence(BaseModel):
    """A fenced code block found in a post body.

    Line numbers are 1-based and relative to the body. ``end_line`` is
    ``None`` when the fence is never closed.
    """

    marker: str
    length: int
    info: str = ""
    start_line: int
    end_line: int | None = None

    @property
    def terminated(self) -> bool:
        return self.end_line is not None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class IssueSeverity(StrEnum):
    """How bad a validation issue is."""

    ERROR = "error"
    WARNING = "warning"


class IssueCode(StrEnum):
    """Stable identifiers for each structural check."""

    FILENAME = "filename"
    UNREADABLE = "unreadable"
    HEADER_MISSING = "header-missing"
    HEADER_UNTERMINATED = "header-unterminated"
    HEADER_INVALID = "header-invalid"
    REQUIRED_KEY = "required-key"
    FENCE_UNTERMINATED = "fence-unterminated"
    DATE_MISMATCH = "date-mismatch"
    DUPLICATE_SLUG = "duplicate-slug"


class ValidationIssue(BaseModel):
    """One problem found in one file."""

    path: Path
    code: IssueCode
    message: str
    severity: IssueSeverity = IssueSeverity.ERROR
    line: int | None = None


class ValidationReport(BaseModel):
    """Result of checking a whole posts directory."""

    checked: int = 0
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def for_path(self, path: Path) -> list[ValidationIssue]:
        return [i for i in self.issues if i.path == path]

"""Structural checks for posts.

Unlike the loader, these never raise on a bad post: every problem is
reported as a ``ValidationIssue`` so a whole directory can be checked in
one pass.
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Any

from postshelf.config import PostshelfConfig, PostsConfig
from postshelf.errors import (
    FileNameError,
    FrontMatterError,
    MissingFrontMatterError,
    UnterminatedFrontMatterError,
)
from postshelf.fences import split_lines, unterminated_fences
from postshelf.filenames import parse_post_filename
from postshelf.frontmatter import parse_header, split_front_matter
from postshelf.loader import PostLoader
from postshelf.models import (
    IssueCode,
    IssueSeverity,
    PostFileName,
    ValidationIssue,
    ValidationReport,
)

logger = logging.getLogger(__name__)


def validate_post(path: Path, config: PostsConfig | None = None) -> list[ValidationIssue]:
    """Check a single post file and return every issue found."""
    config = config or PostsConfig()
    issues: list[ValidationIssue] = []

    file_name: PostFileName | None = None
    try:
        file_name = parse_post_filename(path.name, config.extensions)
    except FileNameError as exc:
        issues.append(ValidationIssue(path=path, code=IssueCode.FILENAME, message=str(exc)))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        issues.append(
            ValidationIssue(path=path, code=IssueCode.UNREADABLE, message=str(exc))
        )
        return issues

    try:
        header, body = split_front_matter(text)
    except MissingFrontMatterError as exc:
        issues.append(
            ValidationIssue(path=path, code=IssueCode.HEADER_MISSING, message=str(exc), line=1)
        )
        return issues
    except UnterminatedFrontMatterError as exc:
        issues.append(
            ValidationIssue(
                path=path, code=IssueCode.HEADER_UNTERMINATED, message=str(exc), line=1
            )
        )
        return issues

    # Body line numbers are offset by the header and its two markers.
    body_offset = len(split_lines(header)) + 2

    try:
        data = parse_header(header)
    except FrontMatterError as exc:
        issues.append(
            ValidationIssue(path=path, code=IssueCode.HEADER_INVALID, message=str(exc), line=2)
        )
        data = None

    if data is not None:
        issues.extend(_check_required_keys(path, data, config.required_keys))
        if file_name is not None:
            issues.extend(_check_date(path, data, file_name))

    for fence in unterminated_fences(body):
        issues.append(
            ValidationIssue(
                path=path,
                code=IssueCode.FENCE_UNTERMINATED,
                message=f"code fence {fence.marker * fence.length} is never closed",
                line=fence.start_line + body_offset,
            )
        )

    return issues


def _check_required_keys(
    path: Path, data: dict[str, Any], required: list[str]
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for key in required:
        value = data.get(key)
        if value is None:
            message = f"missing required key {key!r}"
        elif not isinstance(value, str):
            message = f"key {key!r} must be text, got {type(value).__name__}"
        elif not value.strip():
            message = f"key {key!r} is empty"
        else:
            continue
        issues.append(ValidationIssue(path=path, code=IssueCode.REQUIRED_KEY, message=message))
    return issues


def _check_date(
    path: Path, data: dict[str, Any], file_name: PostFileName
) -> list[ValidationIssue]:
    """Warn when a ``date`` key disagrees with the file-name date."""
    if "date" not in data:
        return []
    value = data["date"]
    header_date: dt.date | None = None
    if isinstance(value, dt.datetime):
        header_date = value.date()
    elif isinstance(value, dt.date):
        header_date = value
    elif isinstance(value, str):
        try:
            header_date = dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            header_date = None

    if header_date is None:
        message = f"date {value!r} in header is not a date"
    elif header_date != file_name.date:
        message = (
            f"header date {header_date.isoformat()} differs from "
            f"file name date {file_name.date.isoformat()}"
        )
    else:
        return []
    return [
        ValidationIssue(
            path=path,
            code=IssueCode.DATE_MISMATCH,
            message=message,
            severity=IssueSeverity.WARNING,
        )
    ]


def _check_duplicates(paths: list[Path], config: PostsConfig) -> list[ValidationIssue]:
    """Posts sharing a date and slug would publish to the same URL."""
    seen: dict[tuple[dt.date, str], Path] = {}
    issues: list[ValidationIssue] = []
    for path in paths:
        try:
            file_name = parse_post_filename(path.name, config.extensions)
        except FileNameError:
            continue
        key = (file_name.date, file_name.slug)
        if key in seen:
            issues.append(
                ValidationIssue(
                    path=path,
                    code=IssueCode.DUPLICATE_SLUG,
                    message=f"same date and slug as {seen[key].name}",
                )
            )
        else:
            seen[key] = path
    return issues


def validate_directory(
    directory: Path, config: PostshelfConfig | None = None
) -> ValidationReport:
    """Check every post in ``directory``."""
    config = config or PostshelfConfig()
    paths = PostLoader(config.posts).discover(directory)

    issues: list[ValidationIssue] = []
    for path in paths:
        issues.extend(validate_post(path, config.posts))
    issues.extend(_check_duplicates(paths, config.posts))

    if config.check.warnings_as_errors:
        issues = [i.model_copy(update={"severity": IssueSeverity.ERROR}) for i in issues]

    report = ValidationReport(checked=len(paths), issues=issues)
    logger.debug(
        "Checked %d file(s) in %s: %d error(s), %d warning(s)",
        report.checked,
        directory,
        len(report.errors),
        len(report.warnings),
    )
    return report

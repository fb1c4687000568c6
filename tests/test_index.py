"""Tests for the markdown index and JSON manifest."""

import json
from datetime import date
from pathlib import Path

from postshelf.index import build_manifest, render_index, write_index, write_manifest
from postshelf.models import FrontMatter, Post, PostFileName


def _post(day: date, slug: str, title: str) -> Post:
    file_name = PostFileName(date=day, slug=slug)
    return Post(
        path=Path("_posts") / file_name.name,
        file_name=file_name,
        front_matter=FrontMatter(layout="post", title=title),
    )


POSTS = [
    _post(
        date(2016, 11, 26),
        "clojurescript-websocket-reagent-game",
        "Building a Clojure(script) game with websockets and Reagent",
    ),
    _post(date(2017, 1, 5), "quickcheck", "Haskell's QuickCheck"),
    _post(date(2016, 12, 11), "google-closure", "The Google Closure compiler"),
]


class TestRenderIndex:
    def test_heading(self):
        text = render_index(POSTS, title="Blog")
        assert text.startswith("# Blog\n")

    def test_years_newest_first(self):
        text = render_index(POSTS)
        assert text.index("## 2017") < text.index("## 2016")

    def test_posts_newest_first(self):
        text = render_index(POSTS)
        closure = text.index("The Google Closure compiler")
        reagent = text.index("Building a Clojure(script) game")
        assert closure < reagent

    def test_entry_format(self):
        text = render_index(POSTS)
        assert "- 2016-12-11 [The Google Closure compiler](/2016/12/11/google-closure.html)" in text

    def test_untitled_falls_back_to_slug(self):
        text = render_index([_post(date(2016, 1, 1), "untitled", "")])
        assert "[untitled](/2016/01/01/untitled.html)" in text

    def test_empty(self):
        assert "_No posts yet._" in render_index([])


class TestManifest:
    def test_entries_newest_first(self):
        manifest = build_manifest(POSTS)
        assert [m["date"] for m in manifest] == ["2017-01-05", "2016-12-11", "2016-11-26"]
        assert manifest[1] == {
            "date": "2016-12-11",
            "slug": "google-closure",
            "title": "The Google Closure compiler",
            "layout": "post",
            "url": "/2016/12/11/google-closure.html",
            "file": "2016-12-11-google-closure.md",
        }

    def test_write_manifest(self, tmp_path: Path):
        path = write_manifest(POSTS, tmp_path / "out" / "posts.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data) == 3
        assert data[0]["slug"] == "quickcheck"

    def test_write_index(self, tmp_path: Path):
        path = write_index(POSTS, tmp_path / "index.md", title="Blog")
        assert path.read_text(encoding="utf-8").startswith("# Blog")

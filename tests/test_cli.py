"""Smoke tests for the CLI."""

import json
from pathlib import Path

import pytest
from postshelf.cli import app
from typer.testing import CliRunner

GOOD_POST = "---\nlayout: post\ntitle: {title}\n---\n\nBody.\n"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def site(tmp_path: Path, monkeypatch) -> Path:
    """A site directory with a small _posts/ folder, used as CWD."""
    for key in ("POSTSHELF_POSTS_DIR", "POSTSHELF_DEFAULT_LAYOUT", "POSTSHELF_INDEX_TITLE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("postshelf.config.GLOBAL_CONFIG", tmp_path / "home-config.toml")
    posts = tmp_path / "_posts"
    posts.mkdir()
    (posts / "2016-11-26-clojurescript-websocket-reagent-game.md").write_text(
        GOOD_POST.format(title="Reagent game"), encoding="utf-8"
    )
    (posts / "2016-12-11-google-closure.md").write_text(
        GOOD_POST.format(title="Google Closure"), encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestCLI:
    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output

    def test_main_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "postshelf" in result.output


class TestCheck:
    def test_clean_site(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "no issues" in result.output

    def test_broken_post_fails(self, runner: CliRunner, site: Path) -> None:
        (site / "_posts" / "2016-12-12-broken.md").write_text(
            "---\nlayout: post\n", encoding="utf-8"
        )
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "1 error(s)" in result.output

    def test_warning_passes_unless_strict(self, runner: CliRunner, site: Path) -> None:
        (site / "_posts" / "2016-12-12-dated.md").write_text(
            "---\nlayout: post\ntitle: Dated\ndate: 2017-01-01\n---\n", encoding="utf-8"
        )
        assert runner.invoke(app, ["check"]).exit_code == 0
        assert runner.invoke(app, ["check", "--strict"]).exit_code == 1

    def test_missing_directory(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(app, ["check", "--dir", str(site / "missing")])
        assert result.exit_code == 2


class TestList:
    def test_lists_posts(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert result.output.index("2016-12-11") < result.output.index("2016-11-26")

    def test_oldest_first(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(app, ["list", "--oldest-first"])
        assert result.exit_code == 0
        assert result.output.index("2016-11-26") < result.output.index("2016-12-11")

    def test_empty_directory(self, runner: CliRunner, site: Path) -> None:
        (site / "empty").mkdir()
        result = runner.invoke(app, ["list", "--dir", str(site / "empty")])
        assert result.exit_code == 0
        assert "No posts found" in result.output


class TestIndex:
    def test_writes_index_and_manifest(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(
            app, ["index", "--output", "blog.md", "--manifest", "posts.json", "--title", "Blog"]
        )
        assert result.exit_code == 0
        index_text = (site / "blog.md").read_text(encoding="utf-8")
        assert index_text.startswith("# Blog")
        assert index_text.index("Google Closure") < index_text.index("Reagent game")
        manifest = json.loads((site / "posts.json").read_text(encoding="utf-8"))
        assert [m["slug"] for m in manifest] == [
            "google-closure",
            "clojurescript-websocket-reagent-game",
        ]

    def test_refuses_with_broken_posts(self, runner: CliRunner, site: Path) -> None:
        (site / "_posts" / "2016-12-12-broken.md").write_text("no header", encoding="utf-8")
        result = runner.invoke(app, ["index"])
        assert result.exit_code == 1
        assert not (site / "index.md").exists()


class TestConfig:
    def test_global_config_read_from_test_home(self, runner: CliRunner, site: Path) -> None:
        (site / "home-config.toml").write_text(
            '[posts]\ndirectory = "elsewhere"\n', encoding="utf-8"
        )
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 2
        assert "elsewhere" in result.output

    def test_empty_extensions_rejected(self, runner: CliRunner, site: Path) -> None:
        (site / ".postshelf.toml").write_text("[posts]\nextensions = []\n", encoding="utf-8")
        result = runner.invoke(app, ["new", "Hello", "--date", "2017-01-05"])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output
        assert not (site / "_posts" / "2017-01-05-hello.md").exists()


class TestNew:
    def test_creates_post(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(app, ["new", "QuickCheck generators", "--date", "2017-01-05"])
        assert result.exit_code == 0
        path = site / "_posts" / "2017-01-05-quickcheck-generators.md"
        assert path.exists()
        assert "layout: post" in path.read_text(encoding="utf-8")

    def test_custom_layout(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(
            app, ["new", "Notes", "--date", "2017-01-06", "--layout", "note"]
        )
        assert result.exit_code == 0
        text = (site / "_posts" / "2017-01-06-notes.md").read_text(encoding="utf-8")
        assert "layout: note" in text

    def test_bad_date(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(app, ["new", "Hello", "--date", "2017-02-30"])
        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_existing_post(self, runner: CliRunner, site: Path) -> None:
        result = runner.invoke(app, ["new", "Google Closure", "--date", "2016-12-11"])
        assert result.exit_code == 1
        assert "already exists" in result.output

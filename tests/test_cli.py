"""Tests for the CLI interface."""

import json
import os
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mdreader.cli import app
from mdreader.config import reset_config
from mdreader.db.sqlite import HISTORY_STORE, get_db, reset_db


@pytest.fixture(autouse=True)
def setup_test_db():
    """Set up a test database for each test."""
    reset_db()
    reset_config()

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    os.environ["MDREADER_DB_PATH"] = db_path

    yield

    # Cleanup
    reset_db()
    reset_config()
    if "MDREADER_DB_PATH" in os.environ:
        del os.environ["MDREADER_DB_PATH"]
    if Path(db_path).exists():
        Path(db_path).unlink()


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def markdown_file(tmp_path: Path) -> Path:
    """Write a small markdown document."""
    path = tmp_path / "guide.md"
    path.write_text(
        "---\ntitle: Guide\n---\nIntro text.\n\n# Setup\nInstall it.\n## Usage\nRun it.\n",
        encoding="utf-8",
    )
    return path


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Split Markdown documents" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestMarkdownCommands:
    """Tests for sections and words commands."""

    def test_sections_json(self, runner: CliRunner, markdown_file: Path):
        """Test printing section metadata as JSON."""
        result = runner.invoke(app, ["sections", str(markdown_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [s["id"] for s in data] == ["introduction", "setup", "usage"]
        assert data[1] == {"id": "setup", "title": "Setup", "level": 1, "wordCount": 3}

    def test_sections_table(self, runner: CliRunner, markdown_file: Path):
        """Test the section table output."""
        result = runner.invoke(app, ["sections", str(markdown_file)])

        assert result.exit_code == 0
        assert "setup" in result.stdout
        assert "usage" in result.stdout

    def test_sections_missing_file(self, runner: CliRunner, tmp_path: Path):
        """Test a missing input file."""
        result = runner.invoke(app, ["sections", str(tmp_path / "nope.md")])

        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_words(self, runner: CliRunner, markdown_file: Path):
        """Test counting words in a file."""
        result = runner.invoke(app, ["words", str(markdown_file)])

        assert result.exit_code == 0
        assert "Words: 8" in result.stdout
        assert "01min 00sec" in result.stdout


class TestContentCommands:
    """Tests for metadata and index commands."""

    def test_metadata(self, runner: CliRunner, content_dir: Path):
        """Test generating section metadata."""
        result = runner.invoke(app, ["metadata", str(content_dir)])

        assert result.exit_code == 0
        assert "Generated section metadata for 4 files" in result.stdout
        assert (content_dir / "section-metadata.json").exists()

    def test_metadata_missing_dir(self, runner: CliRunner, tmp_path: Path):
        """Test a missing content directory."""
        result = runner.invoke(app, ["metadata", str(tmp_path / "missing")])
        assert result.exit_code == 1

    def test_index(self, runner: CliRunner, content_dir: Path):
        """Test generating the content index."""
        result = runner.invoke(app, ["index", str(content_dir)])

        assert result.exit_code == 0
        assert "Indexed 3 files in 1 categories" in result.stdout
        assert (content_dir / "index.json").exists()
        assert (content_dir / "directory-structure.json").exists()


class TestHistoryCommands:
    """Tests for history commands."""

    def test_add_and_show(self, runner: CliRunner):
        """Test recording a read and listing it."""
        result = runner.invoke(
            app, ["history", "add", "python/getting_started.md", "--sections", "0,1", "--time", "90"]
        )
        assert result.exit_code == 0
        assert "Recorded read #1" in result.stdout

        result = runner.invoke(app, ["history", "show"])
        assert result.exit_code == 0
        assert "Getting" in result.stdout

    def test_add_rejects_negative_time(self, runner: CliRunner):
        """Test that a negative session time is refused."""
        result = runner.invoke(app, ["history", "add", "doc.md", "--time", "-5"])
        assert result.exit_code != 0

    def test_show_empty(self, runner: CliRunner):
        """Test showing an empty history."""
        result = runner.invoke(app, ["history", "show"])

        assert result.exit_code == 0
        assert "No reading history found" in result.stdout

    def test_complete(self, runner: CliRunner):
        """Test marking sections completed."""
        runner.invoke(app, ["history", "add", "doc"])

        result = runner.invoke(app, ["history", "complete", "doc", "2,3"])

        assert result.exit_code == 0
        assert get_db().get_all(HISTORY_STORE)[0]["completed_section_indices"] == [2, 3]

    def test_complete_unknown(self, runner: CliRunner):
        """Test marking sections of an unread document."""
        result = runner.invoke(app, ["history", "complete", "doc", "1"])

        assert result.exit_code == 1
        assert "No reading history" in result.stdout

    def test_complete_bad_indices(self, runner: CliRunner):
        """Test non-numeric section indices."""
        result = runner.invoke(app, ["history", "complete", "doc", "one,two"])
        assert result.exit_code == 1

    def test_clean(self, runner: CliRunner):
        """Test merging duplicate history entries."""
        db = get_db()
        db.add(HISTORY_STORE, {"path": "a.md", "last_read_at": 1, "completed_section_indices": [0]})
        db.add(HISTORY_STORE, {"path": "A", "last_read_at": 2, "completed_section_indices": [1]})

        result = runner.invoke(app, ["history", "clean"])

        assert result.exit_code == 0
        assert "Removed 1 duplicate(s), 1 item(s) remain" in result.stdout

    def test_clear(self, runner: CliRunner):
        """Test clearing history without a prompt."""
        runner.invoke(app, ["history", "add", "doc"])

        result = runner.invoke(app, ["history", "clear", "--yes"])

        assert result.exit_code == 0
        assert get_db().get_all(HISTORY_STORE) == []

    def test_clear_declined(self, runner: CliRunner):
        """Test that declining the prompt keeps history."""
        runner.invoke(app, ["history", "add", "doc"])

        result = runner.invoke(app, ["history", "clear"], input="n\n")

        assert result.exit_code == 0
        assert len(get_db().get_all(HISTORY_STORE)) == 1


class TestListCommands:
    """Tests for reading list commands."""

    def test_add_twice(self, runner: CliRunner):
        """Test that a document is only added once."""
        first = runner.invoke(app, ["list", "add", "guides/intro", "--title", "Intro"])
        second = runner.invoke(app, ["list", "add", "guides/intro"])

        assert "Added to reading list" in first.stdout
        assert "Already on the reading list" in second.stdout

    def test_show_and_stats(self, runner: CliRunner):
        """Test listing items and showing stats."""
        runner.invoke(app, ["list", "add", "a", "--title", "Alpha"])
        runner.invoke(app, ["list", "add", "b", "--title", "Beta"])

        shown = runner.invoke(app, ["list", "show"])
        stats = runner.invoke(app, ["list", "stats"])

        assert "Alpha" in shown.stdout
        assert "Total: 2" in stats.stdout
        assert "Progress: 0%" in stats.stdout

    def test_toggle_and_remove(self, runner: CliRunner):
        """Test toggling and removing by ID."""
        from mdreader.lists import ReadingListManager

        runner.invoke(app, ["list", "add", "a", "--title", "Alpha"])
        item_id = ReadingListManager(get_db()).get_all_items()[0].id

        toggled = runner.invoke(app, ["list", "toggle", item_id])
        assert toggled.exit_code == 0
        assert "as read" in toggled.stdout

        removed = runner.invoke(app, ["list", "remove", item_id])
        assert removed.exit_code == 0

        missing = runner.invoke(app, ["list", "remove", item_id])
        assert missing.exit_code == 1

    def test_toggle_unknown(self, runner: CliRunner):
        """Test toggling an unknown item."""
        result = runner.invoke(app, ["list", "toggle", "missing"])
        assert result.exit_code == 1

    def test_clear(self, runner: CliRunner):
        """Test clearing the list."""
        runner.invoke(app, ["list", "add", "a"])

        result = runner.invoke(app, ["list", "clear", "--yes"])

        assert result.exit_code == 0
        assert "Reading list cleared" in result.stdout

"""Pytest configuration and shared fixtures.

This module provides fixtures for testing mdreader, including temporary
and in-memory databases, managers, and sample Markdown content.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from mdreader.config import reset_config
from mdreader.db.sqlite import Database, reset_db
from mdreader.history import ReadingHistoryManager
from mdreader.lists import ReadingListManager


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def db(temp_db_path: Path) -> Generator[Database, None, None]:
    """Create a test database instance."""
    # Reset any global state
    reset_db()
    reset_config()

    # Set environment variable for test database
    os.environ["MDREADER_DB_PATH"] = str(temp_db_path)

    database = Database(str(temp_db_path))
    database.create_tables()
    yield database

    # Cleanup
    database.engine.dispose()
    reset_db()
    reset_config()
    if "MDREADER_DB_PATH" in os.environ:
        del os.environ["MDREADER_DB_PATH"]


@pytest.fixture(scope="function")
def memory_db() -> Database:
    """Create an in-memory database instance."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture(scope="function")
def session(db: Database) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with db.get_session() as sess:
        yield sess


# ============================================================================
# Manager Fixtures
# ============================================================================


@pytest.fixture
def history_manager(db: Database) -> ReadingHistoryManager:
    """Create a reading history manager on the test database."""
    return ReadingHistoryManager(db)


@pytest.fixture
def list_manager(db: Database) -> ReadingListManager:
    """Create a reading list manager on the test database."""
    return ReadingListManager(db)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_markdown() -> str:
    """A document with intro text, both heading levels and a code block."""
    return (
        "Some intro words here.\n"
        "\n"
        "# Getting Started\n"
        "Install the package first.\n"
        "\n"
        "```bash\n"
        "# Not a heading\n"
        "pip install mdreader\n"
        "```\n"
        "\n"
        "## Configuration\n"
        "### Environment\n"
        "Set the variables you need.\n"
        "\n"
        "# Getting Started\n"
        "A second section with the same title.\n"
    )


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create a small content directory tree."""
    root = tmp_path / "content"
    (root / "python_basics").mkdir(parents=True)
    (root / "python_basics" / "advanced_topics").mkdir()
    (root / ".hidden").mkdir()

    (root / "welcome.md").write_text("# Welcome\nHello there reader.\n", encoding="utf-8")
    (root / "index.md").write_text("# Index\n", encoding="utf-8")
    (root / "python_basics" / "variables.md").write_text(
        "---\ntitle: Variables in Python\ntags: [python]\n---\n"
        "Variables hold values.\n\n# Assignment\nUse the equals sign.\n",
        encoding="utf-8",
    )
    (root / "python_basics" / "advanced_topics" / "decorators.md").write_text(
        "# Decorators\nWrap functions.\n## Usage\nApply with at.\n",
        encoding="utf-8",
    )
    (root / "python_basics" / "notes.txt").write_text("not markdown", encoding="utf-8")
    (root / ".hidden" / "secret.md").write_text("# Secret\n", encoding="utf-8")
    return root

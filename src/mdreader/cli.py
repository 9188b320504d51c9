"""Command-line interface for mdreader.

Built with Typer for commands and Rich for output.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import frontmatter
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from .config import VALID_LOG_LEVELS, get_config
from .content import generate_content_index, generate_section_metadata
from .db import get_db
from .history import (
    HistoryFilterOptions,
    HistorySortOption,
    ReadingHistoryManager,
    TimePeriod,
    filter_history,
    get_reading_stats_for_period,
)
from .lists import ReadingListManager
from .markdown import count_words, parse_markdown_into_sections
from .reading import estimate_document_reading_time
from .utils import date_key, format_duration

# Create the main app
app = typer.Typer(
    name="mdreader",
    help="Split Markdown documents into sections and track your reading.",
    no_args_is_help=True,
)

# Create sub-apps for command groups
history_app = typer.Typer(help="Inspect and maintain reading history.", no_args_is_help=True)
app.add_typer(history_app, name="history")

list_app = typer.Typer(help="Manage the list of documents to read later.", no_args_is_help=True)
app.add_typer(list_app, name="list")

# Rich consoles for pretty output; logs go to stderr
console = Console()
err_console = Console(stderr=True)


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def configure_logging(level: str) -> None:
    """Route log records through Rich at the given level."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def read_markdown(file: Path) -> str:
    """Read a Markdown file without its front matter."""
    if not file.exists():
        print_error(f"File not found: {file}")
        raise typer.Exit(1)
    with open(file, "r", encoding="utf-8") as f:
        return frontmatter.load(f).content


def parse_indices(value: str) -> list[int]:
    """Parse a comma separated list of section indices."""
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        print_error(f"Section indices must be integers: {value}")
        raise typer.Exit(1)


def history_manager() -> ReadingHistoryManager:
    return ReadingHistoryManager(get_db(), reading_speed=get_config().reading_speed_wpm)


def list_manager() -> ReadingListManager:
    return ReadingListManager(get_db())


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Split Markdown documents into sections and track your reading."""
    config = get_config()
    errors = config.validate()

    level = config.log_level if config.log_level in VALID_LOG_LEVELS else "WARNING"
    configure_logging("DEBUG" if verbose else level)

    for error in errors:
        print_warning(error)


# ============================================================================
# Markdown Commands
# ============================================================================


@app.command("sections")
def sections(
    file: Path = typer.Argument(..., help="Markdown file to split"),
    as_json: bool = typer.Option(False, "--json", help="Print section metadata as JSON"),
) -> None:
    """Split a Markdown file into heading-bounded sections."""
    doc_sections = parse_markdown_into_sections(read_markdown(file))

    if as_json:
        console.print_json(json.dumps([section.to_metadata() for section in doc_sections]))
        return

    if not doc_sections:
        print_info("No sections found.")
        return

    table = Table(title=f"Sections - {file.name}", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green", max_width=50)
    table.add_column("Level", justify="center")
    table.add_column("Words", justify="right")

    for index, section in enumerate(doc_sections):
        table.add_row(
            str(index),
            section.id,
            section.title,
            str(section.level),
            str(section.word_count),
        )

    console.print(table)


@app.command("words")
def words(
    file: Path = typer.Argument(..., help="Markdown file to count"),
) -> None:
    """Count the words in a Markdown file and estimate reading time."""
    total = count_words(read_markdown(file))
    speed = get_config().reading_speed_wpm
    reading_time = estimate_document_reading_time(total, speed)

    console.print(f"[bold]{file.name}[/bold]")
    console.print(f"  Words: {total}")
    console.print(f"  Reading time: {format_duration(reading_time)} at {speed} wpm")


# ============================================================================
# Content Commands
# ============================================================================


@app.command("metadata")
def metadata(
    content_dir: Optional[Path] = typer.Argument(None, help="Content directory to scan"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
) -> None:
    """Generate section-metadata.json for a content directory."""
    content_dir = content_dir or get_config().content_dir
    if not content_dir.is_dir():
        print_error(f"Content directory not found: {content_dir}")
        raise typer.Exit(1)

    entries = generate_section_metadata(
        content_dir, output, reading_speed=get_config().reading_speed_wpm
    )
    print_success(f"Generated section metadata for {len(entries)} files")


@app.command("index")
def index(
    content_dir: Optional[Path] = typer.Argument(None, help="Content directory to scan"),
) -> None:
    """Generate index.json and directory-structure.json for a content directory."""
    content_dir = content_dir or get_config().content_dir
    result = generate_content_index(content_dir)

    tree = Tree(f"[bold]{content_dir}[/bold]")
    for category in result.categories:
        branch = tree.add(f"[cyan]{category.name}[/cyan] ({category.id})")
        for sub in category.categories:
            branch.add(f"{sub.name} [dim]{len(sub.files)} files[/dim]")
    console.print(tree)

    print_success(
        f"Indexed {result.file_count} files in {len(result.categories)} categories"
    )
    print_info(f"Total file size: {result.total_file_size / 1024 ** 2:.2f} MB")


# ============================================================================
# History Commands
# ============================================================================


@history_app.command("show")
def history_show(
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Filter by category"),
    period: Optional[TimePeriod] = typer.Option(None, "--period", "-p", help="Time period"),
    sort: HistorySortOption = typer.Option(HistorySortOption.RECENT, "--sort", "-s", help="Sort order"),
    search: Optional[str] = typer.Option(None, "--search", help="Search title or path"),
    limit: int = typer.Option(20, "--limit", "-l", help="Max items to show"),
) -> None:
    """Show reading history."""
    items = filter_history(
        history_manager().get_all_history(),
        HistoryFilterOptions(
            category=category,
            time_period=period,
            sort_by=sort,
            limit=limit,
            search_term=search,
        ),
    )

    if not items:
        print_info("No reading history found.")
        return

    table = Table(title="Reading History", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="cyan", max_width=40)
    table.add_column("Path", style="dim", max_width=40)
    table.add_column("Last read", style="green")
    table.add_column("Reads", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Words", justify="right")
    table.add_column("Sections", justify="right")

    for item in items:
        table.add_row(
            item.title,
            item.path,
            date_key(item.last_read_at),
            str(item.read_count),
            format_duration(item.time_spent),
            str(item.words_read),
            str(len(item.completed_section_indices)),
        )

    console.print(table)

    stats = get_reading_stats_for_period(items, period or TimePeriod.ALL)
    print_info(
        f"{stats.total_items} documents, {format_duration(stats.total_time_spent)} read, "
        f"{stats.total_words_read} words"
    )


@history_app.command("add")
def history_add(
    path: str = typer.Argument(..., help="Document path"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Document title"),
    sections: Optional[str] = typer.Option(
        None, "--sections", help="Completed section indices, comma separated"
    ),
    time_spent: Optional[int] = typer.Option(None, "--time", min=0, help="Time spent in seconds"),
    words_read: Optional[int] = typer.Option(None, "--words", min=0, help="Words read"),
) -> None:
    """Record a reading session for a document."""
    try:
        item = history_manager().add_to_reading_history(
            path,
            title or Path(path).stem,
            completed_section_indices=parse_indices(sections) if sections else None,
            time_spent=time_spent * 1000 if time_spent is not None else None,
            words_read=words_read,
        )
    except Exception as e:
        print_error(f"Could not record reading session: {e}")
        raise typer.Exit(1)

    print_success(f"Recorded read #{item.read_count} of {item.path}")


@history_app.command("complete")
def history_complete(
    path: str = typer.Argument(..., help="Document path"),
    sections: str = typer.Argument(..., help="Section indices, comma separated"),
) -> None:
    """Mark sections of a document as completed."""
    indices = parse_indices(sections)
    if not history_manager().mark_sections_completed(path, indices):
        print_error(f"No reading history for: {path}")
        raise typer.Exit(1)

    print_success(f"Marked {len(indices)} section(s) completed in {path}")


@history_app.command("clean")
def history_clean() -> None:
    """Merge duplicate history entries for the same document."""
    try:
        result = history_manager().clean_duplicate_history()
    except Exception as e:
        print_error(f"Cleanup failed, history left unchanged: {e}")
        raise typer.Exit(1)

    print_success(
        f"Removed {result.removed_count} duplicate(s), {result.total_count} item(s) remain"
    )


@history_app.command("clear")
def history_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete all reading history."""
    if not yes and not typer.confirm("Delete all reading history?"):
        raise typer.Exit(0)

    try:
        history_manager().clear_history()
    except Exception as e:
        print_error(f"Could not clear history: {e}")
        raise typer.Exit(1)

    print_success("Reading history cleared")


# ============================================================================
# Reading List Commands
# ============================================================================


@list_app.command("add")
def list_add(
    path: str = typer.Argument(..., help="Document path"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Document title"),
) -> None:
    """Add a document to the reading list."""
    if not list_manager().add_to_reading_list(path, title or Path(path).stem):
        print_warning(f"Already on the reading list: {path}")
        return

    print_success(f"Added to reading list: {path}")


@list_app.command("show")
def list_show(
    pending: bool = typer.Option(False, "--pending", help="Only show unread items"),
) -> None:
    """Show the reading list."""
    items = list_manager().get_all_items()
    if pending:
        items = [item for item in items if not item.completed]

    if not items:
        print_info("Reading list is empty.")
        return

    table = Table(title="Reading List", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan", max_width=40)
    table.add_column("Path", style="green", max_width=40)
    table.add_column("Added")
    table.add_column("Done", justify="center")

    for item in sorted(items, key=lambda i: i.added_at):
        table.add_row(
            item.id,
            item.title,
            item.path,
            date_key(item.added_at),
            "[green]✓[/green]" if item.completed else "-",
        )

    console.print(table)


@list_app.command("toggle")
def list_toggle(
    item_id: str = typer.Argument(..., help="Reading list item ID"),
) -> None:
    """Mark a reading list item read or unread."""
    item = list_manager().toggle_completion(item_id)
    if not item:
        print_error(f"Reading list item not found: {item_id}")
        raise typer.Exit(1)

    state = "read" if item.completed else "unread"
    print_success(f"Marked {item.title} as {state}")


@list_app.command("remove")
def list_remove(
    item_id: str = typer.Argument(..., help="Reading list item ID"),
) -> None:
    """Remove an item from the reading list."""
    if not list_manager().remove_item(item_id):
        print_error(f"Reading list item not found: {item_id}")
        raise typer.Exit(1)

    print_success("Removed from reading list")


@list_app.command("stats")
def list_stats() -> None:
    """Show reading list progress."""
    stats = list_manager().get_completion_stats()

    console.print("[bold]Reading List[/bold]")
    console.print(f"  Total: {stats.total}")
    console.print(f"  Completed: {stats.completed}")
    console.print(f"  Pending: {stats.pending}")
    console.print(f"  Progress: {stats.completion_percentage}%")


@list_app.command("clear")
def list_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove every item from the reading list."""
    if not yes and not typer.confirm("Remove every item from the reading list?"):
        raise typer.Exit(0)

    try:
        list_manager().clear_list()
    except Exception as e:
        print_error(f"Could not clear reading list: {e}")
        raise typer.Exit(1)

    print_success("Reading list cleared")


# ============================================================================
# Utility Commands
# ============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"mdreader version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

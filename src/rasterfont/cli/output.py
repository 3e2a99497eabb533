"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for a conversion run.

    The bar runs from 0 to 100; the description shows the latest message.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        TextColumn("[dim]{task.description}"),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Rasterfont[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_inventory_summary(directory: str, found: int, expected: int, missing: int) -> None:
    """Print how many expected glyph images a folder holds.

    Args:
        directory: Folder that was scanned
        found: Recognized glyph images
        expected: Size of the full character set
        missing: Expected glyphs with no image
    """
    line = Text("  ")
    line.append(directory)
    console.print(line)
    style = "green" if missing == 0 else "yellow"
    console.print(
        f"  [{style}]{found}[/{style}] of {expected} glyphs {SYM_DOT} {missing} missing"
    )


def print_glyph_table(title: str, names: list[str], columns: int = 6) -> None:
    """Print glyph names as a compact grid.

    Args:
        title: Table title
        names: Glyph names to list
        columns: Names per row
    """
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    for _ in range(columns):
        table.add_column()
    for start in range(0, len(names), columns):
        row = names[start : start + columns]
        table.add_row(*row, *([""] * (columns - len(row))))
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    glyphs: int,
    holes: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        glyphs: Number of glyphs FontForge added to the font
        holes: Number of holes traced across all glyphs
        errors: Number of glyphs that failed to vectorize
        avg_time_ms: Average tracing time per glyph in milliseconds
        min_time_ms: Minimum tracing time per glyph in milliseconds
        max_time_ms: Maximum tracing time per glyph in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {glyphs} glyphs {SYM_DOT} {holes} holes {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(Text(details), style="dim")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... stopping FontForge and cleaning up")


def print_cancellation_summary(stage: str, completed: int) -> None:
    """Print cancellation summary.

    Args:
        stage: Phase the run was in when it stopped
        completed: Glyphs vectorized before cancellation
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold] during {stage}")
    console.print(f"  {completed} glyphs vectorized")
    console.print("  No font file created")

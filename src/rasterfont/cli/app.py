"""CLI application entry point for rasterfont.

This module provides the main CLI interface using Typer.
"""

import signal
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from rasterfont import __version__
from rasterfont.build import CancellationToken
from rasterfont.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_glyph_table,
    print_header,
    print_inventory_summary,
    print_step,
    print_success,
)
from rasterfont.config import (
    BuildConfig,
    FontConfig,
    LoggingConfig,
    RasterFontSettings,
    VectorizeConfig,
)
from rasterfont.core import FontConverter
from rasterfont.exceptions import (
    BuildCancelledError,
    FormatError,
    InputError,
    RasterFontError,
    ToolError,
    ToolNotFoundError,
)
from rasterfont.io import take_inventory

# Standard Unix SIGINT exit code
EXIT_CANCELLED = 130

# Create the Typer app
app = typer.Typer(
    name="rasterfont",
    help="Build a font from a folder of transparent PNG glyph images.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Rasterfont[/bold blue] v{__version__}")
        raise typer.Exit()


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[None]:
    """Route Ctrl+C to the cancellation token for the duration of the block."""

    def handler(signum: int, frame: object) -> None:  # noqa: ARG001
        if not token.is_cancelled:
            print_cancellation_notice()
        token.cancel()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build a font from a folder of transparent PNG glyph images."""


@app.command()
def build(
    input_dir: Annotated[
        Path,
        typer.Argument(
            help="Folder holding one PNG per glyph (upper_A.png, 7.png, at.png, ...)",
            show_default=False,
        ),
    ],
    name: Annotated[
        str,
        typer.Option(
            "--name",
            "-n",
            help="Font family name",
        ),
    ] = "Custom Font",
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Where SVGs and the font are written (default: input folder)",
        ),
    ] = None,
    simplification: Annotated[
        float,
        typer.Option(
            "--simplification",
            "-s",
            help="Outline simplification as a fraction of contour perimeter (0-1)",
            min=0.0,
            max=1.0,
        ),
    ] = 0.001,
    em_size: Annotated[
        int,
        typer.Option(
            "--em-size",
            help="Units per em",
            min=16,
            max=16384,
        ),
    ] = 1000,
    fontforge: Annotated[
        Path | None,
        typer.Option(
            "--fontforge",
            help="FontForge executable (default: search known locations and PATH)",
        ),
    ] = None,
    reuse_svgs: Annotated[
        bool,
        typer.Option(
            "--reuse-svgs",
            help="Keep SVGs left by a previous run instead of re-tracing",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Trace every glyph image to SVG, then build the font with FontForge.

    Example:
        rasterfont build ./glyphs --name "My Hand"

    This will write ./glyphs/converted/*.svg and ./glyphs/My_Hand.ttf.
    """
    if not quiet:
        print_header(__version__)

    settings = RasterFontSettings(
        vectorize=VectorizeConfig(simplification=simplification, reuse_existing=reuse_svgs),
        font=FontConfig(name=name, em_size=em_size),
        build=BuildConfig(tool_path=fontforge),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    converter = FontConverter(settings)
    token = CancellationToken()

    try:
        if not quiet:
            print_step(f"Converting {input_dir}")
            with create_progress() as progress, cancel_on_interrupt(token):
                task_id = progress.add_task("Starting", total=100)

                def update_progress(percentage: float, message: str) -> None:
                    progress.update(task_id, completed=percentage, description=message)

                result = converter.convert_sync(input_dir, output_dir, update_progress, token)
        else:
            with cancel_on_interrupt(token):
                result = converter.convert_sync(input_dir, output_dir, token=token)

    except BuildCancelledError as e:
        if not quiet:
            print_cancellation_summary(e.stage, converter.stats.vectorized_count)
        raise typer.Exit(code=EXIT_CANCELLED) from None
    except InputError as e:
        print_error(f"Invalid input: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except FormatError as e:
        print_error(f"Unsupported image: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except ToolNotFoundError as e:
        print_error(str(e), details="Searched:\n" + "\n".join(e.searched))
        raise typer.Exit(code=1)
    except ToolError as e:
        print_error(str(e).splitlines()[0], details=e.diagnostic_text or None)
        raise typer.Exit(code=1)
    except RasterFontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        stats = converter.stats
        print_success(
            output_path=str(result.output_path),
            file_size=_format_file_size(result.output_path),
            total_time_s=stats.duration_seconds,
            glyphs=result.glyph_count,
            holes=stats.holes_traced,
            errors=stats.error_count,
            avg_time_ms=stats.avg_glyph_time_ms,
            min_time_ms=stats.min_glyph_time_ms,
            max_time_ms=stats.max_glyph_time_ms,
        )


@app.command()
def inventory(
    input_dir: Annotated[
        Path,
        typer.Argument(
            help="Folder holding the PNG glyph images",
            show_default=False,
        ),
    ],
    show_found: Annotated[
        bool,
        typer.Option(
            "--show-found",
            help="Also list the glyphs that are present",
        ),
    ] = False,
) -> None:
    """Report which of the expected glyph images a folder holds."""
    try:
        report = take_inventory(input_dir)
    except InputError as e:
        print_error(f"Invalid input: {e.reason}", details=e.path)
        raise typer.Exit(code=1)

    print_step("Glyph inventory")
    print_inventory_summary(
        directory=str(input_dir),
        found=len(report.found),
        expected=len(report.expected),
        missing=len(report.missing),
    )

    if show_found and report.found:
        print_glyph_table("Found", report.found_names)
    if report.missing:
        print_glyph_table("Missing", report.missing)
    if report.unrecognized:
        print_glyph_table("Unrecognized files", [path.name for path in report.unrecognized])


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "42 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()

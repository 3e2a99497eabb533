"""Conversion orchestration: glyph images to a finished font.

This module coordinates the full workflow:

1. Find the recognized glyph images in the input directory
2. Locate FontForge
3. Vectorize each image to SVG, one glyph at a time, in a worker process
4. Build the font with FontForge under supervision

Key components:
- FontConverter: Main orchestrator class
- convert_folder: Synchronous convenience wrapper
"""

import asyncio
import signal
import time
from collections.abc import Callable
from concurrent.futures import Executor, ProcessPoolExecutor
from pathlib import Path
from typing import Any

from rasterfont.build import BuildProcessSupervisor, CancellationToken
from rasterfont.config import RasterFontSettings
from rasterfont.core.vectorizer import vectorize_glyph
from rasterfont.domain import BuildResult, FontBuildJob
from rasterfont.exceptions import BuildCancelledError, InputError
from rasterfont.io import GlyphSource, find_glyph_images
from rasterfont.naming import SPACE_GLYPH
from rasterfont.utils import (
    ProcessingLogger,
    ProcessingStats,
    ProgressCallback,
    ProgressReporter,
    configure_logging,
    configure_worker_logging,
)
from rasterfont.utils.progress import BUILD_START, TOOL_FOUND, VECTORIZE_END, VECTORIZE_START

CONVERTED_DIR = "converted"
FONT_EXTENSION = ".ttf"


def _init_worker() -> None:
    # Ctrl+C is handled by the parent through the cancellation token.
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    configure_worker_logging()


class FontConverter:
    """Orchestrates conversion of a glyph image folder into a font.

    Example:
        settings = RasterFontSettings()
        converter = FontConverter(settings)
        result = converter.convert_sync(Path("glyphs"), progress=print)
    """

    def __init__(
        self,
        config: RasterFontSettings,
        executor_factory: Callable[[], Executor] | None = None,
    ) -> None:
        """Initialize the converter with configuration.

        Args:
            config: rasterfont settings
            executor_factory: Creates the executor used for glyph tracing
                (defaults to a process pool)
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
        )
        self.processing_logger = ProcessingLogger(self.logger)
        self.supervisor = BuildProcessSupervisor(config.build)
        self._executor_factory = executor_factory or self._default_executor

    def _default_executor(self) -> Executor:
        # Glyphs are traced one at a time; one worker keeps tracing off the event loop.
        return ProcessPoolExecutor(
            max_workers=1,
            initializer=_init_worker,
        )

    @property
    def stats(self) -> ProcessingStats:
        return self.processing_logger.stats

    def output_path_for(self, output_dir: Path) -> Path:
        """Font file path inside output_dir, named after the sanitized font name."""
        return output_dir / f"{self.config.font.file_stem}{FONT_EXTENSION}"

    async def convert(
        self,
        input_dir: Path,
        output_dir: Path | None = None,
        progress: ProgressCallback | None = None,
        token: CancellationToken | None = None,
    ) -> BuildResult:
        """Convert a folder of glyph images into a font.

        Args:
            input_dir: Folder holding the PNG glyph images
            output_dir: Where SVGs and the font go (defaults to input_dir)
            progress: Optional callback(percentage, message)
            token: Optional cancellation token

        Returns:
            BuildResult for the finished font

        Raises:
            InputError: Missing folder, no recognized images, or nothing vectorized
            ToolNotFoundError: FontForge could not be located
            ToolFailureError: FontForge exited nonzero
            ToolMisbehavedError: FontForge did not write the font
            BuildCancelledError: The token was raised
        """
        reporter = ProgressReporter(progress)
        token = token or CancellationToken()
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.stats
        stats.start_time = time.time()
        output_dir = output_dir or input_dir

        self.logger.info(
            "Starting conversion",
            input=str(input_dir),
            output=str(output_dir),
            font=self.config.font.name,
            simplification=self.config.vectorize.simplification,
        )

        try:
            sources = find_glyph_images(input_dir)

            executable = self.supervisor.resolve_tool()
            reporter.report(TOOL_FOUND, f"FontForge executable found at: {executable}")

            converted_dir = output_dir / CONVERTED_DIR
            converted_dir.mkdir(parents=True, exist_ok=True)

            svg_paths = await self._vectorize_all(sources, converted_dir, reporter, token)
            if not any(path.stem != SPACE_GLYPH for path in svg_paths):
                raise InputError(str(input_dir), "no glyph images could be vectorized")

            job = FontBuildJob(
                svg_paths=svg_paths,
                font_name=self.config.font.name,
                output_path=self.output_path_for(output_dir),
                em_size=self.config.font.em_size,
                simplification=self.config.vectorize.simplification,
                version=self.config.font.version,
                copyright=self.config.font.copyright,
            )

            token.raise_if_cancelled("build", completed=stats.vectorized_count)
            reporter.report(BUILD_START, "Starting FontForge processing...")
            result = await self.supervisor.run(job, reporter, token)

        except BuildCancelledError:
            stats.was_cancelled = True
            self.logger.info("Conversion cancelled", vectorized=stats.vectorized_count)
            raise
        finally:
            stats.end_time = time.time()

        size_kb = result.file_size / 1000.0
        reporter.report(
            100.0,
            f"Custom font created: {result.output_path.name} (Size: {size_kb:.2f} KB)",
        )

        self.logger.info(
            "Conversion complete",
            output=str(result.output_path),
            glyphs=result.glyph_count,
            vectorized=stats.vectorized_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return result

    async def _vectorize_all(
        self,
        sources: list[GlyphSource],
        converted_dir: Path,
        reporter: ProgressReporter,
        token: CancellationToken,
    ) -> list[Path]:
        """Vectorize glyph images one at a time, off the event loop.

        The space glyph is always included, with or without an image.

        Returns:
            SVG documents written, in glyph order
        """
        tasks: list[tuple[str, Path | None]] = [(s.name, s.path) for s in sources]
        if all(name != SPACE_GLYPH for name, _ in tasks):
            tasks.append((SPACE_GLYPH, None))

        config_dict = self.config.vectorize.model_dump()
        fallback_size = self.config.font.em_size
        loop = asyncio.get_running_loop()
        svg_paths: list[Path] = []
        total = len(tasks)

        self.logger.info("Vectorizing glyphs", glyph_count=total)

        executor = self._executor_factory()
        try:
            for index, (name, image_path) in enumerate(tasks):
                token.raise_if_cancelled("vectorization", completed=index)

                svg_path = converted_dir / f"{name}.svg"
                label = image_path.name if image_path is not None else name

                if self.config.vectorize.reuse_existing and svg_path.exists():
                    self.processing_logger.log_glyph_skipped(name, "existing SVG reused")
                    svg_paths.append(svg_path)
                else:
                    self.processing_logger.log_glyph_start(name)
                    result = await loop.run_in_executor(
                        executor,
                        vectorize_glyph,
                        name,
                        str(image_path) if image_path is not None else None,
                        str(svg_path),
                        config_dict,
                        fallback_size,
                    )
                    written = self._record_result(name, result)
                    if written is not None:
                        svg_paths.append(written)

                token.raise_if_cancelled("vectorization", completed=index + 1)
                percentage = VECTORIZE_START + (index + 1) / total * (VECTORIZE_END - VECTORIZE_START)
                reporter.report(percentage, f"Converting: {label} to SVG")
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        return svg_paths

    def _record_result(self, name: str, result: dict[str, Any]) -> Path | None:
        if "error" in result:
            self.processing_logger.log_glyph_error(
                glyph_name=name,
                error=f"{result['error_type']}: {result['error']}",
                traceback=result.get("traceback"),
            )
            return None

        if result["svg_path"] is None:
            self.processing_logger.log_glyph_skipped(name, "no contours found")
            return None

        self.processing_logger.log_glyph_complete(
            glyph_name=name,
            parts=result["parts"],
            holes=result["holes"],
            duration_ms=result.get("duration_ms", 0.0),
        )
        return Path(result["svg_path"])

    def convert_sync(
        self,
        input_dir: Path,
        output_dir: Path | None = None,
        progress: ProgressCallback | None = None,
        token: CancellationToken | None = None,
    ) -> BuildResult:
        """Run convert() on a fresh event loop."""
        return asyncio.run(self.convert(input_dir, output_dir, progress, token))


def convert_folder(
    input_dir: Path,
    settings: RasterFontSettings | None = None,
    output_dir: Path | None = None,
    progress: ProgressCallback | None = None,
    token: CancellationToken | None = None,
) -> BuildResult:
    """Convert a folder of glyph images into a font with the given settings."""
    converter = FontConverter(settings or RasterFontSettings())
    return converter.convert_sync(input_dir, output_dir, progress, token)

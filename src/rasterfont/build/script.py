"""FontForge build script generation.

The generated script runs under ``fontforge -script``. It imports every SVG
document of a FontBuildJob, cleans the outlines up, writes the font, and
reports progress on stdout with lines of the form::

    PROGRESS:<percentage>|<message>

Percentages run from 0 to 90 across the glyphs; 90 to 100 covers writing
the font file. Each line is flushed as soon as it is written so a
supervising process can stream it.
"""

import inspect
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from string import Template

import structlog

from rasterfont.domain import FontBuildJob
from rasterfont.naming import (
    LOWER_PREFIX,
    SPACE_GLYPH,
    SYMBOL_CODEPOINTS,
    UPPER_PREFIX,
    GlyphNameResolver,
    describe_codepoint,
    resolve_codepoint,
)

logger = structlog.get_logger("rasterfont.script")

PROGRESS_PREFIX = "PROGRESS:"
GLYPH_PHASE_END = 90.0
GENERATE_PHASE = 95.0
VERTICAL_METRIC_RATIO = 0.2
SPACE_WIDTH_DIVISOR = 8
SIDE_BEARING_DIVISOR = 50

_SCRIPT_TEMPLATE = Template(
    '''\
from __future__ import annotations

import os
import string
import sys
import traceback

import fontforge

UPPER_PREFIX = $upper_prefix
LOWER_PREFIX = $lower_prefix
SPACE_GLYPH = $space_glyph
SYMBOL_CODEPOINTS = $symbol_codepoints

FONT_NAME = $font_name
INTERNAL_NAME = $internal_name
VERSION = $version
COPYRIGHT = $copyright
OUTPUT_PATH = $output_path
SVG_FILES = $svg_files
EM_SIZE = $em_size
SIMPLIFICATION = $simplification


$resolve_source

$describe_source

def log_message(message):
    print(message)
    sys.stdout.flush()


def update_progress(progress, message):
    sys.stdout.write(f"$progress_prefix{progress:.2f}|{message}\\n")
    sys.stdout.flush()


def set_metadata(font):
    font.encoding = "UnicodeFull"
    font.fontname = INTERNAL_NAME
    font.familyname = FONT_NAME
    font.fullname = FONT_NAME
    font.version = VERSION
    font.copyright = COPYRIGHT
    font.em = EM_SIZE
    font.ascent = int(EM_SIZE * $metric_ratio)
    font.descent = int(EM_SIZE * $metric_ratio)


def set_vertical_metrics(font):
    font.os2_winascent = font.ascent
    font.os2_windescent = font.descent
    font.os2_typoascent = font.ascent
    font.os2_typodescent = -font.descent
    font.os2_typolinegap = 0
    font.hhea_ascent = font.ascent
    font.hhea_descent = -font.descent
    font.hhea_linegap = 0


def add_glyph(font, file_path, name, codepoint):
    glyph = font.createChar(codepoint)
    if name == SPACE_GLYPH:
        glyph.width = EM_SIZE // $space_divisor
        log_message(f"Space character created with width {glyph.width}")
        return
    glyph.importOutlines(file_path)
    glyph.correctDirection()
    glyph.removeOverlap()
    glyph.simplify()
    glyph.left_side_bearing = EM_SIZE // $bearing_divisor
    glyph.right_side_bearing = EM_SIZE // $bearing_divisor


def build():
    log_message("Starting font generation process...")
    font = fontforge.font()
    try:
        set_metadata(font)
        total = len(SVG_FILES)
        log_message(f"Found {total} SVG files to process (traced with simplification {SIMPLIFICATION})")
        glyph_count = 0

        for index, file_path in enumerate(SVG_FILES):
            progress = (index + 1) / total * $glyph_phase_end
            name = os.path.splitext(os.path.basename(file_path))[0]
            codepoint = resolve_codepoint(name)
            if codepoint is None:
                log_message(f"Skipping {file_path} - could not determine Unicode value")
                update_progress(progress, f"Skipped: {name}")
                continue

            try:
                add_glyph(font, file_path, name, codepoint)
            except Exception as e:
                log_message(f"Error processing glyph {file_path}: {e}")
                log_message(traceback.format_exc())
                update_progress(progress, f"Skipped: {name}")
                continue

            glyph_count += 1
            update_progress(progress, f"Processed glyph: {describe_codepoint(codepoint)}")

        if glyph_count == 0:
            raise RuntimeError("No glyphs were successfully added to the font")

        log_message(f"Successfully added {glyph_count} glyphs to the font")
        set_vertical_metrics(font)

        update_progress($generate_phase, "Generating font file...")
        font.generate(OUTPUT_PATH)

        if not os.path.exists(OUTPUT_PATH):
            raise RuntimeError("Font file was not created despite no errors")

        log_message(f"Font file created successfully. Size: {os.path.getsize(OUTPUT_PATH)} bytes")
        update_progress(100, f"Font generation completed! {glyph_count} glyphs added.")
    finally:
        font.close()


try:
    build()
except Exception as e:
    log_message(f"An error occurred: {e}")
    traceback.print_exc()
    sys.stdout.flush()
    sys.exit(1)
'''
)


class BuildScriptGenerator:
    """Generates the FontForge script for a build job.

    Codepoints are resolved inside the script with the same function and the
    same symbol table the rest of rasterfont uses; their source is embedded
    rather than restated.

    Example:
        script = BuildScriptGenerator(job).generate()
    """

    def __init__(self, job: FontBuildJob) -> None:
        self.job = job

    def generate(self) -> str:
        """Render the script text.

        Documents whose names do not resolve are logged here; the script skips them.
        """
        job = self.job
        resolver = GlyphNameResolver()
        for path in job.svg_paths:
            resolver.resolve(path.stem)

        return _SCRIPT_TEMPLATE.substitute(
            upper_prefix=repr(UPPER_PREFIX),
            lower_prefix=repr(LOWER_PREFIX),
            space_glyph=repr(SPACE_GLYPH),
            symbol_codepoints=repr(dict(SYMBOL_CODEPOINTS)),
            font_name=repr(job.font_name),
            internal_name=repr(job.internal_name),
            version=repr(job.version),
            copyright=repr(job.copyright),
            output_path=repr(str(job.output_path)),
            svg_files=repr([str(p) for p in job.svg_paths]),
            em_size=int(job.em_size),
            simplification=repr(float(job.simplification)),
            resolve_source=inspect.getsource(resolve_codepoint),
            describe_source=inspect.getsource(describe_codepoint),
            progress_prefix=PROGRESS_PREFIX,
            metric_ratio=VERTICAL_METRIC_RATIO,
            space_divisor=SPACE_WIDTH_DIVISOR,
            bearing_divisor=SIDE_BEARING_DIVISOR,
            glyph_phase_end=GLYPH_PHASE_END,
            generate_phase=GENERATE_PHASE,
        )


@contextmanager
def generated_script(content: str) -> Iterator[Path]:
    """Write a script to a temporary file that is removed on exit.

    The file is deleted however the block exits: normally, by exception, or
    by task cancellation.

    Yields:
        Path to the script
    """
    fd, name = tempfile.mkstemp(prefix="rasterfont_", suffix=".py")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not delete build script", path=str(path), error=str(e))
